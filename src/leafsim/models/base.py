"""Process capabilities implemented by model variants.

Each process (photosynthesis, stomatal conductance, energy balance) is an
abstract capability with a single method. A model variant is a frozen
dataclass holding the parameters of one equation set and implementing one
capability. Variants also declare the status variables they read
(``inputs``) and write (``outputs``); a ModelList builds its status schema
from these declarations.

The dispatch layer only ever calls ``run``, which each capability forwards
to its process method, so adding a variant never requires touching the
dispatcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from leafsim.process.atmosphere import Atmosphere
    from leafsim.constants import Constants
    from leafsim.process.model_list import ModelList
    from leafsim.process.table import TimeStepRow

__all__ = [
    "PROCESSES",
    "ModelVariant",
    "PhotosynthesisModel",
    "StomatalConductanceModel",
    "EnergyBalanceModel",
]

PROCESSES = ("photosynthesis", "stomatal_conductance", "energy")


class ModelVariant(ABC):
    """Common declarations of all model variants."""

    process: ClassVar[str]
    inputs: ClassVar[tuple[str, ...]] = ()
    outputs: ClassVar[tuple[str, ...]] = ()
    # Non-float status variables, name -> numpy dtype
    dtypes: ClassVar[dict[str, Any]] = {}
    # Whether the variant reads the meteorological driver
    needs_meteo: ClassVar[bool] = False

    @abstractmethod
    def run(
        self,
        row: TimeStepRow,
        models: ModelList,
        meteo: Atmosphere | None,
        constants: Constants,
    ) -> None:
        """Compute the process for one time step, writing into row."""


class PhotosynthesisModel(ModelVariant):
    """Carbon assimilation capability."""

    process = "photosynthesis"
    # Coupled variants compute Gs through the stomatal conductance slot
    requires_stomatal_conductance: ClassVar[bool] = True

    @abstractmethod
    def photosynthesis(
        self,
        row: TimeStepRow,
        models: ModelList,
        meteo: Atmosphere | None,
        constants: Constants,
    ) -> None:
        """Write assimilation (and coupled variables) for one time step."""

    def run(self, row, models, meteo, constants) -> None:
        self.photosynthesis(row, models, meteo, constants)


class StomatalConductanceModel(ModelVariant):
    """Stomatal conductance capability.

    Conductances follow the form gs = max(gs_min, g0 + closure * A), which
    lets photosynthesis variants solve the coupled system analytically from
    ``g0`` and ``closure`` alone. Variants expose ``g0``, the residual
    conductance to CO2 (mol m-2 s-1), as an attribute.
    """

    process = "stomatal_conductance"
    g0: float

    @abstractmethod
    def closure(self, row: TimeStepRow, meteo: Atmosphere | None) -> float:
        """Slope of the conductance response to assimilation."""

    @abstractmethod
    def conductance(self, closure: float, a: float) -> float:
        """Stomatal conductance to CO2 (mol m-2 s-1)."""

    def stomatal_conductance(
        self,
        row: TimeStepRow,
        models: ModelList,
        meteo: Atmosphere | None,
        constants: Constants,
    ) -> None:
        row.Gs = self.conductance(self.closure(row, meteo), row.A)

    def run(self, row, models, meteo, constants) -> None:
        self.stomatal_conductance(row, models, meteo, constants)


class EnergyBalanceModel(ModelVariant):
    """Leaf energy balance capability."""

    process = "energy"
    needs_meteo = True

    @abstractmethod
    def energy_balance(
        self,
        row: TimeStepRow,
        models: ModelList,
        meteo: Atmosphere,
        constants: Constants,
    ) -> None:
        """Solve the energy balance for one time step, writing into row."""

    def run(self, row, models, meteo, constants) -> None:
        self.energy_balance(row, models, meteo, constants)
