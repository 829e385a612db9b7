"""Stomatal conductance model variants.

- Medlyn: optimal stomatal conductance of Medlyn et al. (2011)
- ConstantGs: fixed stomatal conductance

Conductances are to CO2, in mol m-2 s-1.
"""

from __future__ import annotations

from dataclasses import dataclass

from leafsim.models.base import StomatalConductanceModel
from leafsim.models.registry import register_model
from leafsim.process.kernels.conductance import medlyn_closure, stomatal_conductance

__all__ = ["Medlyn", "ConstantGs"]


@register_model("stomatal_conductance")
@dataclass(frozen=True)
class Medlyn(StomatalConductanceModel):
    """Medlyn et al. (2011) stomatal conductance.

        Gs = max(gs_min, g0 + (1 + g1 / sqrt(Dl)) * A / Cs)

    Attributes
    ----------
    g0 : float
        Residual conductance (mol m-2 s-1)
    g1 : float
        Slope parameter (kPa^0.5)
    gs_min : float
        Lower bound of the conductance (mol m-2 s-1)

    References
    ----------
    Medlyn, B. E., et al. 2011. Reconciling the optimal and empirical
    approaches to modelling stomatal conductance. Global Change Biology
    17: 2134-44.
    """

    g0: float
    g1: float
    gs_min: float = 0.001

    inputs = ("Dl", "Cs", "A")
    outputs = ("Gs",)

    def closure(self, row, meteo) -> float:
        return medlyn_closure(self.g1, row.Dl, row.Cs)

    def conductance(self, closure: float, a: float) -> float:
        return stomatal_conductance(self.g0, closure, a, self.gs_min)


@register_model("stomatal_conductance")
@dataclass(frozen=True)
class ConstantGs(StomatalConductanceModel):
    """Constant stomatal conductance, independent of assimilation.

    Expressed as g0 = gs and a zero closure term, so coupled photosynthesis
    variants reduce to a fixed conductance.
    """

    gs: float

    inputs = ()
    outputs = ("Gs",)

    @property
    def g0(self) -> float:
        return self.gs

    def closure(self, row, meteo) -> float:
        return 0.0

    def conductance(self, closure: float, a: float) -> float:
        return self.gs

    def stomatal_conductance(self, row, models, meteo, constants) -> None:
        # No dependence on A, which may not be part of the status
        row.Gs = self.gs
