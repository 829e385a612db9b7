"""
leafsim: Leaf-scale biophysics simulation.

Couples photosynthesis, stomatal conductance and the leaf energy balance
for a single leaf under prescribed meteorological drivers. Processes are
implemented by interchangeable model variants grouped in a ModelList, which
owns a fixed-schema status table of one row per time step.

Subpackages:
    process: Physics kernels, status tables, meteorological drivers and
        the process entry points.
    models: Photosynthesis, stomatal conductance and energy balance
        variants, and the model registry.

Example:
    >>> from leafsim import Atmosphere, Fvcb, Medlyn, Monteith, ModelList
    >>> from leafsim import energy_balance_inplace
    >>>
    >>> leaf = ModelList(
    ...     photosynthesis=Fvcb(),
    ...     stomatal_conductance=Medlyn(0.03, 12.0),
    ...     energy=Monteith(),
    ...     status={"Rs": 13.747, "sky_fraction": 1.0, "PPFD": 1500.0, "d": 0.03},
    ... )
    >>> meteo = Atmosphere(T=22.0, Wind=0.8333, P=101.325, Rh=0.4490995)
    >>> energy_balance_inplace(leaf, meteo)
    >>> leaf[0].Tl, leaf[0].A
"""

from leafsim.constants import DEFAULT_CONSTANTS, Constants
from leafsim.errors import (
    IncompatibleModel,
    LeafSimError,
    LengthMismatch,
    SchemaMismatch,
    UninitializedInput,
    UnknownModel,
    UnknownVariable,
)
from leafsim.logging import configure_logging, get_logger
from leafsim.process import (
    Atmosphere,
    ModelList,
    TimeStepTable,
    Weather,
    energy_balance,
    energy_balance_inplace,
    photosynthesis,
    photosynthesis_inplace,
    stomatal_conductance,
    stomatal_conductance_inplace,
    to_initialize,
    variables,
)
from leafsim.models import (
    ConstantGs,
    Fvcb,
    FvcbIter,
    FvcbRaw,
    Medlyn,
    Monteith,
    available_models,
    register_model,
)
from leafsim.config import init_status, read_model

__version__ = "0.1.0"

__all__ = [
    "Constants",
    "DEFAULT_CONSTANTS",
    "LeafSimError",
    "UninitializedInput",
    "SchemaMismatch",
    "LengthMismatch",
    "UnknownVariable",
    "IncompatibleModel",
    "UnknownModel",
    "configure_logging",
    "get_logger",
    "Atmosphere",
    "Weather",
    "TimeStepTable",
    "ModelList",
    "variables",
    "to_initialize",
    "photosynthesis",
    "photosynthesis_inplace",
    "stomatal_conductance",
    "stomatal_conductance_inplace",
    "energy_balance",
    "energy_balance_inplace",
    "FvcbRaw",
    "Fvcb",
    "FvcbIter",
    "Medlyn",
    "ConstantGs",
    "Monteith",
    "register_model",
    "available_models",
    "read_model",
    "init_status",
]
