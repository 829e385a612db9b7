"""
leafsim process package

- Pure physics kernels (numba JIT)
- Meteorological drivers (Atmosphere, Weather)
- Fixed-schema status tables with live row/column views
- ModelList simulation units and the process entry points
"""

from leafsim.process import kernels
from leafsim.process.atmosphere import Atmosphere, Weather
from leafsim.process.table import (
    FLOAT_SENTINEL,
    INT_SENTINEL,
    TimeStepColumn,
    TimeStepRow,
    TimeStepTable,
)
from leafsim.process.model_list import ModelList, to_initialize, variables
from leafsim.process.dispatch import (
    energy_balance,
    energy_balance_inplace,
    photosynthesis,
    photosynthesis_inplace,
    run_process,
    stomatal_conductance,
    stomatal_conductance_inplace,
)

__all__ = [
    "kernels",
    "Atmosphere",
    "Weather",
    "FLOAT_SENTINEL",
    "INT_SENTINEL",
    "TimeStepTable",
    "TimeStepRow",
    "TimeStepColumn",
    "ModelList",
    "to_initialize",
    "variables",
    "photosynthesis",
    "photosynthesis_inplace",
    "stomatal_conductance",
    "stomatal_conductance_inplace",
    "energy_balance",
    "energy_balance_inplace",
    "run_process",
]
