"""
leafsim model variants.

Importing this package registers every built-in variant in the model
registry.
"""

from leafsim.models.base import (
    PROCESSES,
    EnergyBalanceModel,
    ModelVariant,
    PhotosynthesisModel,
    StomatalConductanceModel,
)
from leafsim.models.energy import Monteith
from leafsim.models.photosynthesis import Fvcb, FvcbIter, FvcbParameters, FvcbRaw
from leafsim.models.registry import available_models, get_model, register_model
from leafsim.models.stomatal import ConstantGs, Medlyn

__all__ = [
    "PROCESSES",
    "ModelVariant",
    "PhotosynthesisModel",
    "StomatalConductanceModel",
    "EnergyBalanceModel",
    "FvcbParameters",
    "FvcbRaw",
    "Fvcb",
    "FvcbIter",
    "Medlyn",
    "ConstantGs",
    "Monteith",
    "register_model",
    "get_model",
    "available_models",
]
