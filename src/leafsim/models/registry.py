"""Model variant registry.

Variants register themselves under a name for their process with a class
decorator; the model file loader resolves names through this registry.

    >>> @register_model("stomatal_conductance")
    ... @dataclass(frozen=True)
    ... class BallBerry(StomatalConductanceModel): ...

Registration happens at import time (in leafsim.models.__init__).
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Type

from leafsim.errors import IncompatibleModel, UnknownModel
from leafsim.models.base import PROCESSES, ModelVariant

__all__ = ["register_model", "get_model", "available_models", "MODEL_REGISTRY"]

MODEL_REGISTRY: Dict[str, Dict[str, Type[ModelVariant]]] = {p: {} for p in PROCESSES}


def register_model(process: str, name: Optional[str] = None) -> Callable[[Type], Type]:
    """Class decorator registering a variant for a process.

    Args:
        process: One of PROCESSES
        name: Name used in model files, defaults to the class name
    """
    if process not in MODEL_REGISTRY:
        raise ValueError(f"Unknown process '{process}', expected one of {PROCESSES}")

    def decorator(cls: Type) -> Type:
        if getattr(cls, "process", None) != process:
            raise IncompatibleModel(
                f"{cls.__name__} implements '{getattr(cls, 'process', None)}', "
                f"cannot register it for '{process}'"
            )
        MODEL_REGISTRY[process][name or cls.__name__] = cls
        return cls

    return decorator


def get_model(process: str, name: str) -> Type[ModelVariant]:
    """Look up a registered variant class.

    Raises:
        UnknownModel: If no variant is registered under name for process.
    """
    try:
        return MODEL_REGISTRY[process][name]
    except KeyError:
        known = sorted(MODEL_REGISTRY.get(process, {}))
        raise UnknownModel(
            f"No '{process}' model named '{name}'. Available: {known}"
        ) from None


def available_models(process: Optional[str] = None) -> Dict[str, list]:
    """Registered variant names, per process."""
    processes = (process,) if process else PROCESSES
    return {p: sorted(MODEL_REGISTRY[p]) for p in processes}
