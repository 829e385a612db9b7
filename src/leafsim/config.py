"""
Model file loading.

A model file maps component names (e.g. one leaf of a plant) to the model
variants used for each process, in TOML or YAML:

    [leaf.photosynthesis]
    use = "Fvcb"
    parameters = { VcMaxRef = 150.0 }

    [leaf.stomatal_conductance]
    use = "Medlyn"
    parameters = { g0 = 0.03, g1 = 12.0 }

    [leaf.energy]
    use = "Monteith"

Variant names are resolved through the model registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Union

import toml
import yaml

from leafsim.errors import IncompatibleModel, UnknownVariable
from leafsim.logging import get_logger
from leafsim.models.base import PROCESSES
from leafsim.models.registry import get_model
from leafsim.process.model_list import ModelList

__all__ = ["read_model", "models_from_dict", "init_status"]

log = get_logger("config")


def read_model(path: Union[str, Path]) -> Dict[str, ModelList]:
    """
    Read a model file into one ModelList per component.

    Args:
        path: .toml, .yml or .yaml file

    Returns:
        Dictionary of component name -> ModelList, in file order

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the extension is not supported or the file is malformed
        UnknownModel: If a variant name is not registered
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")

    suffix = path.suffix.lower()
    with open(path, "r") as f:
        if suffix == ".toml":
            raw = toml.load(f)
        elif suffix in (".yml", ".yaml"):
            raw = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported model file format '{suffix}', use .toml or .yaml")

    if not isinstance(raw, Mapping):
        raise ValueError(f"Model file {path} must map component names to processes")

    models = models_from_dict(raw)
    log.info("model_file_loaded", path=str(path), components=list(models))
    return models


def models_from_dict(data: Mapping[str, Any]) -> Dict[str, ModelList]:
    """Build ModelLists from a parsed model file mapping."""
    models = {}
    for component, processes in data.items():
        if not isinstance(processes, Mapping):
            raise ValueError(f"Component '{component}' must map process names to models")
        variants = {}
        for process, entry in processes.items():
            if process not in PROCESSES:
                raise ValueError(
                    f"Unknown process '{process}' for component '{component}', "
                    f"expected one of {PROCESSES}"
                )
            if isinstance(entry, str):
                entry = {"use": entry}
            if not isinstance(entry, Mapping) or "use" not in entry:
                raise ValueError(f"'{component}.{process}' needs a 'use' entry naming the model")
            cls = get_model(process, entry["use"])
            params = dict(entry.get("parameters") or {})
            try:
                variants[process] = cls(**params)
            except TypeError as e:
                raise IncompatibleModel(
                    f"Invalid parameters for {entry['use']} ({component}.{process}): {e}"
                ) from e
        models[component] = ModelList(**variants)
        log.debug("component_built", component=component, models=sorted(variants))
    return models


def init_status(models: Union[ModelList, Mapping[str, ModelList]], **values: Any) -> None:
    """Initialize status variables of a ModelList or of every ModelList of a mapping.

    Only the variables present in each ModelList's schema are set, so a
    mapping of heterogeneous components can be initialized in one call.

    Raises:
        UnknownVariable: If a variable is used by none of the ModelLists
    """
    if isinstance(models, ModelList):
        models.initialize_status(**values)
        return

    unused = [k for k in values if not any(k in ml.status for ml in models.values())]
    if unused:
        raise UnknownVariable(f"Variables {unused} are not used by any component")

    for ml in models.values():
        ml.initialize_status(**{k: v for k, v in values.items() if k in ml.status})
