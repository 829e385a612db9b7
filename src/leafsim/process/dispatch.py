"""Process entry points.

Each process has a mutating form (``*_inplace``, returns None) and a
copy-returning form. Both accept:

- a ModelList and an Atmosphere: the driver is applied to every time step;
- a ModelList and a Weather: one driver per time step. A single-row status
  is first extended to the length of the weather; a single-record weather
  is applied to every time step; other length mismatches raise
  LengthMismatch;
- a list/tuple or dict of ModelLists and either driver shape: the rule
  above applied per entry. The copy-returning form keeps the container
  type, and a ModelList may appear only once in a collection.

Which equations run is decided only by the variant in the process slot of
each ModelList: the dispatcher calls its ``run`` method. All entries are
validated before any status is modified.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from leafsim.constants import DEFAULT_CONSTANTS, Constants
from leafsim.errors import LengthMismatch, UninitializedInput
from leafsim.process.atmosphere import Atmosphere, Weather
from leafsim.process.model_list import ModelList

__all__ = [
    "photosynthesis",
    "photosynthesis_inplace",
    "stomatal_conductance",
    "stomatal_conductance_inplace",
    "energy_balance",
    "energy_balance_inplace",
    "run_process",
]


def _entries(obj) -> list[ModelList]:
    if isinstance(obj, ModelList):
        entries = [obj]
    elif isinstance(obj, Mapping):
        entries = list(obj.values())
    elif isinstance(obj, (list, tuple)):
        entries = list(obj)
    else:
        raise TypeError(
            f"Expected a ModelList, or a list or dict of ModelLists, got {type(obj).__name__}"
        )
    seen = set()
    for entry in entries:
        if not isinstance(entry, ModelList):
            raise TypeError(f"Expected ModelList entries, got {type(entry).__name__}")
        if id(entry) in seen:
            raise ValueError("The same ModelList appears more than once in the collection")
        seen.add(id(entry))
    return entries


def _plan(ml: ModelList, meteo, process: str) -> tuple[int, list]:
    """Rows to extend the status by, and the driver for each row.

    Raises before anything is modified.
    """
    model = ml.model(process)
    if model is None:
        return 0, []

    missing = ml.uninitialized(process)
    if missing:
        raise UninitializedInput(missing, process)

    needs_meteo = any(m.needs_meteo for m in ml.participants(process))
    if meteo is None and needs_meteo:
        raise ValueError(f"{type(model).__name__} needs meteorological data for {process}")

    n_rows = len(ml)
    if meteo is None or isinstance(meteo, Atmosphere):
        return 0, [meteo] * n_rows
    if not isinstance(meteo, Weather):
        raise TypeError(f"Expected an Atmosphere or a Weather, got {type(meteo).__name__}")

    n_meteo = len(meteo)
    if n_meteo == n_rows:
        return 0, list(meteo)
    if n_meteo == 1:
        return 0, [meteo[0]] * n_rows
    if n_rows == 1:
        return n_meteo - 1, list(meteo)
    raise LengthMismatch(
        f"The status has {n_rows} time steps but the weather has {n_meteo}; "
        "they must be equal or one of them must be 1"
    )


def run_process(obj, meteo=None, constants: Constants | None = None, *, process: str) -> None:
    """Run process in place on a ModelList or a collection of ModelLists."""
    constants = constants or DEFAULT_CONSTANTS
    entries = _entries(obj)

    plans = [_plan(ml, meteo, process) for ml in entries]

    for ml, (n_extend, drivers) in zip(entries, plans):
        if not drivers:
            continue
        if n_extend:
            first = ml[0].to_dict()
            for _ in range(n_extend):
                ml.append(first)
        model = ml.model(process)
        for i, driver in enumerate(drivers):
            model.run(ml[i], ml, driver, constants)


def _copy_and_run(obj, meteo, constants, process: str) -> Any:
    _entries(obj)
    result = copy.deepcopy(obj)
    run_process(result, meteo, constants, process=process)
    return result


def photosynthesis_inplace(obj, meteo=None, constants: Constants | None = None) -> None:
    """
    Compute photosynthesis in place for the photosynthesis variant of obj.

    Args:
        obj: ModelList, or list/dict of ModelLists
        meteo: Atmosphere or Weather; only needed by variants reading the
            atmosphere (e.g. FvcbIter)
        constants: Physical constants, defaults to Constants()

    Raises:
        UninitializedInput: If a required variable is not initialized.
        LengthMismatch: If status and weather lengths are incompatible.
    """
    run_process(obj, meteo, constants, process="photosynthesis")


def photosynthesis(obj, meteo=None, constants: Constants | None = None):
    """Copy-returning form of photosynthesis_inplace."""
    return _copy_and_run(obj, meteo, constants, "photosynthesis")


def stomatal_conductance_inplace(obj, meteo=None, constants: Constants | None = None) -> None:
    """Compute stomatal conductance in place (see photosynthesis_inplace)."""
    run_process(obj, meteo, constants, process="stomatal_conductance")


def stomatal_conductance(obj, meteo=None, constants: Constants | None = None):
    """Copy-returning form of stomatal_conductance_inplace."""
    return _copy_and_run(obj, meteo, constants, "stomatal_conductance")


def energy_balance_inplace(obj, meteo, constants: Constants | None = None) -> None:
    """
    Compute the leaf energy balance in place for the energy variant of obj.

    The energy variant drives the photosynthesis and stomatal conductance
    variants of the same ModelList when they are installed.

    Args:
        obj: ModelList, or list/dict of ModelLists
        meteo: Atmosphere or Weather
        constants: Physical constants, defaults to Constants()

    Raises:
        UninitializedInput: If a required variable is not initialized.
        LengthMismatch: If status and weather lengths are incompatible.
        ValueError: If the same ModelList appears twice in obj.

    Note:
        constants is used by the solver only. The quantities an Atmosphere
        derives (rho, lambda_v, gamma, epsilon) come from the constants the
        record was built with, so pass the same Constants to both when
        overriding them.
    """
    run_process(obj, meteo, constants, process="energy")


def energy_balance(obj, meteo, constants: Constants | None = None):
    """Copy-returning form of energy_balance_inplace."""
    return _copy_and_run(obj, meteo, constants, "energy")
