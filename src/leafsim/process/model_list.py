"""Simulation unit pairing model variants with their status table.

A ModelList holds at most one variant per process slot and owns the
TimeStepTable all of them read from and write to. The table schema is the
ordered union of the variants' declared inputs and outputs (plus any extra
variables given in the initial status), fixed at construction.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

import numpy as np

from leafsim.errors import IncompatibleModel, LengthMismatch, UnknownVariable
from leafsim.models.base import (
    EnergyBalanceModel,
    ModelVariant,
    PhotosynthesisModel,
    StomatalConductanceModel,
)
from leafsim.process.table import (
    TimeStepColumn,
    TimeStepRow,
    TimeStepTable,
    _is_sequence,
    sentinel_for,
)

__all__ = ["ModelList", "SLOTS", "variables", "to_initialize"]

# Slot name -> capability expected in that slot
SLOTS = {
    "photosynthesis": PhotosynthesisModel,
    "stomatal_conductance": StomatalConductanceModel,
    "energy": EnergyBalanceModel,
}

# Variants taking part in each process call
_PROCESS_SLOTS = {
    None: ("photosynthesis", "stomatal_conductance", "energy"),
    "photosynthesis": ("photosynthesis", "stomatal_conductance"),
    "stomatal_conductance": ("stomatal_conductance",),
    "energy": ("photosynthesis", "stomatal_conductance", "energy"),
}


def variables(*models: ModelVariant) -> dict[str, Any]:
    """Ordered union of the inputs and outputs of models, name -> dtype.

    A variable declared by several models keeps its first position; its
    dtype is replaced by a later declaration only if it differs.
    """
    schema: dict[str, Any] = {}
    for model in models:
        if model is None:
            continue
        for name in (*model.inputs, *model.outputs):
            dtype = np.dtype(model.dtypes.get(name, np.float64))
            if name not in schema or schema[name] != dtype:
                schema[name] = dtype
    return schema


def to_initialize(*models: ModelVariant) -> tuple[str, ...]:
    """Inputs of models that none of them compute, in declaration order."""
    models = [m for m in models if m is not None]
    produced = {name for m in models for name in m.outputs}
    needed: dict[str, None] = {}
    for m in models:
        for name in m.inputs:
            if name not in produced:
                needed[name] = None
    return tuple(needed)


class ModelList:
    """Model variants of a leaf and their status over time steps.

    Parameters
    ----------
    photosynthesis : PhotosynthesisModel, optional
        Carbon assimilation variant (e.g. Fvcb)
    stomatal_conductance : StomatalConductanceModel, optional
        Stomatal conductance variant (e.g. Medlyn)
    energy : EnergyBalanceModel, optional
        Energy balance variant (e.g. Monteith)
    status : mapping, optional
        Initial values, name -> scalar or sequence. Sequences give several
        time steps; scalars are broadcast. Variables not given hold their
        sentinel value until initialized.

    Raises
    ------
    IncompatibleModel
        If a variant does not implement its slot's process, or a coupled
        photosynthesis variant has no stomatal conductance partner.
    SchemaMismatch
        If status sequences cannot be broadcast together.

    Examples
    --------
    >>> leaf = ModelList(
    ...     photosynthesis=Fvcb(),
    ...     stomatal_conductance=Medlyn(0.03, 12.0),
    ...     status={"Tl": [25.0, 26.0], "PPFD": 1000.0, "Cs": 400.0, "Dl": 1.0},
    ... )
    >>> len(leaf)
    2
    >>> leaf.required_inputs()
    ('PPFD', 'Tl', 'Cs', 'Dl')
    """

    def __init__(
        self,
        photosynthesis: PhotosynthesisModel | None = None,
        stomatal_conductance: StomatalConductanceModel | None = None,
        energy: EnergyBalanceModel | None = None,
        status: Mapping[str, Any] | None = None,
    ):
        models = {
            "photosynthesis": photosynthesis,
            "stomatal_conductance": stomatal_conductance,
            "energy": energy,
        }
        for slot, model in models.items():
            if model is not None and not isinstance(model, SLOTS[slot]):
                raise IncompatibleModel(
                    f"{type(model).__name__} is not a {SLOTS[slot].__name__} "
                    f"and cannot be used for {slot}"
                )
        if (
            photosynthesis is not None
            and photosynthesis.requires_stomatal_conductance
            and stomatal_conductance is None
        ):
            raise IncompatibleModel(
                f"{type(photosynthesis).__name__} needs a stomatal_conductance model"
            )

        self._models = models
        status = dict(status or {})
        schema = variables(*models.values())
        for name, value in status.items():
            if name not in schema:
                schema[name] = np.asarray(value).dtype
        record = {
            name: status.get(name, sentinel_for(dtype)) for name, dtype in schema.items()
        }
        self._status = TimeStepTable(record, dtypes=schema)

    @classmethod
    def _from_parts(cls, models: dict, status: TimeStepTable) -> ModelList:
        obj = cls.__new__(cls)
        obj._models = dict(models)
        obj._status = status
        return obj

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    @property
    def photosynthesis(self) -> PhotosynthesisModel | None:
        return self._models["photosynthesis"]

    @property
    def stomatal_conductance(self) -> StomatalConductanceModel | None:
        return self._models["stomatal_conductance"]

    @property
    def energy(self) -> EnergyBalanceModel | None:
        return self._models["energy"]

    @property
    def models(self) -> dict[str, ModelVariant | None]:
        """Installed variants by slot (a copy of the mapping)."""
        return dict(self._models)

    def model(self, process: str) -> ModelVariant | None:
        """Variant installed for process, None for an empty slot."""
        try:
            return self._models[process]
        except KeyError:
            raise ValueError(f"Unknown process '{process}', expected one of {tuple(SLOTS)}") from None

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def status(self) -> TimeStepTable:
        return self._status

    def participants(self, process: str | None = None) -> list[ModelVariant]:
        """Installed variants taking part in process (all of them for None)."""
        try:
            slots = _PROCESS_SLOTS[process]
        except KeyError:
            raise ValueError(f"Unknown process '{process}', expected one of {tuple(SLOTS)}") from None
        return [self._models[s] for s in slots if self._models[s] is not None]

    def required_inputs(self, process: str | None = None) -> tuple[str, ...]:
        """Variables the caller must initialize before running process.

        With process None, the variables needed by the whole set of models.
        """
        return to_initialize(*self.participants(process))

    def uninitialized(self, process: str | None = None) -> tuple[str, ...]:
        """Required inputs still holding their sentinel on at least one row."""
        missing = []
        for name in self.required_inputs(process):
            values = self._status.values(name)
            if np.any(values == sentinel_for(values.dtype)):
                missing.append(name)
        return tuple(missing)

    def is_initialized(self, process: str | None = None) -> bool:
        """True if no required input holds its sentinel on any row."""
        return not self.uninitialized(process)

    def initialize_status(self, **values: Any) -> None:
        """Set status variables on every row.

        Scalars are broadcast to all rows; sequences must give one value per
        row. All names and lengths are checked before any value is written.

        Raises
        ------
        UnknownVariable
            If a name is not in the status schema.
        LengthMismatch
            If a sequence length differs from the number of rows.
        """
        unknown = [k for k in values if k not in self._status]
        if unknown:
            raise UnknownVariable(
                f"Variables {unknown} are not used by the models of this ModelList. "
                f"Known variables: {self._status.names}"
            )
        n = len(self._status)
        for name, value in values.items():
            if _is_sequence(value) and len(value) != n:
                raise LengthMismatch(
                    f"'{name}' has {len(value)} values for a status of {n} time steps"
                )
        for name, value in values.items():
            self._status.set_column(name, value)

    # ------------------------------------------------------------------
    # Table protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._status)

    def __getitem__(self, key) -> TimeStepRow | TimeStepColumn:
        return self._status[key]

    def __setitem__(self, key, value) -> None:
        self._status[key] = value

    def __iter__(self) -> Iterator[TimeStepRow]:
        return iter(self._status)

    def append(self, record: Mapping[str, Any] | TimeStepRow) -> TimeStepRow:
        """Add a time step to the status."""
        return self._status.append(record)

    def to_dataframe(self):
        return self._status.to_dataframe()

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def copy(self) -> ModelList:
        """Copy with an independent status; the (immutable) variants are shared."""
        return self._from_parts(self._models, self._status.copy())

    def __copy__(self) -> ModelList:
        return self.copy()

    def __deepcopy__(self, memo) -> ModelList:
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ModelList):
            return NotImplemented
        return self._models == other._models and self._status.equals(other._status)

    __hash__ = None

    def __repr__(self) -> str:
        models = ", ".join(
            f"{slot}={type(m).__name__}" for slot, m in self._models.items() if m is not None
        )
        return f"ModelList({models}; {len(self)} time step(s), {len(self._status.names)} variables)"
