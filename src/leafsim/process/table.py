"""Per-timestep status storage.

Provides:
- TimeStepTable: fixed-schema table of status values, one row per time step
- TimeStepRow: live view on one row of a table
- TimeStepColumn: live view on one column of a table

Values are stored column-wise as numpy arrays. Row and column views hold a
reference to their table plus an index (or a variable name) and never copy
data: writing through a view writes into the table, and writes to the table
are visible through every existing view.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

import numpy as np
import pandas as pd

from leafsim.errors import LengthMismatch, SchemaMismatch, UnknownVariable

__all__ = [
    "FLOAT_SENTINEL",
    "INT_SENTINEL",
    "sentinel_for",
    "TimeStepTable",
    "TimeStepRow",
    "TimeStepColumn",
]

FLOAT_SENTINEL = -999.99
INT_SENTINEL = -999


def sentinel_for(dtype) -> Any:
    """Value marking a status variable as not initialized yet."""
    dtype = np.dtype(dtype)
    if dtype == np.bool_:
        return False
    if np.issubdtype(dtype, np.integer):
        return INT_SENTINEL
    return FLOAT_SENTINEL


def _is_sequence(value) -> bool:
    return isinstance(value, (list, tuple, np.ndarray, pd.Series, TimeStepColumn))


class TimeStepTable:
    """Status values of a simulation, one row per time step.

    Parameters
    ----------
    record : mapping
        Variable name -> value. Values may be scalars or sequences; scalars
        and length-1 sequences are broadcast to the longest sequence.
    dtypes : mapping, optional
        Variable name -> numpy dtype for non-float variables.

    Raises
    ------
    SchemaMismatch
        If sequence lengths are neither 1 nor the maximum length.

    Examples
    --------
    >>> table = TimeStepTable({"Tl": [20.0, 25.0], "PPFD": 1500.0})
    >>> len(table)
    2
    >>> table[0].Tl
    20.0
    >>> list(table["PPFD"])
    [1500.0, 1500.0]
    """

    def __init__(self, record: Mapping[str, Any], dtypes: Mapping[str, Any] | None = None):
        dtypes = dict(dtypes or {})
        lengths = {}
        for name, value in record.items():
            if _is_sequence(value):
                lengths[name] = len(value)

        n_rows = max(lengths.values(), default=1)
        bad = {k: n for k, n in lengths.items() if n not in (1, n_rows)}
        if bad or n_rows == 0:
            raise SchemaMismatch(
                f"Variables must have length 1 or {n_rows} to be broadcast, got {bad or lengths}"
            )

        self._names: tuple[str, ...] = tuple(record)
        self._columns: dict[str, np.ndarray] = {}
        for name, value in record.items():
            dtype = dtypes.get(name, np.float64)
            if _is_sequence(value):
                arr = np.asarray(value, dtype=dtype)
                if arr.shape[0] == 1:
                    arr = np.repeat(arr, n_rows)
                else:
                    arr = arr.copy()
            else:
                arr = np.full(n_rows, value, dtype=dtype)
            self._columns[name] = arr

    @classmethod
    def _from_columns(cls, columns: dict[str, np.ndarray]) -> TimeStepTable:
        table = cls.__new__(cls)
        table._names = tuple(columns)
        table._columns = columns
        return table

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    @property
    def names(self) -> tuple[str, ...]:
        """Variable names, in schema order."""
        return self._names

    def keys(self) -> tuple[str, ...]:
        return self._names

    def dtype(self, name: str) -> np.dtype:
        return self._column_array(name).dtype

    def __contains__(self, name) -> bool:
        return name in self._columns

    def __len__(self) -> int:
        if not self._names:
            return 0
        return self._columns[self._names[0]].shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        return len(self), len(self._names)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _column_array(self, name: str) -> np.ndarray:
        try:
            return self._columns[name]
        except KeyError:
            raise UnknownVariable(f"'{name}' is not a variable of this status") from None

    def _row_index(self, i: int) -> int:
        n = len(self)
        if not -n <= i < n:
            raise IndexError(f"Time step {i} out of range for a table of {n} rows")
        return i % n

    def _get(self, i: int, name: str):
        return self._column_array(name)[i].item()

    def _set(self, i: int, name: str, value) -> None:
        self._column_array(name)[i] = value

    def row(self, i: int) -> TimeStepRow:
        """Live view on time step i."""
        return TimeStepRow(self, self._row_index(i))

    def column(self, name: str) -> TimeStepColumn:
        """Live view on variable name across all time steps."""
        self._column_array(name)
        return TimeStepColumn(self, name)

    def rows(self) -> Iterator[TimeStepRow]:
        for i in range(len(self)):
            yield TimeStepRow(self, i)

    def __iter__(self) -> Iterator[TimeStepRow]:
        return self.rows()

    def __getitem__(self, key):
        if isinstance(key, str):
            return self.column(key)
        if isinstance(key, tuple):
            i, name = key
            return self._get(self._row_index(i), name)
        return self.row(key)

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple):
            i, name = key
            self._set(self._row_index(i), name, value)
            return
        self.set_column(key, value)

    def set_column(self, name: str, value) -> None:
        """Assign all time steps of a variable.

        A scalar is broadcast to every row; a sequence must have exactly one
        value per row.

        Raises
        ------
        UnknownVariable
            If name is not in the schema.
        LengthMismatch
            If a sequence does not match the number of rows.
        """
        arr = self._column_array(name)
        if _is_sequence(value):
            if len(value) != arr.shape[0]:
                raise LengthMismatch(
                    f"Cannot assign {len(value)} values to '{name}' in a table of "
                    f"{arr.shape[0]} rows"
                )
            arr[:] = np.asarray(value, dtype=arr.dtype)
        else:
            arr[:] = value

    def values(self, name: str) -> np.ndarray:
        """Underlying storage of a variable (a live array, not a copy)."""
        return self._column_array(name)

    # ------------------------------------------------------------------
    # Growth and copies
    # ------------------------------------------------------------------

    def append(self, record: Mapping[str, Any] | TimeStepRow) -> TimeStepRow:
        """Append a time step; variables missing from record hold their sentinel.

        Returns the view on the new row.
        """
        if isinstance(record, TimeStepRow):
            record = record.to_dict()
        unknown = [k for k in record if k not in self._columns]
        if unknown:
            raise UnknownVariable(f"Unknown variables for this status: {unknown}")
        for name in self._names:
            arr = self._columns[name]
            value = record.get(name, sentinel_for(arr.dtype))
            self._columns[name] = np.append(arr, np.asarray([value], dtype=arr.dtype))
        return TimeStepRow(self, len(self) - 1)

    def copy(self) -> TimeStepTable:
        """Deep copy of the table."""
        return self._from_columns({k: v.copy() for k, v in self._columns.items()})

    def __copy__(self) -> TimeStepTable:
        return self.copy()

    def __deepcopy__(self, memo) -> TimeStepTable:
        return self.copy()

    def equals(self, other: TimeStepTable) -> bool:
        """True if other has the same schema and values (nan equal to nan)."""
        if not isinstance(other, TimeStepTable) or self._names != other._names:
            return False
        for name in self._names:
            a, b = self._columns[name], other._columns[name]
            if a.dtype != b.dtype or a.shape != b.shape:
                return False
            if np.issubdtype(a.dtype, np.floating):
                if not np.array_equal(a, b, equal_nan=True):
                    return False
            elif not np.array_equal(a, b):
                return False
        return True

    def to_dataframe(self) -> pd.DataFrame:
        """Export the table as a DataFrame, one row per time step."""
        return pd.DataFrame({name: self._columns[name].copy() for name in self._names})

    def __repr__(self) -> str:
        return f"TimeStepTable(rows={len(self)}, names={self._names})"


class TimeStepRow:
    """Live view on one time step of a TimeStepTable.

    Variables are readable and writable both as attributes (``row.Tl``) and
    as items (``row["Tl"]``).
    """

    __slots__ = ("_table", "_index")

    def __init__(self, table: TimeStepTable, index: int):
        object.__setattr__(self, "_table", table)
        object.__setattr__(self, "_index", index)

    @property
    def index(self) -> int:
        return self._index

    @property
    def table(self) -> TimeStepTable:
        return self._table

    def keys(self) -> tuple[str, ...]:
        return self._table.names

    def __contains__(self, name) -> bool:
        return name in self._table

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._table._get(self._index, name)
        except UnknownVariable:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value) -> None:
        self._table._set(self._index, name, value)

    def __getitem__(self, name: str):
        return self._table._get(self._index, name)

    def __setitem__(self, name: str, value) -> None:
        self._table._set(self._index, name, value)

    def to_dict(self) -> dict[str, Any]:
        return {name: self._table._get(self._index, name) for name in self._table.names}

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"TimeStepRow({self._index}: {values})"


class TimeStepColumn:
    """Live view on one variable of a TimeStepTable across all time steps."""

    __slots__ = ("_table", "_name")

    def __init__(self, table: TimeStepTable, name: str):
        self._table = table
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def _array(self) -> np.ndarray:
        # Looked up on every access: append() replaces the storage array.
        return self._table._column_array(self._name)

    def __len__(self) -> int:
        return self._array().shape[0]

    def __iter__(self):
        return iter(self._array().tolist())

    def __getitem__(self, i):
        value = self._array()[i]
        if isinstance(i, slice):
            return value.copy()
        return value.item()

    def __setitem__(self, i, value) -> None:
        self._array()[i] = value

    def __array__(self, dtype=None, copy=None):
        arr = self._array()
        if dtype is not None:
            return arr.astype(dtype)
        return arr.copy() if copy else arr

    def tolist(self) -> list:
        return self._array().tolist()

    def __eq__(self, other):
        if _is_sequence(other):
            return len(other) == len(self) and bool(np.all(self._array() == np.asarray(other)))
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"TimeStepColumn({self._name!r}, {self.tolist()!r})"
