"""Unit tests for the TimeStepTable status storage.

Tests verify:
1. Scalars and length-1 sequences are broadcast at construction
2. Row and column views alias the table storage
3. Column assignment and append keep the schema fixed
4. Unknown variables and bad lengths raise
"""

import copy

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_array_equal

from leafsim.errors import LengthMismatch, SchemaMismatch, UnknownVariable
from leafsim.process.table import (
    FLOAT_SENTINEL,
    INT_SENTINEL,
    TimeStepTable,
    sentinel_for,
)


class TestConstruction:
    """Tests for building a table from a record."""

    def test_sequence_sets_row_count(self):
        """A sequence of two values gives two rows."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        assert len(table) == 2
        assert table["Tl"].tolist() == [20.0, 25.0]

    def test_scalar_broadcast(self):
        """Scalars are repeated on every row."""
        table = TimeStepTable({"Tl": [20.0, 25.0, 30.0], "PPFD": 1500.0})

        assert table["PPFD"].tolist() == [1500.0, 1500.0, 1500.0]

    def test_length_one_sequence_broadcast(self):
        """A length-1 sequence behaves as a scalar."""
        table = TimeStepTable({"Tl": [20.0, 25.0], "Cs": [380.0]})

        assert table["Cs"].tolist() == [380.0, 380.0]

    def test_scalars_only_give_one_row(self):
        """All-scalar records give a single time step."""
        table = TimeStepTable({"Tl": 20.0, "PPFD": 1500.0})

        assert len(table) == 1
        assert table.shape == (1, 2)

    def test_incompatible_lengths(self):
        """Sequences of lengths 2 and 3 cannot be broadcast."""
        with pytest.raises(SchemaMismatch):
            TimeStepTable({"Tl": [20.0, 25.0], "PPFD": [1.0, 2.0, 3.0]})

    def test_empty_sequence(self):
        """A zero-length sequence is rejected."""
        with pytest.raises(SchemaMismatch):
            TimeStepTable({"Tl": []})

    def test_dtypes(self):
        """Declared dtypes are used for storage."""
        table = TimeStepTable(
            {"Tl": 20.0, "iter": INT_SENTINEL, "converged": False},
            dtypes={"iter": np.int64, "converged": np.bool_},
        )

        assert table.dtype("Tl") == np.float64
        assert table.dtype("iter") == np.int64
        assert table.dtype("converged") == np.bool_

    def test_input_not_aliased(self):
        """The table copies input arrays."""
        values = np.array([20.0, 25.0])
        table = TimeStepTable({"Tl": values})

        values[0] = 0.0

        assert table[0, "Tl"] == 20.0

    def test_names_keep_order(self):
        """Schema order follows the record."""
        table = TimeStepTable({"b": 1.0, "a": 2.0, "c": 3.0})

        assert table.names == ("b", "a", "c")


class TestSentinels:
    """Tests for uninitialized-value markers."""

    def test_sentinel_values(self):
        """Float, integer and boolean sentinels."""
        assert sentinel_for(np.float64) == FLOAT_SENTINEL == -999.99
        assert sentinel_for(np.int64) == INT_SENTINEL == -999
        assert sentinel_for(np.bool_) is False


class TestViews:
    """Tests for row and column views."""

    def test_row_view_reads(self):
        """Row 0 sees the first value."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        assert table[0].Tl == 20.0
        assert table[1]["Tl"] == 25.0

    def test_row_write_isolated_to_row(self):
        """Writing through row 0 leaves row 1 untouched."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        table[0].Tl = 30.0

        assert table["Tl"].tolist() == [30.0, 25.0]

    def test_row_view_is_live(self):
        """A view taken before a write sees the new value."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})
        row = table[1]

        table[1, "Tl"] = 27.5

        assert row.Tl == 27.5

    def test_column_view_is_live(self):
        """Writes through a column view reach the rows."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})
        column = table["Tl"]

        column[1] = 26.0

        assert table[1].Tl == 26.0

    def test_column_as_array(self):
        """np.asarray on a column returns its values."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        assert_array_equal(np.asarray(table["Tl"]), [20.0, 25.0])

    def test_column_equality(self):
        """Columns compare equal to sequences of the same values."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        assert table["Tl"] == [20.0, 25.0]
        assert not (table["Tl"] == [20.0, 26.0])

    def test_negative_row_index(self):
        """Rows can be indexed from the end."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        assert table[-1].Tl == 25.0

    def test_row_out_of_range(self):
        """Out of range rows raise IndexError."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        with pytest.raises(IndexError):
            table[2]

    def test_iteration_yields_rows(self):
        """Iterating a table yields one view per time step."""
        table = TimeStepTable({"Tl": [20.0, 25.0, 30.0]})

        assert [row.Tl for row in table] == [20.0, 25.0, 30.0]

    def test_row_to_dict(self):
        """Row values as a plain dictionary."""
        table = TimeStepTable({"Tl": [20.0, 25.0], "PPFD": 1500.0})

        assert table[1].to_dict() == {"Tl": 25.0, "PPFD": 1500.0}


class TestUnknownVariables:
    """Tests for access outside the schema."""

    def test_unknown_column(self):
        """Unknown column names raise UnknownVariable."""
        table = TimeStepTable({"Tl": 20.0})

        with pytest.raises(UnknownVariable):
            table["Gs"]

    def test_unknown_variable_is_key_error(self):
        """UnknownVariable can be caught as a KeyError."""
        table = TimeStepTable({"Tl": 20.0})

        with pytest.raises(KeyError):
            table[0, "Gs"]

    def test_unknown_attribute_on_row(self):
        """Reading an unknown attribute on a row raises AttributeError."""
        table = TimeStepTable({"Tl": 20.0})

        with pytest.raises(AttributeError):
            table[0].Gs

    def test_unknown_write_on_row(self):
        """Rows cannot grow the schema."""
        table = TimeStepTable({"Tl": 20.0})

        with pytest.raises(UnknownVariable):
            table[0].Gs = 0.1

    def test_contains(self):
        """Membership tests on tables and rows."""
        table = TimeStepTable({"Tl": 20.0})

        assert "Tl" in table
        assert "Gs" not in table
        assert "Tl" in table[0]


class TestColumnAssignment:
    """Tests for whole-column writes."""

    def test_scalar_assignment(self):
        """A scalar is written on every row."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        table["Tl"] = 22.0

        assert table["Tl"].tolist() == [22.0, 22.0]

    def test_sequence_assignment(self):
        """A sequence with one value per row replaces the column."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        table["Tl"] = [21.0, 24.0]

        assert table["Tl"].tolist() == [21.0, 24.0]

    def test_length_mismatch(self):
        """A sequence of the wrong length raises and leaves values intact."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})

        with pytest.raises(LengthMismatch):
            table["Tl"] = [1.0, 2.0, 3.0]

        assert table["Tl"].tolist() == [20.0, 25.0]

    def test_length_mismatch_is_schema_mismatch(self):
        """LengthMismatch specializes SchemaMismatch."""
        assert issubclass(LengthMismatch, SchemaMismatch)


class TestAppend:
    """Tests for adding time steps."""

    def test_append_full_record(self):
        """Appending a record adds a row with its values."""
        table = TimeStepTable({"Tl": 20.0, "PPFD": 1500.0})

        row = table.append({"Tl": 21.0, "PPFD": 1400.0})

        assert len(table) == 2
        assert row.index == 1
        assert table[1].to_dict() == {"Tl": 21.0, "PPFD": 1400.0}

    def test_append_missing_fields_get_sentinel(self):
        """Fields not given hold their sentinel."""
        table = TimeStepTable(
            {"Tl": 20.0, "iter": 3}, dtypes={"iter": np.int64}
        )

        table.append({"Tl": 21.0})

        assert table[1].iter == INT_SENTINEL

    def test_append_unknown_field(self):
        """Appending an unknown field raises and does not grow the table."""
        table = TimeStepTable({"Tl": 20.0})

        with pytest.raises(UnknownVariable):
            table.append({"Gs": 0.1})

        assert len(table) == 1

    def test_column_view_follows_append(self):
        """A column view taken before an append sees the new row."""
        table = TimeStepTable({"Tl": 20.0})
        column = table["Tl"]

        table.append({"Tl": 21.0})

        assert column.tolist() == [20.0, 21.0]

    def test_append_row_view(self):
        """A row view of the table can be appended."""
        table = TimeStepTable({"Tl": 20.0, "PPFD": 1500.0})

        table.append(table[0])

        assert table[1].to_dict() == table[0].to_dict()


class TestCopies:
    """Tests for copies and exports."""

    def test_copy_is_independent(self):
        """Writes to a copy do not reach the original."""
        table = TimeStepTable({"Tl": [20.0, 25.0]})
        other = table.copy()

        other[0].Tl = 0.0

        assert table[0].Tl == 20.0

    def test_deepcopy(self):
        """copy.deepcopy returns an equal, independent table."""
        table = TimeStepTable({"Tl": [20.0, np.nan]})
        other = copy.deepcopy(table)

        assert other.equals(table)
        other[0].Tl = 1.0
        assert not other.equals(table)

    def test_to_dataframe(self):
        """DataFrame export has one column per variable."""
        table = TimeStepTable({"Tl": [20.0, 25.0], "PPFD": 1500.0})

        df = table.to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["Tl", "PPFD"]
        assert df["Tl"].tolist() == [20.0, 25.0]
