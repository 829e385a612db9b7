"""Unit tests for ModelList schema, initialization and copies."""

import copy

import numpy as np
import pytest

from leafsim import (
    ConstantGs,
    Fvcb,
    FvcbIter,
    FvcbRaw,
    Medlyn,
    ModelList,
    Monteith,
)
from leafsim.errors import IncompatibleModel, LengthMismatch, UnknownVariable
from leafsim.process.model_list import to_initialize, variables
from leafsim.process.table import FLOAT_SENTINEL, INT_SENTINEL


class TestSchema:
    """Tests for the status schema built from the variants."""

    def test_union_of_declarations(self):
        """Schema holds every input and output once, in declaration order."""
        schema = variables(Fvcb(), Medlyn(0.03, 12.0))

        assert list(schema) == ["PPFD", "Tl", "Cs", "A", "Gs", "Ci", "Dl"]

    def test_non_float_dtypes(self):
        """Monteith declares integer and boolean outputs."""
        schema = variables(Monteith())

        assert schema["iter"] == np.int64
        assert schema["converged"] == np.bool_
        assert schema["Tl"] == np.float64

    def test_energy_outputs_exclude_carbon(self):
        """A, Gs and Ci belong to the coupled variants, not to Monteith."""
        schema = variables(Monteith())

        assert {"A", "Gs", "Ci"}.isdisjoint(schema)
        assert "Cs" in schema

    def test_raw_with_energy_still_needs_ci(self):
        """Monteith does not compute Ci, so FvcbRaw keeps it as an input."""
        leaf = ModelList(photosynthesis=FvcbRaw(), energy=Monteith())

        assert "Ci" in leaf.required_inputs()
        assert "Gs" not in leaf.status

    def test_to_initialize(self):
        """Inputs computed by another variant are not required."""
        assert to_initialize(Fvcb(), Medlyn(0.03, 12.0)) == ("PPFD", "Tl", "Cs", "Dl")

    def test_uninitialized_values_are_sentinels(self):
        """A fresh ModelList holds sentinels."""
        leaf = ModelList(energy=Monteith())

        assert len(leaf) == 1
        assert leaf[0].Tl == FLOAT_SENTINEL
        assert leaf[0].iter == INT_SENTINEL
        assert leaf[0].converged is False

    def test_extra_status_variables(self):
        """Status entries not declared by any variant extend the schema."""
        leaf = ModelList(stomatal_conductance=ConstantGs(0.2), status={"site": 3})

        assert "site" in leaf.status
        assert leaf[0].site == 3


class TestRequiredInputs:
    """Tests for required_inputs and is_initialized."""

    def test_photosynthesis_inputs(self):
        """Fvcb + Medlyn need PPFD, Tl, Cs and Dl."""
        leaf = ModelList(photosynthesis=Fvcb(), stomatal_conductance=Medlyn(0.03, 12.0))

        assert leaf.required_inputs() == ("PPFD", "Tl", "Cs", "Dl")
        assert leaf.required_inputs("photosynthesis") == ("PPFD", "Tl", "Cs", "Dl")

    def test_energy_inputs(self):
        """With Monteith, Tl, Cs and Dl are computed by the solver."""
        leaf = ModelList(
            photosynthesis=Fvcb(), stomatal_conductance=Medlyn(0.03, 12.0), energy=Monteith()
        )

        assert leaf.required_inputs("energy") == ("PPFD", "Rs", "sky_fraction", "d")

    def test_stomatal_inputs(self):
        """Medlyn alone needs A as well."""
        leaf = ModelList(stomatal_conductance=Medlyn(0.03, 12.0))

        assert leaf.required_inputs("stomatal_conductance") == ("Dl", "Cs", "A")

    def test_raw_needs_ci(self):
        """FvcbRaw reads Ci from the status."""
        leaf = ModelList(photosynthesis=FvcbRaw(), energy=Monteith())

        assert "Ci" in leaf.required_inputs("energy")

    def test_not_initialized(self):
        """Fresh ModelList is not initialized."""
        leaf = ModelList(photosynthesis=Fvcb(), stomatal_conductance=Medlyn(0.03, 12.0))

        assert not leaf.is_initialized()
        assert leaf.uninitialized() == ("PPFD", "Tl", "Cs", "Dl")

    def test_initialized(self, photosynthesis_leaf):
        """All required inputs set."""
        assert photosynthesis_leaf.is_initialized()

    def test_sentinel_on_one_row(self):
        """A sentinel on any row leaves the ModelList uninitialized."""
        leaf = ModelList(
            photosynthesis=Fvcb(),
            stomatal_conductance=Medlyn(0.03, 12.0),
            status={"Tl": [25.0, FLOAT_SENTINEL], "PPFD": 1000.0, "Cs": 400.0, "Dl": 1.0},
        )

        assert leaf.uninitialized() == ("Tl",)

    def test_unknown_process(self):
        """Unknown process names are rejected."""
        leaf = ModelList(energy=Monteith())

        with pytest.raises(ValueError):
            leaf.required_inputs("respiration")


class TestInitializeStatus:
    """Tests for initialize_status."""

    def test_scalar_and_sequence(self):
        """Scalars broadcast; sequences are set per row."""
        leaf = ModelList(
            stomatal_conductance=Medlyn(0.03, 12.0), status={"A": [10.0, 12.0]}
        )

        leaf.initialize_status(Dl=[1.0, 1.5], Cs=400.0)

        assert leaf["Dl"].tolist() == [1.0, 1.5]
        assert leaf["Cs"].tolist() == [400.0, 400.0]
        assert leaf.is_initialized()

    def test_unknown_name_writes_nothing(self):
        """An unknown name raises before any value is written."""
        leaf = ModelList(stomatal_conductance=Medlyn(0.03, 12.0))

        with pytest.raises(UnknownVariable):
            leaf.initialize_status(Dl=1.0, Tair=20.0)

        assert leaf[0].Dl == FLOAT_SENTINEL

    def test_length_mismatch_writes_nothing(self):
        """A sequence of the wrong length raises before any write."""
        leaf = ModelList(stomatal_conductance=Medlyn(0.03, 12.0))

        with pytest.raises(LengthMismatch):
            leaf.initialize_status(Cs=400.0, Dl=[1.0, 2.0])

        assert leaf[0].Cs == FLOAT_SENTINEL


class TestCompatibility:
    """Tests for slot checks at construction."""

    def test_wrong_slot(self):
        """A stomatal variant cannot be used for photosynthesis."""
        with pytest.raises(IncompatibleModel):
            ModelList(photosynthesis=Medlyn(0.03, 12.0), stomatal_conductance=Medlyn(0.03, 12.0))

    def test_coupled_needs_stomata(self):
        """Fvcb and FvcbIter need a stomatal conductance variant."""
        with pytest.raises(IncompatibleModel):
            ModelList(photosynthesis=Fvcb())
        with pytest.raises(IncompatibleModel):
            ModelList(photosynthesis=FvcbIter())

    def test_raw_alone(self):
        """FvcbRaw needs no stomatal conductance."""
        leaf = ModelList(photosynthesis=FvcbRaw())

        assert leaf.stomatal_conductance is None
        assert leaf.model("photosynthesis") == FvcbRaw()


class TestCopies:
    """Tests for ModelList copies."""

    def test_copy_shares_variants(self, photosynthesis_leaf):
        """Variants are immutable and shared; the status is not."""
        other = photosynthesis_leaf.copy()

        assert other.photosynthesis is photosynthesis_leaf.photosynthesis
        assert other.status is not photosynthesis_leaf.status
        assert other == photosynthesis_leaf

    def test_deepcopy_independent_status(self, photosynthesis_leaf):
        """Writes to a deep copy do not reach the original."""
        other = copy.deepcopy(photosynthesis_leaf)

        other[0].Tl = 10.0

        assert photosynthesis_leaf[0].Tl == 25.0
        assert other != photosynthesis_leaf

    def test_append_time_step(self, photosynthesis_leaf):
        """Appending extends the status with sentinels for missing values."""
        photosynthesis_leaf.append({"Tl": 26.0, "PPFD": 900.0, "Cs": 400.0, "Dl": 1.2})

        assert len(photosynthesis_leaf) == 2
        assert photosynthesis_leaf[1].A == FLOAT_SENTINEL
        assert photosynthesis_leaf.is_initialized()
