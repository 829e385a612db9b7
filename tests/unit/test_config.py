"""Unit tests for model file loading."""

import pytest

from leafsim import Fvcb, Medlyn, ModelList, Monteith, init_status, read_model
from leafsim.config import models_from_dict
from leafsim.errors import IncompatibleModel, UnknownModel, UnknownVariable


TOML_MODEL = """
[leaf.photosynthesis]
use = "Fvcb"
parameters = { VcMaxRef = 150.0 }

[leaf.stomatal_conductance]
use = "Medlyn"
parameters = { g0 = 0.03, g1 = 12.0 }

[leaf.energy]
use = "Monteith"
parameters = { maxiter = 20 }

[stem.stomatal_conductance]
use = "ConstantGs"
parameters = { gs = 0.1 }
"""

YAML_MODEL = """
leaf:
  photosynthesis:
    use: Fvcb
  stomatal_conductance:
    use: Medlyn
    parameters:
      g0: 0.03
      g1: 12.0
"""


@pytest.fixture
def toml_file(tmp_path):
    path = tmp_path / "model.toml"
    path.write_text(TOML_MODEL)
    return path


class TestReadModel:
    """Tests for read_model."""

    def test_toml(self, toml_file):
        """One ModelList per component, in file order."""
        models = read_model(toml_file)

        assert list(models) == ["leaf", "stem"]
        leaf = models["leaf"]
        assert isinstance(leaf, ModelList)
        assert leaf.photosynthesis == Fvcb(VcMaxRef=150.0)
        assert leaf.stomatal_conductance == Medlyn(0.03, 12.0)
        assert leaf.energy == Monteith(maxiter=20)
        assert models["stem"].photosynthesis is None

    def test_yaml(self, tmp_path):
        """YAML files use the same layout."""
        path = tmp_path / "model.yml"
        path.write_text(YAML_MODEL)

        models = read_model(path)

        assert models["leaf"].photosynthesis == Fvcb()
        assert models["leaf"].energy is None

    def test_missing_file(self, tmp_path):
        """Nonexistent paths raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_model(tmp_path / "missing.toml")

    def test_unsupported_extension(self, tmp_path):
        """Only TOML and YAML are read."""
        path = tmp_path / "model.json"
        path.write_text("{}")

        with pytest.raises(ValueError):
            read_model(path)


class TestModelsFromDict:
    """Tests for building ModelLists from parsed mappings."""

    def test_shorthand(self):
        """A bare variant name is accepted for parameterless variants."""
        models = models_from_dict({"leaf": {"energy": "Monteith"}})

        assert models["leaf"].energy == Monteith()

    def test_unknown_variant(self):
        """Unregistered variant names raise UnknownModel."""
        with pytest.raises(UnknownModel):
            models_from_dict({"leaf": {"stomatal_conductance": {"use": "BallBerry"}}})

    def test_unknown_process(self):
        """Process keys are checked."""
        with pytest.raises(ValueError):
            models_from_dict({"leaf": {"respiration": {"use": "Q10"}}})

    def test_missing_use(self):
        """Each process entry names its variant."""
        with pytest.raises(ValueError):
            models_from_dict({"leaf": {"energy": {"parameters": {}}}})

    def test_bad_parameters(self):
        """Parameters not accepted by the variant raise IncompatibleModel."""
        with pytest.raises(IncompatibleModel):
            models_from_dict({"leaf": {"energy": {"use": "Monteith", "parameters": {"foo": 1}}}})

    def test_missing_partner(self):
        """Coupled photosynthesis without stomatal conductance is rejected."""
        with pytest.raises(IncompatibleModel):
            models_from_dict({"leaf": {"photosynthesis": {"use": "Fvcb"}}})


class TestInitStatus:
    """Tests for init_status."""

    def test_mapping(self, toml_file):
        """Variables are set on the components that use them."""
        models = read_model(toml_file)

        init_status(models, Rs=13.747, sky_fraction=1.0, PPFD=1500.0, d=0.03)

        assert models["leaf"].is_initialized()
        assert models["leaf"][0].PPFD == 1500.0
        assert "PPFD" not in models["stem"].status

    def test_unused_variable(self, toml_file):
        """A variable unknown to every component raises before any write."""
        models = read_model(toml_file)

        with pytest.raises(UnknownVariable):
            init_status(models, PPFD=1500.0, Tair=20.0)

        assert not models["leaf"].is_initialized()

    def test_single_model_list(self):
        """A ModelList is initialized directly."""
        leaf = ModelList(stomatal_conductance=Medlyn(0.03, 12.0))

        init_status(leaf, Dl=1.0, Cs=400.0, A=10.0)

        assert leaf.is_initialized()
