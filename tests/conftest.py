"""
Shared pytest fixtures and helpers for leafsim tests.

This module provides:
- Tolerance settings for floating-point comparisons
- Meteorological drivers (single record and short series)
- Model lists for the reference leaf scenario
"""

from typing import Dict

import pytest

from leafsim import (
    Atmosphere,
    Fvcb,
    Medlyn,
    ModelList,
    Monteith,
    Weather,
)


# =============================================================================
# Tolerance Settings
# =============================================================================

DEFAULT_RTOL = 1e-9
DEFAULT_ATOL = 1e-6  # W m-2 for energy fluxes


@pytest.fixture
def tolerance() -> Dict[str, float]:
    """Default tolerance settings for floating-point comparisons."""
    return {"rtol": DEFAULT_RTOL, "atol": DEFAULT_ATOL}


# =============================================================================
# Meteorology
# =============================================================================

# Reference conditions: mild, moderately dry afternoon
REFERENCE_METEO = {"T": 22.0, "Wind": 0.8333, "P": 101.325, "Rh": 0.4490995}

# Energy balance inputs of the reference leaf
REFERENCE_LEAF = {"Rs": 13.747, "sky_fraction": 1.0, "PPFD": 1500.0, "d": 0.03}


@pytest.fixture
def meteo() -> Atmosphere:
    """Single atmosphere record at reference conditions."""
    return Atmosphere(**REFERENCE_METEO)


@pytest.fixture
def weather() -> Weather:
    """Three-step series warming from 18 to 26 degC."""
    return Weather(
        [
            Atmosphere(T=18.0, Wind=1.0, P=101.3, Rh=0.65),
            Atmosphere(T=22.0, Wind=0.8333, P=101.325, Rh=0.4490995),
            Atmosphere(T=26.0, Wind=1.5, P=101.2, Rh=0.40),
        ],
        metadata={"site": "test"},
    )


# =============================================================================
# Model lists
# =============================================================================


@pytest.fixture
def coupled_leaf() -> ModelList:
    """Fvcb + Medlyn + Monteith leaf with its energy inputs initialized."""
    return ModelList(
        photosynthesis=Fvcb(),
        stomatal_conductance=Medlyn(0.03, 12.0),
        energy=Monteith(),
        status=dict(REFERENCE_LEAF),
    )


@pytest.fixture
def photosynthesis_leaf() -> ModelList:
    """Fvcb + Medlyn leaf initialized for a photosynthesis-only call."""
    return ModelList(
        photosynthesis=Fvcb(),
        stomatal_conductance=Medlyn(0.03, 12.0),
        status={"Tl": 25.0, "PPFD": 1000.0, "Cs": 400.0, "Dl": 1.0},
    )
