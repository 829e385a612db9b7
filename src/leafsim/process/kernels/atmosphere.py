"""Atmospheric state kernels.

Pure scalar kernels for vapour pressure, air density and the psychrometric
quantities derived from air temperature, pressure and relative humidity.

Units: temperature in degC, pressure and vapour pressure in kPa, relative
humidity as a fraction in [0, 1].
"""

from __future__ import annotations

import math

from numba import njit

__all__ = [
    "e_sat",
    "vapor_pressure",
    "e_sat_slope",
    "air_density",
    "latent_heat_vaporization",
    "psychrometer_constant",
    "atmosphere_emissivity",
    "ms_to_mol",
    "mol_to_ms",
]


@njit(cache=True, error_model="numpy")
def e_sat(t: float) -> float:
    """
    Saturated water vapour pressure (kPa).

    e_sat = 0.61375 * exp(17.502 * T / (T + 240.97))

    Parameters
    ----------
    t : float
        Air temperature (degC)

    References
    ----------
    Jones, H. G. 2013. Plants and Microclimate, 3rd ed., Eq. 5.1 with the
    Buck (1981) coefficients.
    """
    return 0.61375 * math.exp((17.502 * t) / (t + 240.97))


@njit(cache=True, error_model="numpy")
def vapor_pressure(t: float, rh: float) -> float:
    """Vapour pressure (kPa) from temperature (degC) and relative humidity (0-1)."""
    return rh * e_sat(t)


@njit(cache=True, error_model="numpy")
def e_sat_slope(t: float) -> float:
    """
    Slope of the saturated vapour pressure curve (kPa K-1).

    Computed as a forward difference over 0.1 degC, which is well within the
    accuracy of the underlying empirical e_sat fit.
    """
    return (e_sat(t + 0.1) - e_sat(t)) / 0.1


@njit(cache=True, error_model="numpy")
def air_density(t: float, p: float, rd: float, k0: float) -> float:
    """
    Dry air density (kg m-3).

    rho = P / (Rd * Tk)

    Parameters
    ----------
    t : float
        Air temperature (degC)
    p : float
        Air pressure (kPa)
    rd : float
        Gas constant of dry air (J kg-1 K-1)
    k0 : float
        Absolute zero (degC)
    """
    return p * 1000.0 / (rd * (t - k0))


@njit(cache=True, error_model="numpy")
def latent_heat_vaporization(t: float, lambda0: float) -> float:
    """Latent heat of vaporisation of water (J kg-1) at temperature t (degC)."""
    return (lambda0 - 0.002365 * t) * 1.0e6


@njit(cache=True, error_model="numpy")
def psychrometer_constant(p: float, lambda_v: float, cp: float, epsilon: float) -> float:
    """
    Psychrometric constant (kPa K-1).

    gamma = Cp * P / (epsilon * lambda)

    References
    ----------
    Monteith, J. L. and Unsworth, M. H. 2013. Principles of Environmental
    Physics, 4th ed., Eq. 3.23.
    """
    return (cp * p) / (epsilon * lambda_v)


@njit(cache=True, error_model="numpy")
def atmosphere_emissivity(t: float, e: float, k0: float) -> float:
    """
    Clear sky emissivity of the atmosphere (Brutsaert, 1975).

    epsilon_a = 0.642 * (e_Pa / Tk) ** (1/7)

    Parameters
    ----------
    t : float
        Air temperature (degC)
    e : float
        Vapour pressure (kPa)
    k0 : float
        Absolute zero (degC)
    """
    return 0.642 * (e * 1000.0 / (t - k0)) ** (1.0 / 7.0)


@njit(cache=True, error_model="numpy")
def ms_to_mol(g: float, t: float, p: float, r: float, k0: float) -> float:
    """Convert a conductance from m s-1 to mol m-2 s-1."""
    return g * p * 1000.0 / (r * (t - k0))


@njit(cache=True, error_model="numpy")
def mol_to_ms(g: float, t: float, p: float, r: float, k0: float) -> float:
    """Convert a conductance from mol m-2 s-1 to m s-1."""
    return g * r * (t - k0) / (p * 1000.0)
