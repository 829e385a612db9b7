"""Leaf energy balance kernels (Monteith & Unsworth, 2013).

Pure scalar kernels for longwave exchange and the Penman-Monteith partition
of net radiation into latent and sensible heat.

Units: temperatures in degC, fluxes in W m-2, resistances in s m-1,
vapour pressures in kPa, psychrometric quantities in kPa K-1.
"""

from __future__ import annotations

from numba import njit

__all__ = [
    "black_body",
    "grey_body",
    "net_longwave_radiation",
    "gamma_star_apparent",
    "latent_heat",
    "sensible_heat",
    "leaf_temperature",
]


@njit(cache=True, error_model="numpy")
def black_body(t: float, k0: float, sigma: float) -> float:
    """Black body emission (W m-2) at temperature t (degC)."""
    tk = t - k0
    return sigma * tk * tk * tk * tk


@njit(cache=True, error_model="numpy")
def grey_body(t: float, epsilon: float, k0: float, sigma: float) -> float:
    """Grey body emission (W m-2) at temperature t (degC) and emissivity epsilon."""
    return epsilon * black_body(t, k0, sigma)


@njit(cache=True, error_model="numpy")
def net_longwave_radiation(
    t1: float,
    t2: float,
    epsilon1: float,
    epsilon2: float,
    f1: float,
    k0: float,
    sigma: float,
) -> float:
    """
    Net longwave radiation exchanged between two grey surfaces (W m-2).

    Rll = (B(T1) - B(T2)) / (1/eps1 + 1/eps2 - 1) * F1

    Positive when surface 1 (e.g. the sky) is warmer than surface 2 (the
    leaf), i.e. the leaf gains energy.

    Parameters
    ----------
    t1, t2 : float
        Temperatures of the two surfaces (degC)
    epsilon1, epsilon2 : float
        Emissivities of the two surfaces
    f1 : float
        View factor of surface 1 seen from surface 2 (e.g. sky fraction)
    k0 : float
        Absolute zero (degC)
    sigma : float
        Stefan-Boltzmann constant (W m-2 K-4)
    """
    return (
        (black_body(t1, k0, sigma) - black_body(t2, k0, sigma))
        / (1.0 / epsilon1 + 1.0 / epsilon2 - 1.0)
        * f1
    )


@njit(cache=True, error_model="numpy")
def gamma_star_apparent(
    gamma: float, a_sh: float, a_sv: float, rbv: float, rsv: float, rbh: float
) -> float:
    """
    Apparent psychrometric constant (kPa K-1).

    gamma* = gamma * a_sh / a_sv * (Rbv + Rsv) / Rbh

    References
    ----------
    Schymanski, S. J. and Or, D. 2017. Leaf-scale experiments reveal an
    important omission in the Penman-Monteith equation. Hydrology and Earth
    System Sciences 21: 685-706.
    """
    return gamma * a_sh / a_sv * (rbv + rsv) / rbh


@njit(cache=True, error_model="numpy")
def latent_heat(
    rn: float,
    vpd: float,
    gamma_s: float,
    rbh: float,
    delta: float,
    rho: float,
    a_sh: float,
    cp: float,
) -> float:
    """
    Latent heat flux (W m-2), Penman-Monteith form.

    lambda_E = (Delta * Rn + rho * Cp * VPD * a_sh / Rbh) / (Delta + gamma*)
    """
    return (delta * rn + rho * cp * vpd * a_sh / rbh) / (delta + gamma_s)


@njit(cache=True, error_model="numpy")
def sensible_heat(
    rn: float,
    vpd: float,
    gamma_s: float,
    rbh: float,
    delta: float,
    rho: float,
    a_sh: float,
    cp: float,
) -> float:
    """
    Sensible heat flux (W m-2), complement of latent_heat.

    H = (gamma* * Rn - rho * Cp * VPD * a_sh / Rbh) / (Delta + gamma*)

    H + lambda_E = Rn exactly for the same set of arguments.
    """
    return (gamma_s * rn - rho * cp * vpd * a_sh / rbh) / (delta + gamma_s)


@njit(cache=True, error_model="numpy")
def leaf_temperature(
    t_air: float, rn: float, lambda_e: float, rho: float, cp: float, a_sh: float, rbh: float
) -> float:
    """Leaf temperature (degC) closing the balance, Ta + (Rn - lambda_E) / (rho Cp a_sh / Rbh)."""
    return t_air + (rn - lambda_e) / (rho * cp * (a_sh / rbh))
