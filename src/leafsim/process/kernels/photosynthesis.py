"""C3 photosynthesis kernels (Farquhar, von Caemmerer & Berry, 1980).

Pure scalar kernels for the electron transport rate, the limiting rates of
carboxylation and the analytical coupling of assimilation with a stomatal
conductance of the form gs = g0 + closure * A.

Units: PPFD in umol m-2 s-1, CO2 concentrations in umol mol-1 (ppm), rates
in umol m-2 s-1, conductances to CO2 in mol m-2 s-1.
"""

from __future__ import annotations

import math

from numba import njit

__all__ = [
    "electron_transport",
    "max_root",
    "ci_electron_limited",
    "ci_rubisco_limited",
    "assimilation_from_ci",
    "assimilation_coupled",
    "intercellular_co2",
]


@njit(cache=True, error_model="numpy")
def electron_transport(ppfd: float, jmax: float, alpha: float, theta: float) -> float:
    """
    Potential rate of electron transport (umol m-2 s-1).

    Smaller root of the non-rectangular hyperbola:

        theta * J^2 - (alpha * PPFD + Jmax) * J + alpha * PPFD * Jmax = 0

    Physical constraints:
        - 0 <= J <= Jmax
        - J = 0 in the dark

    Parameters
    ----------
    ppfd : float
        Absorbed photosynthetic photon flux density (umol m-2 s-1)
    jmax : float
        Maximum rate of electron transport (umol m-2 s-1)
    alpha : float
        Quantum yield of electron transport (mol e- mol-1 photon)
    theta : float
        Curvature of the light response
    """
    aj = alpha * ppfd + jmax
    return (aj - math.sqrt(aj * aj - 4.0 * alpha * theta * ppfd * jmax)) / (2.0 * theta)


@njit(cache=True, error_model="numpy")
def max_root(a: float, b: float, c: float) -> float:
    """Largest root of a*x^2 + b*x + c = 0 (nan when there is no real root)."""
    delta = b * b - 4.0 * a * c
    x1 = (-b + math.sqrt(delta)) / (2.0 * a)
    x2 = (-b - math.sqrt(delta)) / (2.0 * a)
    return max(x1, x2)


@njit(cache=True, error_model="numpy")
def ci_electron_limited(
    vj: float,
    gamma: float,
    cs: float,
    rd: float,
    g0: float,
    closure: float,
) -> float:
    """
    Intercellular CO2 when assimilation is limited by electron transport.

    Solves jointly
        A  = Vj * (Ci - G*) / (Ci + 2 G*) - Rd
        gs = g0 + closure * A
        A  = gs * (Cs - Ci)

    References
    ----------
    Duursma, R. A. and Medlyn, B. E. 2012. MAESPA: a model to study
    interactions between water limitation, environmental drivers and
    vegetation function at tree and stand levels. Geoscientific Model
    Development 5: 919-40.
    """
    a = g0 + closure * (vj - rd)
    b = (
        (1.0 - cs * closure) * (vj - rd)
        + g0 * (2.0 * gamma - cs)
        - closure * (vj * gamma + 2.0 * gamma * rd)
    )
    c = -(1.0 - cs * closure) * gamma * (vj + 2.0 * rd) - g0 * 2.0 * gamma * cs
    return max_root(a, b, c)


@njit(cache=True, error_model="numpy")
def ci_rubisco_limited(
    vcmax: float,
    gamma: float,
    cs: float,
    rd: float,
    g0: float,
    closure: float,
    km: float,
) -> float:
    """Intercellular CO2 when assimilation is limited by Rubisco activity.

    Same coupling as ci_electron_limited with Wv = Vcmax (Ci - G*) / (Ci + Km).
    """
    a = g0 + closure * (vcmax - rd)
    b = (
        (1.0 - cs * closure) * (vcmax - rd)
        + g0 * (km - cs)
        - closure * (vcmax * gamma + km * rd)
    )
    c = -(1.0 - cs * closure) * (vcmax * gamma + km * rd) - g0 * km * cs
    return max_root(a, b, c)


@njit(cache=True, error_model="numpy")
def assimilation_from_ci(
    ci: float,
    vj: float,
    vcmax: float,
    gamma: float,
    km: float,
    tpu: float,
    rd: float,
) -> float:
    """
    Net assimilation (umol m-2 s-1) for a known intercellular CO2.

    A = min(Wv, Wj, Wp) - Rd

    Wp is the triose phosphate utilisation limit without glycolate export,
    i.e. 3 * TPU.
    """
    wj = vj * (ci - gamma) / (ci + 2.0 * gamma)
    wv = vcmax * (ci - gamma) / (ci + km)
    wp = 3.0 * tpu
    return min(wv, wj, wp) - rd


@njit(cache=True, error_model="numpy")
def assimilation_coupled(
    vj: float,
    vcmax: float,
    gamma: float,
    km: float,
    tpu: float,
    rd: float,
    cs: float,
    g0: float,
    closure: float,
) -> float:
    """
    Net assimilation (umol m-2 s-1) coupled with stomatal conductance.

    Each limiting rate is evaluated at its own analytical Ci. A limiting rate
    is set to zero when its Ci falls outside the physical range.
    """
    ci_j = ci_electron_limited(vj, gamma, cs, rd, g0, closure)
    if ci_j > 0.0 and ci_j > gamma:
        wj = vj * (ci_j - gamma) / (ci_j + 2.0 * gamma)
    else:
        wj = 0.0

    ci_v = ci_rubisco_limited(vcmax, gamma, cs, rd, g0, closure, km)
    if 0.0 < ci_v <= cs:
        wv = vcmax * (ci_v - gamma) / (ci_v + km)
    else:
        wv = 0.0

    wp = 3.0 * tpu
    return min(wv, wj, wp) - rd


@njit(cache=True, error_model="numpy")
def intercellular_co2(cs: float, a: float, gs: float) -> float:
    """Intercellular CO2 from Fick's law, Ci = Cs - A / gs (Cs when A or gs <= 0)."""
    if gs > 0.0 and a > 0.0:
        return cs - a / gs
    return cs
