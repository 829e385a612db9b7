"""Temperature dependence of photosynthetic parameters.

Pure scalar kernels. Temperatures are in Kelvin here: callers convert leaf
and reference temperatures before calling.
"""

from __future__ import annotations

import math

from numba import njit

__all__ = ["arrhenius", "arrhenius_peaked", "gamma_star", "michaelis_menten"]


@njit(cache=True, error_model="numpy")
def arrhenius(a: float, ea: float, tk: float, trk: float, r: float) -> float:
    """
    Arrhenius temperature response without deactivation.

    A(Tk) = A_ref * exp(Ea * (Tk - Tref) / (R * Tk * Tref))

    Parameters
    ----------
    a : float
        Parameter value at the reference temperature
    ea : float
        Activation energy (J mol-1)
    tk : float
        Temperature (K)
    trk : float
        Reference temperature (K)
    r : float
        Universal gas constant (J mol-1 K-1)
    """
    return a * math.exp(ea * (tk - trk) / (r * tk * trk))


@njit(cache=True, error_model="numpy")
def arrhenius_peaked(
    a: float,
    ea: float,
    tk: float,
    trk: float,
    hd: float,
    delta_s: float,
    r: float,
) -> float:
    """
    Peaked Arrhenius response with high-temperature deactivation.

    Parameters
    ----------
    a : float
        Parameter value at the reference temperature
    ea : float
        Activation energy (J mol-1)
    tk : float
        Temperature (K)
    trk : float
        Reference temperature (K)
    hd : float
        Deactivation energy (J mol-1)
    delta_s : float
        Entropy term (J mol-1 K-1)
    r : float
        Universal gas constant (J mol-1 K-1)

    References
    ----------
    Medlyn, B. E., et al. 2002. Temperature response of parameters of a
    biochemically based model of photosynthesis. II. A review of
    experimental data. Plant, Cell & Environment 25: 1167-79.
    """
    return (
        a
        * math.exp(ea * (tk - trk) / (trk * r * tk))
        * (1.0 + math.exp((trk * delta_s - hd) / (trk * r)))
        / (1.0 + math.exp((tk * delta_s - hd) / (tk * r)))
    )


@njit(cache=True, error_model="numpy")
def gamma_star(tk: float, trk: float, r: float) -> float:
    """CO2 compensation point in the absence of day respiration (umol mol-1).

    Bernacchi et al. (2001) parameterisation.
    """
    return arrhenius(42.75, 36750.0, tk, trk, r)


@njit(cache=True, error_model="numpy")
def michaelis_menten(tk: float, trk: float, o2: float, r: float) -> float:
    """
    Effective Michaelis-Menten coefficient for CO2 (umol mol-1).

    Km = Kc * (1 + O2 / Ko), with Kc and Ko from Bernacchi et al. (2001).
    o2 is the intercellular oxygen concentration (mmol mol-1).
    """
    kc = arrhenius(404.9, 79430.0, tk, trk, r)
    ko = arrhenius(278.4, 36380.0, tk, trk, r)
    return kc * (1.0 + o2 / ko)
