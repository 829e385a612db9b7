"""Boundary layer and stomatal conductance kernels.

Boundary layer conductances are for heat, one leaf side, in m s-1.
Stomatal conductances are to CO2 in mol m-2 s-1.
"""

from __future__ import annotations

import math

from numba import njit

__all__ = [
    "gbh_free",
    "gbh_forced",
    "boundary_conductance_heat",
    "medlyn_closure",
    "stomatal_conductance",
]


@njit(cache=True, error_model="numpy")
def gbh_free(t_air: float, t_leaf: float, d: float, dh0: float) -> float:
    """
    Boundary layer conductance for heat under free convection (m s-1).

    Only active when the leaf is warmer than the air:

        Gr = 1.6e8 * |Tl - Ta| * d^3     (Grashof number)
        gbh_free = 0.5 * Dh0 * Gr^(1/4) / d

    Parameters
    ----------
    t_air : float
        Air temperature (degC)
    t_leaf : float
        Leaf temperature (degC)
    d : float
        Leaf characteristic dimension (m)
    dh0 : float
        Molecular diffusivity for heat (m2 s-1)

    References
    ----------
    Leuning, R., et al. 1995. Leaf nitrogen, photosynthesis, conductance and
    transpiration: scaling from leaves to canopies. Plant, Cell & Environment
    18: 1183-1200.
    """
    if t_leaf - t_air > 0.0:
        gr = 1.6e8 * abs(t_leaf - t_air) * d ** 3.0
        return 0.5 * dh0 * gr ** 0.25 / d
    return 0.0


@njit(cache=True, error_model="numpy")
def gbh_forced(wind: float, d: float) -> float:
    """
    Boundary layer conductance for heat under forced convection (m s-1).

    gbh_forced = 0.003 * sqrt(u / d)

    Parameters
    ----------
    wind : float
        Wind speed at the leaf (m s-1)
    d : float
        Leaf characteristic dimension (m)
    """
    return 0.003 * math.sqrt(wind / d)


@njit(cache=True, error_model="numpy")
def boundary_conductance_heat(
    t_air: float, t_leaf: float, wind: float, d: float, dh0: float
) -> float:
    """Total boundary layer conductance for heat, free plus forced (m s-1)."""
    return gbh_free(t_air, t_leaf, d, dh0) + gbh_forced(wind, d)


@njit(cache=True, error_model="numpy")
def medlyn_closure(g1: float, dl: float, cs: float) -> float:
    """
    Stomatal closure term of Medlyn et al. (2011), (1 + g1 / sqrt(Dl)) / Cs.

    Dl is floored at 1e-9 kPa so that a saturated leaf surface keeps the
    stomata fully open rather than producing a complex root.

    References
    ----------
    Medlyn, B. E., et al. 2011. Reconciling the optimal and empirical
    approaches to modelling stomatal conductance. Global Change Biology
    17: 2134-44.
    """
    if dl < 1e-9:
        dl = 1e-9
    return (1.0 + g1 / math.sqrt(dl)) / cs


@njit(cache=True, error_model="numpy")
def stomatal_conductance(g0: float, closure: float, a: float, gs_min: float) -> float:
    """Stomatal conductance to CO2, max(gs_min, g0 + closure * A)."""
    return max(gs_min, g0 + closure * a)
