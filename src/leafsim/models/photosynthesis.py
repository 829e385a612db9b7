"""Photosynthesis model variants.

Three resolutions of the Farquhar, von Caemmerer & Berry (1980) model for
C3 leaves:

- FvcbRaw: assimilation for a caller-supplied intercellular CO2 (Ci)
- Fvcb: analytical coupling with stomatal conductance (Duursma & Medlyn 2012)
- FvcbIter: iterative coupling with stomatal and boundary layer conductance

References
----------
Farquhar, G. D., von Caemmerer, S. and Berry, J. A. 1980. A biochemical
model of photosynthetic CO2 assimilation in leaves of C3 species. Planta
149: 78-90.

von Caemmerer, S. and Farquhar, G. D. 1981. Some relationships between the
biochemistry of photosynthesis and the gas exchange of leaves. Planta 153:
376-87.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from leafsim.models.base import PhotosynthesisModel
from leafsim.models.registry import register_model
from leafsim.process.kernels.photosynthesis import (
    assimilation_coupled,
    assimilation_from_ci,
    electron_transport,
    intercellular_co2,
)
from leafsim.process.kernels.temperature import (
    arrhenius,
    arrhenius_peaked,
    gamma_star,
    michaelis_menten,
)

__all__ = ["FvcbParameters", "FvcbRaw", "Fvcb", "FvcbIter"]


@dataclass(frozen=True)
class FvcbParameters:
    """Parameters shared by the FvCB variants.

    Attributes
    ----------
    Tr : float
        Reference temperature of the parameters (degC)
    VcMaxRef : float
        Maximum rate of Rubisco activity at Tr (umol m-2 s-1)
    JMaxRef : float
        Potential rate of electron transport at Tr (umol m-2 s-1)
    RdRef : float
        Day respiration at Tr (umol m-2 s-1)
    TPURef : float
        Triose phosphate utilisation rate at Tr (umol m-2 s-1)
    Ea_r : float
        Activation energy of Rd (J mol-1)
    O2 : float
        Intercellular O2 concentration (mmol mol-1)
    Ea_j, Hd_j, Delta_s_j : float
        Activation energy (J mol-1), deactivation energy (J mol-1) and
        entropy term (J mol-1 K-1) of JMax
    Ea_v, Hd_v, Delta_s_v : float
        Same for VcMax
    alpha : float
        Quantum yield of electron transport (mol e- mol-1 photon)
    theta : float
        Curvature of the light response
    """

    Tr: float = 25.0
    VcMaxRef: float = 200.0
    JMaxRef: float = 250.0
    RdRef: float = 0.6
    TPURef: float = 9999.0
    Ea_r: float = 46390.0
    O2: float = 210.0
    Ea_j: float = 29680.0
    Hd_j: float = 200000.0
    Delta_s_j: float = 631.88
    Ea_v: float = 58550.0
    Hd_v: float = 200000.0
    Delta_s_v: float = 629.26
    alpha: float = 0.24
    theta: float = 0.7

    def limiting_rates(self, tl: float, ppfd: float, constants) -> tuple:
        """Temperature-corrected rates at leaf temperature tl (degC).

        Returns
        -------
        tuple
            (Gamma*, Km, Vj, VcMax, Rd)
        """
        tk = tl - constants.K0
        trk = self.Tr - constants.K0
        r = constants.R
        jmax = arrhenius_peaked(self.JMaxRef, self.Ea_j, tk, trk, self.Hd_j, self.Delta_s_j, r)
        vcmax = arrhenius_peaked(self.VcMaxRef, self.Ea_v, tk, trk, self.Hd_v, self.Delta_s_v, r)
        rd = arrhenius(self.RdRef, self.Ea_r, tk, trk, r)
        j = electron_transport(ppfd, jmax, self.alpha, self.theta)
        return (
            gamma_star(tk, trk, r),
            michaelis_menten(tk, trk, self.O2, r),
            j / 4.0,
            vcmax,
            rd,
        )


@register_model("photosynthesis")
@dataclass(frozen=True)
class FvcbRaw(FvcbParameters, PhotosynthesisModel):
    """Direct FvCB assimilation for a known intercellular CO2 concentration."""

    inputs = ("PPFD", "Tl", "Ci")
    outputs = ("A",)
    requires_stomatal_conductance = False

    def photosynthesis(self, row, models, meteo, constants) -> None:
        gamma, km, vj, vcmax, rd = self.limiting_rates(row.Tl, row.PPFD, constants)
        row.A = assimilation_from_ci(row.Ci, vj, vcmax, gamma, km, self.TPURef, rd)


@register_model("photosynthesis")
@dataclass(frozen=True)
class Fvcb(FvcbParameters, PhotosynthesisModel):
    """FvCB assimilation coupled analytically to stomatal conductance.

    Needs a stomatal conductance variant in the same ModelList: the coupled
    system A(Ci), gs(A), A = gs (Cs - Ci) is solved in closed form for the
    electron transport and Rubisco limited rates.
    """

    inputs = ("PPFD", "Tl", "Cs")
    outputs = ("A", "Gs", "Ci")

    def photosynthesis(self, row, models, meteo, constants) -> None:
        stomata = models.stomatal_conductance
        gamma, km, vj, vcmax, rd = self.limiting_rates(row.Tl, row.PPFD, constants)
        closure = stomata.closure(row, meteo)
        cs = row.Cs
        a = assimilation_coupled(vj, vcmax, gamma, km, self.TPURef, rd, cs, stomata.g0, closure)
        gs = stomata.conductance(closure, a)
        row.A = a
        row.Gs = gs
        row.Ci = intercellular_co2(cs, a, gs)


@register_model("photosynthesis")
@dataclass(frozen=True)
class FvcbIter(FvcbParameters, PhotosynthesisModel):
    """FvCB assimilation coupled iteratively to stomatal and boundary conductance.

    Starting from Cs = Ca and Ci = 0.75 Cs, alternates assimilation,
    stomatal conductance, surface CO2 (from the boundary layer conductance
    Gbc) and intercellular CO2 until assimilation changes by at most delta_a
    or iter_a_max iterations are done.

    Attributes
    ----------
    iter_a_max : int
        Maximum number of iterations
    delta_a : float
        Tolerance on assimilation between two iterations (umol m-2 s-1)
    """

    iter_a_max: int = 20
    delta_a: float = 1.0

    inputs = ("PPFD", "Tl", "Gbc", "Dl")
    outputs = ("A", "Gs", "Ci", "Cs")
    needs_meteo = True

    def __post_init__(self):
        if self.iter_a_max < 1:
            raise ValueError(f"iter_a_max should be at least 1, got {self.iter_a_max}")

    def photosynthesis(self, row, models, meteo, constants) -> None:
        stomata = models.stomatal_conductance
        gamma, km, vj, vcmax, rd = self.limiting_rates(row.Tl, row.PPFD, constants)
        ca = meteo.Ca
        gbc = row.Gbc

        row.Cs = ca
        ci = 0.75 * ca
        a_prev = math.nan
        for i in range(self.iter_a_max):
            a = assimilation_from_ci(ci, vj, vcmax, gamma, km, self.TPURef, rd)
            gs = stomata.conductance(stomata.closure(row, meteo), a)
            cs = min(ca, ca - a / np.float64(gbc))
            row.Cs = cs
            ci = intercellular_co2(cs, a, gs)
            if abs(a - a_prev) <= self.delta_a:
                break
            a_prev = a

        row.A = a
        row.Gs = gs
        row.Ci = ci
