"""Leaf energy balance model variants.

Monteith: iterative leaf energy balance of Monteith & Unsworth (2013),
with the apparent psychrometric constant of Schymanski & Or (2017), coupled
to the photosynthesis and stomatal conductance variants of the same
ModelList.

References
----------
Monteith, J. L. and Unsworth, M. H. 2013. Chapter 13, Steady-state heat
balance: (i) water surfaces, soil, and vegetation. Principles of
Environmental Physics, 4th ed., 217-47.

Schymanski, S. J. and Or, D. 2017. Leaf-scale experiments reveal an
important omission in the Penman-Monteith equation. Hydrology and Earth
System Sciences 21: 685-706.

Vezy, R., et al. 2018. Measuring and modelling energy partitioning in
canopies of varying complexity using MAESPA model. Agricultural and Forest
Meteorology 253-254: 203-17.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from leafsim.logging import get_logger
from leafsim.models.base import EnergyBalanceModel
from leafsim.models.registry import register_model
from leafsim.process.kernels.atmosphere import e_sat, mol_to_ms, ms_to_mol
from leafsim.process.kernels.conductance import boundary_conductance_heat
from leafsim.process.kernels.energy import (
    gamma_star_apparent,
    latent_heat,
    leaf_temperature,
    net_longwave_radiation,
    sensible_heat,
)

__all__ = ["Monteith"]

log = get_logger("solver")


@register_model("energy")
@dataclass(frozen=True)
class Monteith(EnergyBalanceModel):
    """Iterative leaf energy balance.

    Leaf temperature is iterated from Ta - 0.2 degC. Each iteration updates
    net radiation from the longwave exchange at the current leaf
    temperature, the boundary layer conductances, the apparent psychrometric
    constant, the latent heat flux and a new leaf temperature; when
    photosynthesis or stomatal conductance variants are installed they are
    re-evaluated at the new leaf temperature and the surface CO2 is updated
    from the boundary layer conductance to CO2.

    Iteration stops when the leaf temperature changes by at most delta_t or
    after maxiter iterations. Reaching maxiter is not an error: the last
    estimate is kept and ``converged`` is False.

    Attributes
    ----------
    a_sh : float
        Number of leaf sides exchanging sensible heat
    a_sv : float
        Number of leaf sides exchanging water vapour (1 for hypostomatous
        leaves, 2 for amphistomatous leaves)
    epsilon : float
        Leaf emissivity
    maxiter : int
        Maximum number of iterations
    delta_t : float
        Tolerance on leaf temperature between two iterations (degC)
    """

    a_sh: float = 2.0
    a_sv: float = 1.0
    epsilon: float = 0.955
    maxiter: int = 10
    delta_t: float = 0.01

    inputs = ("Rs", "sky_fraction", "d")
    outputs = (
        "Tl",
        "Rn",
        "Rll",
        "H",
        "lambda_E",
        "Cs",
        "Dl",
        "Gbh",
        "Gbc",
        "iter",
        "converged",
    )
    dtypes = {"iter": np.int64, "converged": np.bool_}

    def __post_init__(self):
        if self.maxiter < 1:
            raise ValueError(f"maxiter should be at least 1, got {self.maxiter}")

    def energy_balance(self, row, models, meteo, constants) -> None:
        c = constants
        photo = models.photosynthesis
        stomata = models.stomatal_conductance
        coupled = photo is not None or stomata is not None
        has_gs = stomata is not None or (photo is not None and "Gs" in photo.outputs)

        rs = row.Rs
        sky_fraction = row.sky_fraction
        d = row.d

        tl = meteo.T - 0.2
        rn = rs
        gbh = boundary_conductance_heat(meteo.T, tl, meteo.Wind, d, c.Dh0)
        gbc = ms_to_mol(gbh, meteo.T, meteo.P, c.R, c.K0) / c.Gbc_to_Gbh
        row.Tl = tl
        row.Rn = rn
        row.Dl = meteo.VPD
        row.Cs = meteo.Ca
        row.Gbh = gbh
        row.Gbc = gbc

        # A stomatal resistance is needed before the first iteration
        if coupled:
            self._assimilate(row, models, meteo, c)

        converged = False
        iteration = 0
        delta = np.inf
        gamma_s = meteo.gamma
        rbh = 1.0 / np.float64(gbh)
        while iteration < self.maxiter:
            iteration += 1

            rll = net_longwave_radiation(
                meteo.T, tl, meteo.epsilon, self.epsilon, sky_fraction, c.K0, c.sigma
            )
            rn = rs + rll

            gbh = boundary_conductance_heat(meteo.T, tl, meteo.Wind, d, c.Dh0)
            rbh = 1.0 / np.float64(gbh)
            rbv = 1.0 / np.float64(gbh * c.Gbh_to_Gbw)
            gbc = ms_to_mol(gbh, meteo.T, meteo.P, c.R, c.K0) / c.Gbc_to_Gbh

            if has_gs:
                gsw = mol_to_ms(row.Gs * c.Gsc_to_Gsw, meteo.T, meteo.P, c.R, c.K0)
                rsv = 1.0 / np.float64(gsw)
            else:
                # No stomatal control: evaporation at the potential rate
                rsv = 0.0

            gamma_s = gamma_star_apparent(meteo.gamma, self.a_sh, self.a_sv, rbv, rsv, rbh)
            lambda_e = latent_heat(
                rn, meteo.VPD, gamma_s, rbh, meteo.Delta, meteo.rho, self.a_sh, c.Cp
            )
            tl_new = leaf_temperature(meteo.T, rn, lambda_e, meteo.rho, c.Cp, self.a_sh, rbh)

            delta = abs(tl_new - tl)
            tl = tl_new

            row.Tl = tl
            row.Dl = e_sat(tl) - meteo.e
            row.Rn = rn
            row.Rll = rll
            row.lambda_E = lambda_e
            row.Gbh = gbh
            row.Gbc = gbc

            if coupled:
                self._assimilate(row, models, meteo, c)
                if "A" in row:
                    row.Cs = min(meteo.Ca, meteo.Ca - row.A / np.float64(gbc))

            if delta <= self.delta_t:
                converged = True
                break

        if not converged:
            log.warning(
                "max_iterations_reached",
                iterations=iteration,
                delta_t=float(delta),
                tolerance=self.delta_t,
                tl=float(tl),
            )

        row.H = sensible_heat(
            rn, meteo.VPD, gamma_s, rbh, meteo.Delta, meteo.rho, self.a_sh, c.Cp
        )
        row.iter = iteration
        row.converged = converged

    @staticmethod
    def _assimilate(row, models, meteo, constants) -> None:
        """Re-evaluate the coupled carbon and conductance variants for row."""
        photo = models.photosynthesis
        stomata = models.stomatal_conductance
        if photo is not None:
            photo.run(row, models, meteo, constants)
        if stomata is not None and (photo is None or "Gs" not in photo.outputs):
            stomata.run(row, models, meteo, constants)
