"""Physical constants used by the leafsim process kernels.

The constants are carried around as a single frozen record so that every
process call can be given an alternative set without touching module
globals. Kernels never read this module directly; they receive the values
they need as arguments.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

__all__ = ["Constants", "DEFAULT_CONSTANTS"]


@dataclass(frozen=True, slots=True)
class Constants:
    """Physical constants.

    Attributes
    ----------
    K0 : float
        Absolute zero (degC)
    R : float
        Universal gas constant (J mol-1 K-1)
    Rd : float
        Gas constant of dry air (J kg-1 K-1)
    Dh0 : float
        Molecular diffusivity for heat at base temperature (m2 s-1)
    Cp : float
        Specific heat of air at constant pressure (J K-1 kg-1)
    epsilon : float
        Ratio of molecular weights of water vapour and dry air
    lambda0 : float
        Latent heat of vaporisation of water at 0 degC (MJ kg-1)
    sigma : float
        Stefan-Boltzmann constant (W m-2 K-4)
    Gbh_to_Gbw : float
        Ratio between boundary layer conductance for water vapour and heat
    Gsc_to_Gsw : float
        Ratio between stomatal conductance to water vapour and to CO2
    Gbc_to_Gbh : float
        Ratio between boundary layer conductance for heat and for CO2
    M_H2O : float
        Molar mass of water (kg mol-1)
    """

    K0: float = -273.15
    R: float = 8.314
    Rd: float = 287.0586
    Dh0: float = 21.5e-6
    Cp: float = 1013.0
    epsilon: float = 0.622
    lambda0: float = 2.501
    sigma: float = 5.670373e-08
    Gbh_to_Gbw: float = 1.075
    Gsc_to_Gsw: float = 1.57
    Gbc_to_Gbh: float = 1.32
    M_H2O: float = 18.0e-3

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


DEFAULT_CONSTANTS = Constants()
