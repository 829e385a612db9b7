"""Meteorological driver records.

Provides:
- Atmosphere: read-only driver for one time step, with derived vapour
  pressure and psychrometric quantities
- Weather: ordered sequence of Atmosphere records for several time steps

Drivers are never mutated by the process functions; they may be shared
freely between model lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Iterator, Mapping

import pandas as pd

from leafsim.constants import DEFAULT_CONSTANTS, Constants
from leafsim.process.kernels.atmosphere import (
    air_density,
    atmosphere_emissivity,
    e_sat,
    e_sat_slope,
    latent_heat_vaporization,
    psychrometer_constant,
    vapor_pressure,
)

__all__ = ["Atmosphere", "Weather"]


@dataclass(frozen=True)
class Atmosphere:
    """Atmospheric conditions for one time step.

    Attributes
    ----------
    T : float
        Air temperature (degC)
    Wind : float
        Wind speed (m s-1)
    P : float
        Air pressure (kPa)
    Rh : float
        Relative humidity (0-1)
    Ca : float
        Atmospheric CO2 concentration (ppm)
    e : float
        Vapour pressure (kPa), derived from T and Rh if not given
    eS : float
        Saturated vapour pressure (kPa)
    VPD : float
        Vapour pressure deficit (kPa)
    rho : float
        Air density (kg m-3)
    lambda_v : float
        Latent heat of vaporisation (J kg-1)
    gamma : float
        Psychrometric constant (kPa K-1)
    epsilon : float
        Atmosphere emissivity
    Delta : float
        Slope of the saturation vapour pressure curve (kPa K-1)
    """

    T: float
    Wind: float
    P: float
    Rh: float
    Ca: float = 400.0
    e: float = None
    eS: float = None
    VPD: float = None
    rho: float = None
    lambda_v: float = None
    gamma: float = None
    epsilon: float = None
    Delta: float = None
    constants: Constants = field(default=DEFAULT_CONSTANTS, repr=False, compare=False)

    def __post_init__(self):
        """Derive unset quantities from T, P and Rh."""
        if not 0.0 <= self.Rh <= 1.0:
            raise ValueError(f"Rh should be a fraction in [0, 1], got {self.Rh}")

        c = self.constants
        derived = {}
        e = self.e if self.e is not None else vapor_pressure(self.T, self.Rh)
        es = self.eS if self.eS is not None else e_sat(self.T)
        derived["e"] = e
        derived["eS"] = es
        derived["VPD"] = self.VPD if self.VPD is not None else es - e
        derived["rho"] = self.rho if self.rho is not None else air_density(self.T, self.P, c.Rd, c.K0)
        lambda_v = (
            self.lambda_v
            if self.lambda_v is not None
            else latent_heat_vaporization(self.T, c.lambda0)
        )
        derived["lambda_v"] = lambda_v
        derived["gamma"] = (
            self.gamma
            if self.gamma is not None
            else psychrometer_constant(self.P, lambda_v, c.Cp, c.epsilon)
        )
        derived["epsilon"] = (
            self.epsilon if self.epsilon is not None else atmosphere_emissivity(self.T, e, c.K0)
        )
        derived["Delta"] = self.Delta if self.Delta is not None else e_sat_slope(self.T)

        for name, value in derived.items():
            object.__setattr__(self, name, float(value))

    def to_dict(self) -> dict[str, float]:
        """Driver values keyed by name (constants excluded)."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "constants"}


class Weather:
    """Ordered sequence of Atmosphere records, one per time step.

    Parameters
    ----------
    data : iterable of Atmosphere
        Driver records in time order
    metadata : mapping, optional
        Free-form description of the series (site name, source...)
    """

    def __init__(self, data: Iterable[Atmosphere], metadata: Mapping[str, Any] | None = None):
        self._data = tuple(data)
        if not self._data:
            raise ValueError("Weather needs at least one Atmosphere record")
        for record in self._data:
            if not isinstance(record, Atmosphere):
                raise TypeError(f"Weather expects Atmosphere records, got {type(record).__name__}")
        self.metadata = dict(metadata or {})

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        metadata: Mapping[str, Any] | None = None,
        constants: Constants = DEFAULT_CONSTANTS,
    ) -> Weather:
        """Build a Weather from a DataFrame with one row per time step.

        Columns must include T, Wind, P and Rh; any other Atmosphere field
        present (Ca, VPD...) is used instead of being derived. Unknown
        columns are ignored.
        """
        names = {f.name for f in fields(Atmosphere)} - {"constants"}
        missing = {"T", "Wind", "P", "Rh"} - set(df.columns)
        if missing:
            raise KeyError(f"Missing meteorology columns: {sorted(missing)}")
        cols = [c for c in df.columns if c in names]
        records = [
            Atmosphere(**{c: float(v) for c, v in zip(cols, row)}, constants=constants)
            for row in df[cols].itertuples(index=False, name=None)
        ]
        return cls(records, metadata)

    def to_dataframe(self) -> pd.DataFrame:
        """Export the driver records as a DataFrame, one row per time step."""
        return pd.DataFrame([r.to_dict() for r in self._data])

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Atmosphere]:
        return iter(self._data)

    def __getitem__(self, i: int) -> Atmosphere:
        return self._data[i]

    def __repr__(self) -> str:
        return f"Weather(n={len(self)}, metadata={self.metadata!r})"
