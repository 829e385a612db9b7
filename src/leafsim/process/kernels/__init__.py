"""
Physics kernels for leafsim.

Design Rules:
1. Functions take scalars as input and return scalars
2. No file I/O, no `self`, no state mutation
3. Units and physical constraints documented in docstrings
4. Numba JIT compiled with cache=True and the numpy error model, so that
   divisions by zero give inf/nan instead of raising
"""

from leafsim.process.kernels import (
    atmosphere,
    conductance,
    energy,
    photosynthesis,
    temperature,
)

__all__ = [
    "atmosphere",
    "conductance",
    "energy",
    "photosynthesis",
    "temperature",
]
