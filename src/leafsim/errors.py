"""Exceptions raised by leafsim.

All validation happens before a process mutates any status row, so an
exception from this module always leaves the caller's objects untouched.
Numeric problems (division by zero, overflow) are not exceptions: they show
up as non-finite values in the status.
"""

from __future__ import annotations

__all__ = [
    "LeafSimError",
    "UninitializedInput",
    "SchemaMismatch",
    "LengthMismatch",
    "UnknownVariable",
    "IncompatibleModel",
    "UnknownModel",
]


class LeafSimError(Exception):
    """Base class for leafsim errors."""


class UninitializedInput(LeafSimError):
    """Raised when a required status variable still holds its sentinel."""

    def __init__(self, variables, process: str | None = None):
        self.variables = tuple(variables)
        self.process = process
        where = f" for {process}" if process else ""
        super().__init__(
            f"Some variables must be initialized before simulation{where}: "
            f"{', '.join(self.variables)}"
        )


class SchemaMismatch(LeafSimError):
    """Raised when per-variable sequences cannot be broadcast together."""


class LengthMismatch(SchemaMismatch):
    """Raised when a sequence length does not match the number of rows."""


class UnknownVariable(KeyError, LeafSimError):
    """Raised when a variable is not part of the status schema."""

    def __str__(self):
        return str(self.args[0]) if self.args else ""


class IncompatibleModel(LeafSimError):
    """Raised when a model variant cannot be installed in a process slot."""


class UnknownModel(LeafSimError):
    """Raised when a model file names a variant that is not registered."""
