"""Exceptions raised by the basket backtest core."""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when inputs cannot produce a meaningful backtest.

    The engines themselves degrade to empty results; this error is raised by
    the orchestration layer so callers can tell "nothing to compute" apart
    from a genuine result.
    """


class DegenerateInputError(ArithmeticError):
    """Raised when a price or portfolio value would be used as a zero or negative denominator."""


__all__ = ["InvalidInputError", "DegenerateInputError"]
