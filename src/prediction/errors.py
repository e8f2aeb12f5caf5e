"""
Prediction error types.
"""
from keyboard.alphabet import UnsupportedSymbolError


class DimensionMismatchError(ValueError):
    """Two vectors of different length were combined."""


class InvalidStateError(RuntimeError):
    """Operation is not valid for the predictor's current state."""


__all__ = [
    'UnsupportedSymbolError',
    'DimensionMismatchError',
    'InvalidStateError',
]
