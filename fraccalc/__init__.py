"""Fraction calculator: fixed-width rationals and an infix expression solver."""

from fraccalc.errors import (
    FracCalcError,
    InvalidOperationError,
    MalformedExpressionError,
    MalformedLiteralError,
    NullInputError,
)
from fraccalc.rational import (
    NEGATIVE_INFINITY,
    ONE,
    POSITIVE_INFINITY,
    ZERO,
    NaN,
    Rational,
    RenderMode,
)
from fraccalc.solver import evaluate, solve

__version__ = "1.0.0"

__all__ = [
    "FracCalcError",
    "InvalidOperationError",
    "MalformedExpressionError",
    "MalformedLiteralError",
    "NullInputError",
    "NEGATIVE_INFINITY",
    "ONE",
    "POSITIVE_INFINITY",
    "ZERO",
    "NaN",
    "Rational",
    "RenderMode",
    "evaluate",
    "solve",
]
