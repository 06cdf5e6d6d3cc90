# errors.py

"""
Exception hierarchy for the fraction calculator.

Every failure raised by the package derives from FracCalcError so that the
command line shell can report any bad expression and keep going. The concrete
classes also derive from the closest builtin exception so that callers who
only know about ValueError / ArithmeticError / TypeError still catch them.
"""


class FracCalcError(Exception):
    """Base class for fraction calculator errors."""
    pass


class MalformedLiteralError(FracCalcError, ValueError):
    """Raised when a value token does not parse as a fraction literal."""
    pass


class MalformedExpressionError(FracCalcError):
    """Raised when a token sequence is not a valid infix expression."""
    pass


class InvalidOperationError(FracCalcError, ArithmeticError):
    """Raised for numerically undefined operations (NaN comparisons, etc)."""
    pass


class NullInputError(FracCalcError, TypeError):
    """Raised when an input line or literal is absent (None)."""
    pass
