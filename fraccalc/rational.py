# rational.py

"""
Fixed-width rational numbers.

A Rational is an immutable numerator/denominator pair whose parts both fit in
a 32-bit signed integer once reduced. A zero denominator encodes one of the
special values:

    numerator == 0            -> NaN
    numerator == INT_MAX      -> +Infinity
    numerator == INT_MIN + 1  -> -Infinity

Arithmetic is total: special values propagate according to the rules in the
individual functions, and results that do not fit are mapped back into range
(see _from_wide). Intermediate products are computed on Python ints, so the
range decision is only taken once, after reduction.

Literals accepted by Rational.parse:

    [sign] integer                      e.g. "12", "-7"
    [sign] numerator/denominator        e.g. "3/4", "+27/5"
    [sign] whole_numerator/denominator  e.g. "-3_10/11"
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum
from fractions import Fraction
from typing import Optional, Union

from fraccalc.errors import InvalidOperationError, MalformedLiteralError, NullInputError

logger = logging.getLogger(__name__)

# --------------------------
# Limits and literals
# --------------------------

INT_MAX = 2**31 - 1
INT_MIN = -(2**31)
SHORT_MAX = 2**15 - 1
SHORT_MIN = -(2**15)
BYTE_MAX = 2**7 - 1
BYTE_MIN = -(2**7)

_POSITIVE_INFINITY_NUMERATOR = INT_MAX
# INT_MIN + 1 so that negating +Infinity's numerator gives -Infinity's.
_NEGATIVE_INFINITY_NUMERATOR = INT_MIN + 1

NAN_STRING = "NaN"
POSITIVE_INFINITY_STRING = "+Infinity"
NEGATIVE_INFINITY_STRING = "-Infinity"

_LITERAL_PATTERN = re.compile(
    r"(?P<sign>[+-]?)"
    r"(?:(?P<integer>[0-9]+)"
    r"|(?:(?P<whole>[0-9]+)_)?(?P<numerator>[0-9]+)/(?P<denominator>[0-9]+))"
)


class RenderMode(Enum):
    """How improper ("top heavy") fractions are rendered to strings."""
    RATIO = "ratio"
    MIXED = "mixed"


Operand = Union["Rational", int]

# --------------------------
# Rational
# --------------------------


class Rational:
    """Immutable reduced fraction, or one of NaN / +Infinity / -Infinity.

    Rational(num, den) behaves like Rational.from_ratio(num, den). Values equal
    to ZERO, ONE, NaN or either infinity are always the shared constants, so
    `value is ZERO` is a valid test.
    """

    __slots__ = ("_num", "_den")

    def __new__(cls, num: int, den: int = 1) -> Rational:
        return Rational.from_ratio(num, den)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Rational values are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Rational values are immutable")

    def __reduce__(self):
        # (INT_MAX, 0), (INT_MIN + 1, 0) and (0, 0) rebuild the constants.
        return (Rational, (self._num, self._den))

    # ---- construction ----

    @classmethod
    def from_int(cls, value: int) -> Rational:
        """Whole number value; saturates to an infinity outside 32 bits."""
        _require_int(value, "value")
        return _from_wide(value, 1)

    @classmethod
    def from_ratio(cls, num: int, den: int) -> Rational:
        """Reduced num/den. A zero denominator gives an infinity (or NaN for 0/0)."""
        _require_int(num, "numerator")
        _require_int(den, "denominator")
        if den == 0:
            return _intern(num, 0)
        return _from_wide(num, den)

    @classmethod
    def from_mixed(cls, whole: int, num: int, den: int) -> Rational:
        """Value of the mixed fraction whole num/den.

        The result is negative when whole is negative, or when whole is zero
        and num is negative; the signs of num and den are otherwise ignored.
        A zero denominator gives NaN.
        """
        _require_int(whole, "whole")
        _require_int(num, "numerator")
        _require_int(den, "denominator")
        negative = whole < 0 or (whole == 0 and num < 0)
        d = abs(den)
        n = abs(whole) * d + abs(num)
        return _from_wide(-n if negative else n, d)

    @classmethod
    def parse(cls, text: Optional[str]) -> Rational:
        """Parse an integer, fraction or mixed fraction literal.

        Raises NullInputError for None and MalformedLiteralError for anything
        that does not match the literal grammar, or whose integer parts do not
        fit in a 32-bit signed integer.
        """
        if text is None:
            raise NullInputError("Cannot parse None as a fraction")
        found = _LITERAL_PATTERN.fullmatch(text.strip())
        if found is None:
            raise MalformedLiteralError(f"String not parsable as a fraction: {text!r}")

        sign = -1 if found.group("sign") == "-" else 1
        integer = _digits(found.group("integer"), text)
        whole = _digits(found.group("whole"), text)
        numerator = _digits(found.group("numerator"), text)
        denominator = _digits(found.group("denominator"), text)

        if integer is not None:
            return cls.from_int(_in_range(sign * integer, text))
        _in_range(denominator, text)
        if whole is not None:
            if whole == 0:
                numerator *= sign
            else:
                whole *= sign
            return cls.from_mixed(_in_range(whole, text), _in_range(numerator, text), denominator)
        return cls.from_ratio(_in_range(sign * numerator, text), denominator)

    # ---- introspection ----

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    @property
    def sign(self) -> int:
        """-1, 0 or +1 according to the sign of the numerator."""
        return (self._num > 0) - (self._num < 0)

    def is_nan(self) -> bool:
        return self._den == 0 and not self.is_infinite()

    def is_infinite(self) -> bool:
        return self.is_positive_infinity() or self.is_negative_infinity()

    def is_positive_infinity(self) -> bool:
        return self._den == 0 and self._num == _POSITIVE_INFINITY_NUMERATOR

    def is_negative_infinity(self) -> bool:
        return self._den == 0 and self._num == _NEGATIVE_INFINITY_NUMERATOR

    def is_finite(self) -> bool:
        return self._den != 0

    @property
    def mixed_whole(self) -> int:
        """Whole part when viewed as a mixed fraction (truncated toward zero)."""
        self._require_finite("NaN or infinities cannot be represented as a mixed fraction")
        return _truncated_quotient(self._num, self._den)

    @property
    def mixed_numerator(self) -> int:
        """Numerator of the (non-negative) fractional part of the mixed form."""
        self._require_finite("NaN or infinities cannot be represented as a mixed fraction")
        return abs(self._num) % self._den

    def _require_finite(self, message: str) -> None:
        if self._den == 0:
            raise InvalidOperationError(message)

    # ---- comparison ----

    def compare_to(self, other: Optional[Rational]) -> int:
        """Three-way numeric comparison.

        Returns a negative number, zero or a positive number. None sorts
        greater than any value. Comparing NaN, or two infinities of the same
        sign, raises InvalidOperationError.
        """
        if other is None:
            return -1
        if self.is_nan() or other.is_nan():
            raise InvalidOperationError("Comparisons involving NaN are undefined")
        if self.is_infinite() and other.is_infinite():
            if self._num == other._num:
                raise InvalidOperationError("Comparisons between same signed infinities are undefined")
            return 1 if self.is_positive_infinity() else -1
        if self.is_infinite():
            return 1 if self.is_positive_infinity() else -1
        if other.is_infinite():
            return -1 if other.is_positive_infinity() else 1
        left = self._num * other._den
        right = self._den * other._num
        return (left > right) - (left < right)

    def _compare(self, other: object) -> Optional[int]:
        if other is None:
            return self.compare_to(None)
        coerced = _coerce(other)
        if coerced is None:
            return None
        return self.compare_to(coerced)

    def __lt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    def __eq__(self, other: object) -> bool:
        # Structural: NaN == NaN holds, unlike float.
        if isinstance(other, int):
            # No saturation here: 2**40 is not equal to +Infinity.
            return self._den == 1 and self._num == other
        if not isinstance(other, Rational):
            return NotImplemented
        return self._num == other._num and self._den == other._den

    def __hash__(self) -> int:
        # Whole numbers hash like the equal int.
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    # ---- arithmetic operators ----

    def __add__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else add(self, coerced)

    def __radd__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else add(coerced, self)

    def __sub__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else subtract(self, coerced)

    def __rsub__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else subtract(coerced, self)

    def __mul__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else multiply(self, coerced)

    def __rmul__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else multiply(coerced, self)

    def __truediv__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else divide(self, coerced)

    def __rtruediv__(self, other: Operand) -> Rational:
        coerced = _coerce(other)
        return NotImplemented if coerced is None else divide(coerced, self)

    def __neg__(self) -> Rational:
        return negate(self)

    def __pos__(self) -> Rational:
        return self

    def __abs__(self) -> Rational:
        if self._num < 0:
            return negate(self)
        return self

    def __bool__(self) -> bool:
        return self is not ZERO

    # ---- conversions ----

    def to_long(self) -> int:
        """Integer value truncated toward zero.

        Raises InvalidOperationError for NaN and the infinities.
        """
        if self.is_nan():
            raise InvalidOperationError("NaN has no integer representation")
        if self.is_infinite():
            raise InvalidOperationError("Infinity has no integer representation")
        return _truncated_quotient(self._num, self._den)

    def __int__(self) -> int:
        return self.to_long()

    def to_int32(self) -> int:
        return _saturate(self.to_long(), INT_MIN, INT_MAX)

    def to_short(self) -> int:
        return _saturate(self.to_long(), SHORT_MIN, SHORT_MAX)

    def to_byte(self) -> int:
        return _saturate(self.to_long(), BYTE_MIN, BYTE_MAX)

    def __float__(self) -> float:
        if self.is_nan():
            return math.nan
        if self.is_positive_infinity():
            return math.inf
        if self.is_negative_infinity():
            return -math.inf
        return self._num / self._den

    # ---- formatting ----

    def to_string(self, mode: RenderMode = RenderMode.RATIO) -> str:
        """Render as "num/den" (or a bare integer); MIXED renders improper
        fractions as "whole_num/den"."""
        if self.is_positive_infinity():
            return POSITIVE_INFINITY_STRING
        if self.is_negative_infinity():
            return NEGATIVE_INFINITY_STRING
        if self.is_nan():
            return NAN_STRING
        if self._den == 1:
            return str(self._num)
        if mode is RenderMode.MIXED and abs(self._num) > self._den:
            return f"{self.mixed_whole}_{self.mixed_numerator}/{self._den}"
        return f"{self._num}/{self._den}"

    def __str__(self) -> str:
        return self.to_string(RenderMode.RATIO)

    def __repr__(self) -> str:
        if self.is_nan():
            return "Rational.NaN"
        if self.is_positive_infinity():
            return "Rational.POSITIVE_INFINITY"
        if self.is_negative_infinity():
            return "Rational.NEGATIVE_INFINITY"
        return f"Rational({self._num}, {self._den})"


# --------------------------
# Construction helpers
# --------------------------

def _raw(num: int, den: int) -> Rational:
    value = object.__new__(Rational)
    object.__setattr__(value, "_num", num)
    object.__setattr__(value, "_den", den)
    return value


def _intern(num: int, den: int) -> Rational:
    """Return the shared constant for num/den if there is one.

    With den == 0 only the sign of num matters. num/den must already be
    reduced and in range otherwise.
    """
    if den == 0:
        if num > 0:
            return POSITIVE_INFINITY
        if num < 0:
            return NEGATIVE_INFINITY
        return NaN
    if den == 1:
        if num == 0:
            return ZERO
        if num == 1:
            return ONE
    return _raw(num, den)


def _from_wide(num: int, den: int) -> Rational:
    """Reduce an unbounded num/den pair and map it into the 32-bit range.

    - a reduced denominator of zero is NaN;
    - a denominator that does not fit is rounded to the closest fraction whose
      denominator does, so very small magnitudes become ZERO;
    - a numerator above INT_MAX is +Infinity, below INT_MIN is -Infinity.
    """
    if den < 0:
        num, den = -num, -den
    g = math.gcd(num, den) or 1
    num //= g
    den //= g
    if den == 0:
        return NaN
    if den > INT_MAX:
        approx = Fraction(num, den).limit_denominator(INT_MAX)
        logger.debug(f"Denominator of {num}/{den} out of range, rounded to {approx}")
        num, den = approx.numerator, approx.denominator
    if num > INT_MAX:
        return POSITIVE_INFINITY
    if num < INT_MIN:
        return NEGATIVE_INFINITY
    return _intern(num, den)


_MAX_COMPONENT_DIGITS = len(str(INT_MAX))


def _digits(digits: Optional[str], text: str) -> Optional[int]:
    if not digits:
        return None
    # Anything longer cannot fit in 32 bits, and int() refuses very long strings.
    if len(digits.lstrip("0")) > _MAX_COMPONENT_DIGITS:
        raise MalformedLiteralError(f"Component {digits[:12]}... of {text[:40]!r} does not fit in a 32-bit integer")
    return int(digits)


def _in_range(value: int, text: str) -> int:
    if not INT_MIN <= value <= INT_MAX:
        raise MalformedLiteralError(f"Component {value} of {text!r} does not fit in a 32-bit integer")
    return value


def _require_int(value: object, name: str) -> None:
    if not isinstance(value, int):
        raise TypeError(f"Rational {name} must be an int, got {type(value).__name__}")


def _coerce(value: object) -> Optional[Rational]:
    if isinstance(value, Rational):
        return value
    if isinstance(value, int):
        return Rational.from_int(value)
    return None


def _truncated_quotient(num: int, den: int) -> int:
    q = abs(num) // den
    return -q if num < 0 else q


def _saturate(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


# --------------------------
# Constants
# --------------------------

ZERO = _raw(0, 1)
ONE = _raw(1, 1)
MAX_VALUE = _raw(INT_MAX, 1)
MIN_VALUE = _raw(INT_MIN, 1)
POSITIVE_INFINITY = _raw(_POSITIVE_INFINITY_NUMERATOR, 0)
NEGATIVE_INFINITY = _raw(_NEGATIVE_INFINITY_NUMERATOR, 0)
NaN = _raw(0, 0)

Rational.ZERO = ZERO
Rational.ONE = ONE
Rational.MAX_VALUE = MAX_VALUE
Rational.MIN_VALUE = MIN_VALUE
Rational.POSITIVE_INFINITY = POSITIVE_INFINITY
Rational.NEGATIVE_INFINITY = NEGATIVE_INFINITY
Rational.NaN = NaN

# --------------------------
# Arithmetic
# --------------------------

def negate(value: Rational) -> Rational:
    """-value. NaN stays NaN and the infinities swap."""
    if value.is_nan():
        return NaN
    if value.is_positive_infinity():
        return NEGATIVE_INFINITY
    if value.is_negative_infinity():
        return POSITIVE_INFINITY
    return _from_wide(-value.numerator, value.denominator)


def reciprocal(value: Rational) -> Rational:
    """1/value. Infinities give ZERO; zero and NaN give NaN."""
    if value.is_infinite():
        return ZERO
    if value.denominator == 0 or value.numerator == 0:
        return NaN
    return Rational.from_ratio(value.denominator, value.numerator)


def add(a: Rational, b: Rational) -> Rational:
    if a.is_nan() or b.is_nan():
        return NaN
    if a.is_infinite() and b.is_infinite() and a.sign != b.sign:
        return NaN
    if a.is_infinite():
        return a
    if b.is_infinite():
        return b

    red = math.gcd(a.denominator, b.denominator)
    a_scalar = a.denominator // red
    b_scalar = b.denominator // red
    common_den = a_scalar * b_scalar * red
    result_num = a_scalar * b.numerator + b_scalar * a.numerator
    return _from_wide(result_num, common_den)


def subtract(a: Rational, b: Rational) -> Rational:
    return add(a, negate(b))


def multiply(a: Rational, b: Rational) -> Rational:
    if a.is_nan() or b.is_nan():
        return NaN
    if a.is_infinite() and b.is_infinite():
        return NaN
    if a.is_infinite() or b.is_infinite():
        target_sign = a.sign * b.sign
        if target_sign < 0:
            return NEGATIVE_INFINITY
        if target_sign > 0:
            return POSITIVE_INFINITY
        return ZERO

    # Cross-cancel before multiplying to keep the products small.
    a_num, a_den = a.numerator, a.denominator
    b_num, b_den = b.numerator, b.denominator
    g = math.gcd(a_num, b_den)
    a_num //= g
    b_den //= g
    g = math.gcd(a_den, b_num)
    a_den //= g
    b_num //= g
    return _from_wide(a_num * b_num, a_den * b_den)


def divide(a: Rational, b: Rational) -> Rational:
    return multiply(a, reciprocal(b))
