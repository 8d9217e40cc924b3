"""Checked signed integer wrapper for venue amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic on
reserves, quantities and notionals checked by default:
- Results outside the signed 64-bit range raise Overflow
- Division by zero raises DivisionByZero
- Division truncates toward zero, matching on-chain integer semantics

Wide128 is the same wrapper over the signed 128-bit range, used for the
constant-product invariant.

Usage pattern:
    from quoter.safe_int import S

    def fill(reserve: int, traded: int) -> int:
        # Wrap at entry
        r = S(reserve)

        # Natural arithmetic - automatically checked
        r = r - traded   # Raises if the result leaves i64

        # Unwrap at exit
        return r.value
"""

from __future__ import annotations

import math

from quoter.errors import ArithmeticOverflow

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
I128_MIN = -(2**127)
I128_MAX = 2**127 - 1


class SafeIntError(ArithmeticOverflow):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Overflow(SafeIntError):
    """Result does not fit the integer width."""

    pass


class SafeInt:
    """Signed 64-bit integer with checked arithmetic operations.

    Every operator validates its result against the wrapper's range and
    raises Overflow instead of wrapping. Subclasses change the range by
    overriding MIN and MAX.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    MIN = I64_MIN
    MAX = I64_MAX

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Raises:
            TypeError: If value is not an int or SafeInt
            Overflow: If value does not fit the range
        """
        if isinstance(value, SafeInt):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if value < self.MIN or value > self.MAX:
            raise Overflow(f"Overflow: {value} outside [{self.MIN}, {self.MAX}]")
        self._value = value

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _new(self, value: int) -> SafeInt:
        return type(self)(value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return self._new(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return self._new(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        return self._new(self._value - _extract_value(other))

    def __rsub__(self, other: int) -> SafeInt:
        return self._new(other - self._value)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return self._new(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return self._new(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division truncating toward zero.

        Raises:
            DivisionByZero: If other is zero
        """
        return self._new(trunc_div(self._value, _extract_value(other)))

    def __rfloordiv__(self, other: int) -> SafeInt:
        return self._new(trunc_div(other, self._value))

    def __truediv__(self, other: object) -> SafeInt:
        raise TypeError("SafeInt does not support true division; use // instead")

    def __neg__(self) -> SafeInt:
        return self._new(-self._value)

    def __abs__(self) -> SafeInt:
        return self._new(abs(self._value))

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return self._new(min(self._value, _extract_value(other)))

    def max(self, other: SafeInt | int) -> SafeInt:
        """Return maximum of self and other."""
        return self._new(max(self._value, _extract_value(other)))

    def narrow(self) -> SafeInt:
        """Convert to a 64-bit SafeInt, raising Overflow if it does not fit."""
        return SafeInt(self._value)

    @classmethod
    def zero(cls) -> SafeInt:
        """Create a SafeInt with value 0."""
        return cls(0)

    @classmethod
    def from_float(cls, x: float) -> SafeInt:
        """Convert a float with saturating truncation (see saturating_cast)."""
        return cls(saturating_cast(x, cls.MIN, cls.MAX))


class Wide128(SafeInt):
    """Signed 128-bit variant of SafeInt, used for the curve invariant."""

    __slots__ = ()

    MIN = I128_MIN
    MAX = I128_MAX


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero.

    Python's // floors; this matches fixed-width machine division instead.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"Division by zero: {a} // 0")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def saturating_cast(x: float, lo: int = I64_MIN, hi: int = I64_MAX) -> int:
    """Truncate a float toward zero and clamp it to [lo, hi].

    NaN maps to 0 and infinities map to the nearest bound, so a float
    intermediate never raises when narrowed back to a fixed-width integer.
    """
    if math.isnan(x):
        return 0
    if x >= hi:
        return hi
    if x <= lo:
        return lo
    return int(x)


def f64_div(a: float, b: float) -> float:
    """IEEE-754 float division: x/0 gives +/-inf and 0/0 gives NaN."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def f64_sqrt(x: float) -> float:
    """IEEE-754 square root: negative inputs give NaN instead of raising."""
    if math.isnan(x) or x < 0:
        return math.nan
    return math.sqrt(x)


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience aliases for concise code
S = SafeInt
W = Wide128
