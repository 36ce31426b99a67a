"""Exact rational arithmetic over arbitrary-precision ints.

Every value is kept in canonical form:

    den > 0,  gcd(|num|, den) == 1,  num == 0  =>  den == 1

Each operation reduces its result before returning, so chained products
(e.g. a Lagrange basis term over k-1 factors) never carry an unreduced
intermediate across an operation boundary.

The constructor itself normalises, so ``Rational(2, -4)`` is ``-1/2`` and
``Rational(1, 0)`` raises ``DivisionByZeroError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union


class DivisionByZeroError(ZeroDivisionError):
    """Raised on division by a zero rational (or a zero denominator)."""


class NotAnIntegerError(ValueError):
    """Raised by ``to_int_if_exact`` when the denominator is not 1."""


@dataclass(frozen=True)
class Rational:
    num: int
    den: int = 1

    def __post_init__(self) -> None:
        num, den = self.num, self.den
        for v in (num, den):
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"Rational needs int parts, got {type(v).__name__}")
        if den == 0:
            raise DivisionByZeroError("zero denominator")
        if den < 0:
            num, den = -num, -den
        g = math.gcd(num, den)
        if g != 1:
            num //= g
            den //= g
        object.__setattr__(self, "num", num)
        object.__setattr__(self, "den", den)

    # ---- operators (delegate to the reducing functions below) ----

    def __add__(self, other: RationalLike) -> Rational:
        return add(self, _coerce(other))

    __radd__ = __add__

    def __sub__(self, other: RationalLike) -> Rational:
        return sub(self, _coerce(other))

    def __rsub__(self, other: RationalLike) -> Rational:
        return sub(_coerce(other), self)

    def __mul__(self, other: RationalLike) -> Rational:
        return mul(self, _coerce(other))

    __rmul__ = __mul__

    def __truediv__(self, other: RationalLike) -> Rational:
        return div(self, _coerce(other))

    def __rtruediv__(self, other: RationalLike) -> Rational:
        return div(_coerce(other), self)

    def __neg__(self) -> Rational:
        return neg(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.den == 1 and self.num == other
        if isinstance(other, Rational):
            return equals(self, other)
        return NotImplemented

    def __hash__(self) -> int:
        # integral values hash like the int they compare equal to
        if self.den == 1:
            return hash(self.num)
        return hash((self.num, self.den))

    def __str__(self) -> str:
        return format_rational(self)

    @property
    def is_zero(self) -> bool:
        return self.num == 0

    @property
    def is_integer(self) -> bool:
        return self.den == 1


RationalLike = Union[Rational, int]

ZERO = Rational(0, 1)
ONE = Rational(1, 1)


def _coerce(value: RationalLike) -> Rational:
    if isinstance(value, Rational):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return from_int(value)
    raise TypeError(f"cannot use {type(value).__name__} as an exact rational")


def reduce(num: int, den: int) -> Rational:
    """Return num/den in canonical form."""
    return Rational(num, den)


def from_int(n: int) -> Rational:
    """Lift an integer to a rational with denominator 1."""
    return Rational(n, 1)


def add(a: Rational, b: Rational) -> Rational:
    """Rational addition."""
    if a.den == b.den:
        return reduce(a.num + b.num, a.den)
    return reduce(a.num * b.den + b.num * a.den, a.den * b.den)


def sub(a: Rational, b: Rational) -> Rational:
    """Rational subtraction."""
    if a.den == b.den:
        return reduce(a.num - b.num, a.den)
    return reduce(a.num * b.den - b.num * a.den, a.den * b.den)


def mul(a: Rational, b: Rational) -> Rational:
    """Rational multiplication."""
    return reduce(a.num * b.num, a.den * b.den)


def div(a: Rational, b: Rational) -> Rational:
    """Rational division: a * (1/b)."""
    if b.num == 0:
        raise DivisionByZeroError(f"division of {format_rational(a)} by zero")
    return reduce(a.num * b.den, a.den * b.num)


def neg(a: Rational) -> Rational:
    """Additive inverse."""
    return Rational(-a.num, a.den)


def equals(a: Rational, b: Rational) -> bool:
    """Exact equality by cross-multiplication (same as field equality here)."""
    return a.num * b.den == b.num * a.den


def to_int_if_exact(r: Rational) -> int:
    """Return the numerator when *r* is integral."""
    if r.den != 1:
        raise NotAnIntegerError(f"{format_rational(r)} is not an integer")
    return r.num


def format_rational(r: Rational) -> str:
    """Render as ``"n"`` when integral, otherwise ``"n/d"``."""
    if r.den == 1:
        return str(r.num)
    return f"{r.num}/{r.den}"
