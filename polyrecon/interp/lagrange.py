"""Lagrange evaluation of the interpolating polynomial.

    P(t) = sum_i  y_i * prod_{j != i} (t - x_j) / (x_i - x_j)

API
---
evaluate(points, t)        -> Rational   exact P(t), no coefficients built
reconstruct_secret(points) -> Rational   P(0)
"""

from __future__ import annotations

from typing import Iterable

from polyrecon.arith import rational
from polyrecon.arith.rational import Rational
from polyrecon.config import DEFAULT_TARGET
from polyrecon.interp.points import (
    PointLike,
    SingularSystemError,
    as_point_set,
    find_duplicate_x,
)


class SingularInterpolationError(SingularSystemError):
    """Raised when two points share an x, so some x_i - x_j is zero."""


def evaluate(points: Iterable[PointLike], t: int) -> Rational:
    """Evaluate the unique degree-(k-1) polynomial through *points* at *t*."""
    pts = as_point_set(points)
    if not pts:
        raise ValueError("Need at least one point")
    dup = find_duplicate_x(pts)
    if dup is not None:
        i, j = dup
        raise SingularInterpolationError(
            f"duplicate x={pts[i].x} at positions {i} and {j}"
        )

    k = len(pts)
    total = rational.ZERO
    for i in range(k):
        xi = pts[i].x
        term = rational.from_int(pts[i].y)
        for j in range(k):
            if j == i:
                continue
            xj = pts[j].x
            # (t - x_j) / (x_i - x_j), reduced after every step
            term = rational.mul(term, rational.reduce(t - xj, xi - xj))
            if term.is_zero:
                break
        total = rational.add(total, term)
    return total


def reconstruct_secret(points: Iterable[PointLike]) -> Rational:
    """Reconstruct the secret P(0)."""
    return evaluate(points, DEFAULT_TARGET)
