"""Coefficient recovery by Gaussian elimination over the Vandermonde system.

For points (x_i, y_i), i = 0..k-1, solve  M . a = b  with

    M[i][j] = x_i ** j      b[i] = y_i

over exact rationals.  Pivoting is "first non-zero row": over the
rationals magnitude carries no stability meaning, so the pivot test is a
zero test only.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from polyrecon.arith import rational
from polyrecon.arith.rational import Rational
from polyrecon.interp.points import (
    PointLike,
    SingularSystemError,
    as_point_set,
    find_duplicate_x,
)

Matrix = List[List[Rational]]
CoefficientVector = List[Rational]


class SingularMatrixError(SingularSystemError):
    """Raised when elimination finds no non-zero pivot in a column."""


def build_system(points: Iterable[PointLike]) -> Tuple[Matrix, List[Rational]]:
    """Return the Vandermonde matrix and right-hand side for *points*."""
    pts = as_point_set(points)
    k = len(pts)
    matrix: Matrix = []
    rhs: List[Rational] = []
    for p in pts:
        row: List[Rational] = []
        power = 1
        for _ in range(k):
            row.append(rational.from_int(power))
            power *= p.x
        matrix.append(row)
        rhs.append(rational.from_int(p.y))
    return matrix, rhs


def gaussian_solve(matrix: Sequence[Sequence[Rational]], rhs: Sequence[Rational]) -> CoefficientVector:
    """Solve ``matrix . a = rhs`` exactly.  Inputs are not modified."""
    n = len(matrix)
    if len(rhs) != n:
        raise ValueError(f"rhs has {len(rhs)} entries, matrix has {n} rows")
    for r, row in enumerate(matrix):
        if len(row) != n:
            raise ValueError(f"row {r} has {len(row)} entries, expected {n}")

    m = [list(row) for row in matrix]
    b = list(rhs)

    # ---- forward elimination ----
    for col in range(n):
        pivot = next((r for r in range(col, n) if not m[r][col].is_zero), None)
        if pivot is None:
            raise SingularMatrixError(f"no non-zero pivot in column {col}")
        if pivot != col:
            m[pivot], m[col] = m[col], m[pivot]
            b[pivot], b[col] = b[col], b[pivot]

        # normalise pivot row so the pivot is exactly 1
        piv = m[col][col]
        if piv != rational.ONE:
            for c in range(col, n):
                m[col][c] = rational.div(m[col][c], piv)
            b[col] = rational.div(b[col], piv)

        for r in range(col + 1, n):
            factor = m[r][col]
            if factor.is_zero:
                continue
            for c in range(col, n):
                m[r][c] = rational.sub(m[r][c], rational.mul(factor, m[col][c]))
            b[r] = rational.sub(b[r], rational.mul(factor, b[col]))

    # ---- back substitution (unit diagonal, no division needed) ----
    coeffs: CoefficientVector = [rational.ZERO] * n
    for i in range(n - 1, -1, -1):
        acc = rational.ZERO
        for j in range(i + 1, n):
            acc = rational.add(acc, rational.mul(m[i][j], coeffs[j]))
        coeffs[i] = rational.sub(b[i], acc)
    return coeffs


def solve(points: Iterable[PointLike]) -> CoefficientVector:
    """Recover all k coefficients of the polynomial through *points*.

    ``coeffs[j]`` is the coefficient of x**j.
    """
    pts = as_point_set(points)
    if not pts:
        raise ValueError("Need at least one point")
    dup = find_duplicate_x(pts)
    if dup is not None:
        i, j = dup
        raise SingularMatrixError(
            f"duplicate x={pts[i].x} at positions {i} and {j}"
        )
    matrix, rhs = build_system(pts)
    return gaussian_solve(matrix, rhs)
