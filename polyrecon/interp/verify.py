"""Cross-validation of the two reconstruction paths.

The Lagrange path (primary answer) and the Vandermonde path (recovered
coefficients) are computed independently and must agree at every
abscissa; both must also reproduce the supplied points exactly.

Mismatches are reported, never raised, and every check is always run so a
caller sees all discrepancies in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from polyrecon.arith import rational
from polyrecon.arith.rational import DivisionByZeroError, Rational, format_rational
from polyrecon.config import DEFAULT_CHECK_POINTS
from polyrecon.interp import lagrange, vandermonde
from polyrecon.interp.points import PointLike, as_point_set

Evaluator = Callable[[int], Rational]


@dataclass(frozen=True)
class PointCheck:
    x: int
    expected: int
    actual: Rational

    @property
    def ok(self) -> bool:
        return self.actual.den == 1 and self.actual.num == self.expected


@dataclass(frozen=True)
class CrossCheck:
    t: int
    lagrange: Rational
    coefficients: Rational

    @property
    def ok(self) -> bool:
        return rational.equals(self.lagrange, self.coefficients)


# ---------------------------------------------------------------------------
# Report models (serialisable)
# ---------------------------------------------------------------------------


class PointCheckResult(BaseModel):
    x: int
    expected: str
    actual: str
    ok: bool


class CrossCheckResult(BaseModel):
    t: int
    lagrange: str
    coefficients: str
    ok: bool


class VerificationReport(BaseModel):
    secret: str
    coefficients: List[str]
    lagrange_points: List[PointCheckResult]
    coefficient_points: List[PointCheckResult]
    cross_checks: List[CrossCheckResult]
    ok: bool

    @property
    def mismatches(self) -> List[str]:
        out = [
            f"lagrange P({c.x}) = {c.actual}, expected {c.expected}"
            for c in self.lagrange_points if not c.ok
        ]
        out += [
            f"coefficients P({c.x}) = {c.actual}, expected {c.expected}"
            for c in self.coefficient_points if not c.ok
        ]
        out += [
            f"P({c.t}): lagrange {c.lagrange} != coefficients {c.coefficients}"
            for c in self.cross_checks if not c.ok
        ]
        return out


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def evaluate_by_coefficients(coeffs: Sequence[Rational], t: int) -> Rational:
    """Evaluate sum_j coeffs[j] * t**j with Horner's method."""
    tr = rational.from_int(t)
    result = rational.ZERO
    for c in reversed(coeffs):
        result = rational.add(rational.mul(result, tr), c)
    return result


def verify_reproduces_points(points: Iterable[PointLike], evaluator: Evaluator) -> List[PointCheck]:
    """Evaluate *evaluator* at every point's x and compare with its y."""
    return [PointCheck(p.x, p.y, evaluator(p.x)) for p in as_point_set(points)]


def cross_check(
    points: Iterable[PointLike],
    t: int,
    coeffs: Optional[Sequence[Rational]] = None,
) -> CrossCheck:
    """Evaluate *t* through both paths."""
    pts = as_point_set(points)
    if coeffs is None:
        coeffs = vandermonde.solve(pts)
    return CrossCheck(
        t=t,
        lagrange=lagrange.evaluate(pts, t),
        coefficients=evaluate_by_coefficients(coeffs, t),
    )


def verify(
    points: Iterable[PointLike],
    check_points: Iterable[int] = DEFAULT_CHECK_POINTS,
) -> VerificationReport:
    """Run every consistency check and return the full report.

    Singular-system and input errors propagate to the caller.  A
    ``DivisionByZeroError`` here means the arithmetic preconditions were
    broken and is surfaced as an ``AssertionError``.
    """
    pts = as_point_set(points)
    try:
        secret = lagrange.reconstruct_secret(pts)
        coeffs = vandermonde.solve(pts)

        by_lagrange = verify_reproduces_points(pts, lambda x: lagrange.evaluate(pts, x))
        by_coeffs = verify_reproduces_points(pts, lambda x: evaluate_by_coefficients(coeffs, x))
        crosses = [cross_check(pts, t, coeffs) for t in check_points]
    except DivisionByZeroError as exc:
        raise AssertionError(f"division by zero during verification: {exc}") from exc

    ok = (
        all(c.ok for c in by_lagrange)
        and all(c.ok for c in by_coeffs)
        and all(c.ok for c in crosses)
    )
    return VerificationReport(
        secret=format_rational(secret),
        coefficients=[format_rational(c) for c in coeffs],
        lagrange_points=[_point_result(c) for c in by_lagrange],
        coefficient_points=[_point_result(c) for c in by_coeffs],
        cross_checks=[
            CrossCheckResult(
                t=c.t,
                lagrange=format_rational(c.lagrange),
                coefficients=format_rational(c.coefficients),
                ok=c.ok,
            )
            for c in crosses
        ],
        ok=ok,
    )


def _point_result(check: PointCheck) -> PointCheckResult:
    return PointCheckResult(
        x=check.x,
        expected=str(check.expected),
        actual=format_rational(check.actual),
        ok=check.ok,
    )
