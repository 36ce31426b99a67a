"""Tests for cross-validation of the two reconstruction paths."""

import random

import pytest

from polyrecon.arith.rational import DivisionByZeroError, from_int, reduce
from polyrecon.interp import lagrange, vandermonde, verify
from polyrecon.interp.lagrange import SingularInterpolationError
from polyrecon.interp.points import SingularSystemError

POINTS = [(1, 4), (2, 7), (3, 12), (6, 39)]  # x^2 + 3


def test_evaluate_by_coefficients():
    coeffs = [from_int(2), from_int(1), from_int(1)]
    assert verify.evaluate_by_coefficients(coeffs, 3) == 14
    assert verify.evaluate_by_coefficients(coeffs, 0) == 2
    assert verify.evaluate_by_coefficients(coeffs, -2) == 4


def test_evaluate_by_coefficients_rational():
    coeffs = [reduce(1, 2), reduce(1, 2)]
    assert verify.evaluate_by_coefficients(coeffs, 4) == reduce(5, 2)


def test_evaluate_empty_is_zero():
    assert verify.evaluate_by_coefficients([], 10) == 0


def test_reproduces_points_lagrange():
    checks = verify.verify_reproduces_points(POINTS, lambda x: lagrange.evaluate(POINTS, x))
    assert [c.x for c in checks] == [1, 2, 3, 6]
    assert all(c.ok for c in checks)


def test_reproduces_points_coefficients():
    coeffs = vandermonde.solve(POINTS)
    checks = verify.verify_reproduces_points(
        POINTS, lambda x: verify.evaluate_by_coefficients(coeffs, x)
    )
    assert all(c.ok for c in checks)


def test_mismatches_reported_without_abort():
    checks = verify.verify_reproduces_points(POINTS, lambda x: from_int(4))
    assert len(checks) == len(POINTS)
    assert [c.ok for c in checks] == [True, False, False, False]


def test_rational_value_never_matches_integer():
    checks = verify.verify_reproduces_points([(1, 1)], lambda x: reduce(3, 2))
    assert not checks[0].ok


def test_cross_check_agrees():
    for t in (0, 100, -7):
        assert verify.cross_check(POINTS, t).ok


def test_cross_check_detects_bad_coefficients():
    wrong = [from_int(2), from_int(1), from_int(1), from_int(0)]
    check = verify.cross_check(POINTS, 0, coeffs=wrong)
    assert not check.ok
    assert check.lagrange == 3
    assert check.coefficients == 2


def test_paths_agree_on_random_polynomials():
    rng = random.Random(11)
    for k in range(1, 7):
        xs = rng.sample(range(-20, 40), k)
        pts = [(x, rng.randint(-10**25, 10**25)) for x in xs]  # arbitrary y
        coeffs = vandermonde.solve(pts)
        for t in (0, 1, -3, 77):
            assert lagrange.evaluate(pts, t) == verify.evaluate_by_coefficients(coeffs, t)


class TestReport:
    def test_full_report(self):
        report = verify.verify(POINTS, check_points=(0, 100))
        assert report.ok
        assert report.secret == "3"
        assert report.coefficients == ["3", "0", "1", "0"]
        assert [c.t for c in report.cross_checks] == [0, 100]
        assert report.cross_checks[1].lagrange == "10003"
        assert len(report.lagrange_points) == 4
        assert len(report.coefficient_points) == 4
        assert report.mismatches == []

    def test_rational_secret(self):
        report = verify.verify([(1, 1), (3, 2)])
        assert report.ok
        assert report.secret == "1/2"
        assert report.coefficients == ["1/2", "1/2"]

    def test_serialisable(self):
        dumped = verify.verify(POINTS).model_dump()
        assert dumped["ok"] is True
        assert dumped["lagrange_points"][0] == {
            "x": 1, "expected": "4", "actual": "4", "ok": True,
        }

    def test_duplicate_x_raises(self):
        with pytest.raises(SingularSystemError):
            verify.verify([(1, 2), (1, 2)])

    def test_duplicate_x_raised_from_lagrange_first(self):
        with pytest.raises(SingularInterpolationError):
            verify.verify([(1, 2), (1, 3)])

    def test_division_by_zero_becomes_assertion(self, monkeypatch):
        def broken(points):
            raise DivisionByZeroError("zero pivot")

        monkeypatch.setattr(lagrange, "reconstruct_secret", broken)
        with pytest.raises(AssertionError, match="division by zero during verification"):
            verify.verify(POINTS)

    def test_division_by_zero_in_solver_becomes_assertion(self, monkeypatch):
        def broken(points):
            raise DivisionByZeroError("zero pivot")

        monkeypatch.setattr(vandermonde, "solve", broken)
        with pytest.raises(AssertionError) as info:
            verify.verify(POINTS)
        assert isinstance(info.value.__cause__, DivisionByZeroError)
