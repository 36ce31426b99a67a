"""Tests for point-set construction and selection."""

import pytest

from polyrecon.interp.points import (
    DuplicateAbscissaError,
    InsufficientPointsError,
    Point,
    SingularSystemError,
    as_point_set,
    find_duplicate_x,
    select_points,
)


def test_as_point_set_from_tuples():
    pts = as_point_set([(1, 2), Point(3, 4)])
    assert pts == (Point(1, 2), Point(3, 4))


def test_point_is_immutable():
    p = Point(1, 2)
    with pytest.raises(AttributeError):
        p.x = 5


def test_find_duplicate_x():
    assert find_duplicate_x(as_point_set([(1, 0), (2, 0), (3, 0)])) is None
    assert find_duplicate_x(as_point_set([(1, 0), (2, 0), (1, 9)])) == (0, 2)


def test_select_ascending_first_k():
    pts = select_points([(6, 39), (2, 7), (3, 12), (1, 4)], 3)
    assert [p.x for p in pts] == [1, 2, 3]
    assert pts[0] == Point(1, 4)


def test_select_all():
    pts = select_points([(2, 7), (1, 4)], 2)
    assert pts == (Point(1, 4), Point(2, 7))


def test_select_negative_x():
    pts = select_points([(0, 1), (-5, 2), (3, 3)], 2)
    assert [p.x for p in pts] == [-5, 0]


def test_select_insufficient():
    with pytest.raises(InsufficientPointsError, match="k=3"):
        select_points([(1, 1), (2, 2)], 3)


def test_select_duplicate_rejected():
    with pytest.raises(DuplicateAbscissaError) as info:
        select_points([(1, 1), (9, 2), (9, 3), (4, 4)], 2)
    assert info.value.x == 9
    assert (info.value.first, info.value.second) == (1, 2)
    assert isinstance(info.value, SingularSystemError)


def test_select_invalid_k():
    with pytest.raises(ValueError, match="k=0"):
        select_points([(1, 1)], 0)


@pytest.mark.parametrize("pair", [(1.5, 2), (1, 2.9), (True, 3), ("1", 2)])
def test_non_int_coordinates_rejected(pair):
    with pytest.raises(TypeError):
        as_point_set([pair])


def test_point_rejects_float():
    with pytest.raises(TypeError, match="point y"):
        Point(1, 2.0)
