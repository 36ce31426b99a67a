"""Points and point sets for one reconstruction.

A point set is an ordered tuple of ``Point`` values with pairwise distinct
x.  ``select_points`` picks the k smallest-x candidates deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union


class SingularSystemError(ValueError):
    """The points do not determine a unique polynomial (repeated x)."""


class DuplicateAbscissaError(SingularSystemError):
    """Two candidate points share an x-coordinate."""

    def __init__(self, x: int, first: int, second: int) -> None:
        self.x = x
        self.first = first
        self.second = second
        super().__init__(
            f"x={x} appears at candidate positions {first} and {second}"
        )


class InsufficientPointsError(ValueError):
    """Fewer candidates than the threshold k."""


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __post_init__(self) -> None:
        for name in ("x", "y"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"point {name} must be an int, got {v!r}")


PointLike = Union[Point, Tuple[int, int]]
PointSet = Tuple[Point, ...]


def as_point_set(points: Iterable[PointLike]) -> PointSet:
    """Normalise ``(x, y)`` tuples and ``Point`` values into a PointSet."""
    out: List[Point] = []
    for p in points:
        if isinstance(p, Point):
            out.append(p)
        else:
            x, y = p
            out.append(Point(x, y))
    return tuple(out)


def find_duplicate_x(points: Sequence[Point]) -> Optional[Tuple[int, int]]:
    """Return the positions ``(i, j)`` of the first repeated x, or None."""
    seen: dict[int, int] = {}
    for j, p in enumerate(points):
        i = seen.get(p.x)
        if i is not None:
            return i, j
        seen[p.x] = j
    return None


def select_points(candidates: Iterable[PointLike], k: int) -> PointSet:
    """Pick the first *k* candidates by ascending x.

    Duplicate x anywhere among the candidates is rejected rather than
    resolved by input order.
    """
    if k < 1:
        raise ValueError(f"Invalid threshold: k={k}")
    pts = as_point_set(candidates)
    dup = find_duplicate_x(pts)
    if dup is not None:
        i, j = dup
        raise DuplicateAbscissaError(pts[i].x, i, j)
    if len(pts) < k:
        raise InsufficientPointsError(
            f"need k={k} points, only {len(pts)} supplied"
        )
    return tuple(sorted(pts, key=lambda p: p.x)[:k])
