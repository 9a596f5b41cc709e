"""Point samples and the immutable point set fed to clustering passes."""

import math
from collections.abc import Mapping
from typing import Any, Hashable, Iterable, Iterator, NamedTuple, Sequence

import numpy as np

from .errors import PointFormatError


class Point(NamedTuple):
    """A single sample. ``id`` must be unique and stable across passes."""
    id: Hashable
    x: float
    y: float

    @classmethod
    def coerce(cls, value: Any) -> "Point":
        """Read a point from a ``Point``, an id/x/y mapping or a 3-tuple."""
        if isinstance(value, Point):
            return value
        try:
            if isinstance(value, Mapping):
                point_id, x, y = value["id"], value["x"], value["y"]
            else:
                point_id, x, y = value
            x = float(x)
            y = float(y)
        except (KeyError, TypeError, ValueError) as e:
            raise PointFormatError(f"Cannot read point from {value!r}: {e}") from e

        if not (math.isfinite(x) and math.isfinite(y)):
            raise PointFormatError(f"Point {point_id!r} has non-finite coordinates")
        return cls(point_id, x, y)


class PointSet(Sequence):
    """Ordered, immutable collection of points.

    Coordinates are mirrored into float64 arrays once at construction so that
    every clustering pass can filter and bucket without touching each point
    object again.
    """

    def __init__(self, points: Iterable[Any] = ()):
        self._points = tuple(Point.coerce(p) for p in points)
        self.xs = np.fromiter((p.x for p in self._points), dtype=np.float64,
                              count=len(self._points))
        self.ys = np.fromiter((p.y for p in self._points), dtype=np.float64,
                              count=len(self._points))

    @classmethod
    def of(cls, points) -> "PointSet":
        if isinstance(points, PointSet):
            return points
        return cls(points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"PointSet(n={len(self._points)})"
