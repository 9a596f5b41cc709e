"""Axis-aligned extents used for viewport and load bookkeeping."""

import math
from typing import NamedTuple, Sequence, Tuple


class Extent(NamedTuple):
    """Axis-aligned bounding box ``[min_x, min_y, max_x, max_y]``.

    An extent whose max is below its min on either axis is empty. The
    canonical empty extent is ``[inf, inf, -inf, -inf]`` so that it
    contains nothing and is contained by everything that is not empty.
    """
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> "Extent":
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def from_bounds(cls, bounds: Sequence[float]) -> "Extent":
        """Build an extent from any 4-sequence, e.g. shapely ``bounds``."""
        min_x, min_y, max_x, max_y = bounds
        return cls(float(min_x), float(min_y), float(max_x), float(max_y))

    @property
    def is_empty(self) -> bool:
        return self.max_x < self.min_x or self.max_y < self.min_y

    @property
    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains_xy(self, x, y):
        """Inclusive point containment.

        Works on plain floats and elementwise on numpy arrays, in which case
        a boolean mask is returned.
        """
        return (
            (self.min_x <= x) & (x <= self.max_x)
            & (self.min_y <= y) & (y <= self.max_y)
        )

    def contains_extent(self, other: "Extent") -> bool:
        return (
            self.min_x <= other.min_x and other.max_x <= self.max_x
            and self.min_y <= other.min_y and other.max_y <= self.max_y
        )

    def buffer(self, value: float) -> "Extent":
        """Grow the extent by ``value`` on every side."""
        return Extent(
            self.min_x - value,
            self.min_y - value,
            self.max_x + value,
            self.max_y + value,
        )

    def buffer_relative(self, factor: float) -> "Extent":
        """Grow by ``factor`` times the longer side of the extent."""
        return self.buffer(max(self.width, self.height) * factor)
