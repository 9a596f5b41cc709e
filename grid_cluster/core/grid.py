"""Grid geometry: cell lookup and resolution-dependent cell sizing.

The grid is flat and uniform. Its cell side is always the base side width
multiplied by a power of two, and every cell is aligned to a global origin
so that cells at different sizes nest exactly inside one another.
"""

import math
import numbers
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import GridConfigError
from .points import Point

DEFAULT_MIN_SIDE_PIXELS = 30.0


@dataclass(frozen=True)
class GridConfig:
    """Immutable grid configuration.

    Attributes:
        base_side_width: Finest cell side, in projection units
        min_side_pixels: Smallest acceptable on-screen cell side, in pixels
        origin: Global alignment corner of the grid
    """
    base_side_width: float
    min_side_pixels: float = DEFAULT_MIN_SIDE_PIXELS
    origin: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        _check_base_side_width(self.base_side_width)
        if not isinstance(self.min_side_pixels, numbers.Real) or not math.isfinite(self.min_side_pixels) \
                or self.min_side_pixels < 0:
            raise GridConfigError(
                f"min_side_pixels must be a finite non-negative number, got {self.min_side_pixels!r}"
            )
        try:
            origin_ok = len(self.origin) == 2 and all(
                isinstance(c, numbers.Real) and math.isfinite(c) for c in self.origin
            )
        except TypeError:
            origin_ok = False
        if not origin_ok:
            raise GridConfigError(f"origin must be a finite (x, y) pair, got {self.origin!r}")
        object.__setattr__(self, "origin", (float(self.origin[0]), float(self.origin[1])))

    def side_width_for_resolution(self, resolution) -> Optional[float]:
        return side_width_for_resolution(resolution, self.base_side_width, self.min_side_pixels)

    def scale_factor(self, side_width: float) -> float:
        return side_width / self.base_side_width


def _check_base_side_width(base_side_width) -> None:
    if not isinstance(base_side_width, numbers.Real) or not math.isfinite(base_side_width) \
            or base_side_width <= 0:
        raise GridConfigError(f"base_side_width must be > 0, got {base_side_width!r}")


def cell_index(x: float, y: float, side_width: float,
               origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[int, int]:
    """Integer column/row of the cell containing ``(x, y)``.

    Uses floored division so that coordinates left of or below the origin
    land in negative indices instead of collapsing onto index 0.
    """
    return (
        math.floor((x - origin[0]) / side_width),
        math.floor((y - origin[1]) / side_width),
    )


def cell_corner(point: Point, side_width: float,
                origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    """Lower-left corner of the cell of width ``side_width`` holding ``point``."""
    i, j = cell_index(point.x, point.y, side_width, origin)
    return corner_for_index(i, j, side_width, origin)


def corner_for_index(i: float, j: float, side_width: float,
                     origin: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    return (i * side_width + origin[0], j * side_width + origin[1])


def side_width_for_resolution(resolution, base_side_width: float,
                              min_side_pixels: float = DEFAULT_MIN_SIDE_PIXELS) -> Optional[float]:
    """
    Cell side width to use at ``resolution`` (projection units per pixel).

    Starts at the base width and doubles until a cell spans at least
    ``min_side_pixels`` pixels on screen.

    Returns:
        The side width, or None when ``resolution`` is not a positive finite
        number. Callers treat None as "keep the previous grid".

    Raises:
        GridConfigError: if ``base_side_width`` is not positive
    """
    _check_base_side_width(base_side_width)
    if resolution is None or isinstance(resolution, bool):
        return None
    try:
        resolution = float(resolution)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(resolution) or resolution <= 0:
        return None

    side_min_width = resolution * min_side_pixels
    side_width = base_side_width
    while side_width < side_min_width:
        side_width *= 2
    return side_width
