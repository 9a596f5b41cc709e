"""Construction of cluster records from the points of one grid cell."""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Sequence, Tuple

import structlog
from shapely.geometry import Polygon, mapping

from .cache import SingleFeatureCache
from .extent import Extent
from .grid import GridConfig
from .points import Point

logger = structlog.get_logger()


@dataclass(frozen=True, eq=False)
class ClusterRecord:
    """One occupied grid cell as published to the rendering layer.

    Records compare by identity: a leaf record held by the single feature
    cache is the very same object that appears in every output set reusing
    it. Use ``key`` to compare record contents.
    """
    id: Hashable
    corner: Tuple[float, float]
    side_width: float
    members: Tuple[Point, ...]
    fill: float
    is_leaf: bool
    footprint: Polygon = field(repr=False)

    @property
    def selectable(self) -> bool:
        return self.is_leaf

    @property
    def extent(self) -> Extent:
        return Extent.from_bounds(self.footprint.bounds)

    @property
    def center(self) -> Tuple[float, float]:
        half = self.side_width / 2
        return (self.corner[0] + half, self.corner[1] + half)

    @property
    def ring(self) -> Tuple[Tuple[float, float], ...]:
        """Closed exterior ring: 4 corners plus the first one repeated."""
        return tuple(self.footprint.exterior.coords)

    @property
    def key(self) -> Tuple:
        return (self.id, self.corner, self.side_width, tuple(p.id for p in self.members))

    def to_feature(self) -> Dict[str, Any]:
        """GeoJSON Feature carrying the record's attributes as properties."""
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": mapping(self.footprint),
            "properties": {
                "fill": self.fill,
                "selectable": self.selectable,
                "side_width": self.side_width,
                "count": len(self.members),
                "features": [p._asdict() for p in self.members],
            },
        }


def square_ring(corner: Tuple[float, float], side_width: float) -> list:
    x, y = corner
    return [
        (x, y),
        (x, y + side_width),
        (x + side_width, y + side_width),
        (x + side_width, y),
        (x, y),
    ]


class ClusterBuilder:
    """Turns the points of one occupied cell into a ``ClusterRecord``.

    Leaf cells (cell side equal to the base side) are memoized in the
    single feature cache under the id of their first point.
    """

    def __init__(self, config: GridConfig, cache: SingleFeatureCache = None):
        self.config = config
        self.cache = cache if cache is not None else SingleFeatureCache()

    def build(self, corner: Tuple[float, float], side_width: float,
              points: Sequence[Point]) -> ClusterRecord:
        if not points:
            raise ValueError("Cannot build a cluster from an empty cell")

        scale_factor = self.config.scale_factor(side_width)
        capacity = scale_factor ** 2
        is_leaf = scale_factor == 1

        # The first point in encounter order represents the cell, so
        # non-leaf ids are only stable within a single pass.
        if is_leaf:
            identity = points[0].id
        else:
            scale = int(scale_factor) if scale_factor.is_integer() else scale_factor
            identity = f"{scale}_{points[0].id}"

        if is_leaf:
            cached = self.cache.get(identity)
            if cached is not None:
                return cached

        record = ClusterRecord(
            id=identity,
            corner=(corner[0], corner[1]),
            side_width=side_width,
            members=tuple(points),
            fill=len(points) / capacity,
            is_leaf=is_leaf,
            footprint=Polygon(square_ring(corner, side_width)),
        )

        if is_leaf:
            self.cache.put(identity, record)
        return record
