"""Single clustering pass over a point set."""

from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog

from .cluster_builder import ClusterBuilder, ClusterRecord
from .extent import Extent
from .grid import corner_for_index
from .points import Point, PointSet

logger = structlog.get_logger()


class ClusteringEngine:
    """
    Buckets points into grid cells and builds one cluster per occupied cell.

    Output order is the order in which cells are first encountered while
    scanning the points, not a spatial order. For a fixed point set, extent,
    side width and cache state the returned records are the same set on
    every call.
    """

    def __init__(self, builder: ClusterBuilder):
        self.builder = builder
        self.config = builder.config
        self.passes = 0

    def bucket(self, points, extent: Optional[Extent],
               side_width: float) -> Dict[Tuple[float, float], List[Point]]:
        """Group the points inside ``extent`` by floored cell index.

        ``extent=None`` means no spatial restriction.
        """
        points = PointSet.of(points)
        buckets: Dict[Tuple[float, float], List[Point]] = {}
        if not len(points):
            return buckets

        xs, ys = points.xs, points.ys
        if extent is None:
            selected = np.arange(len(points))
        else:
            selected = np.flatnonzero(extent.contains_xy(xs, ys))
        if not len(selected):
            return buckets

        origin_x, origin_y = self.config.origin
        # float64 on purpose, an int64 cast overflows for far coordinates
        col = np.floor((xs[selected] - origin_x) / side_width)
        row = np.floor((ys[selected] - origin_y) / side_width)

        for idx, i, j in zip(selected.tolist(), col.tolist(), row.tolist()):
            cell = buckets.get((i, j))
            if cell is None:
                cell = buckets[(i, j)] = []
            cell.append(points[idx])
        return buckets

    def cluster(self, points, extent: Optional[Extent],
                side_width: float) -> List[ClusterRecord]:
        """Run one full pass and return the cluster records."""
        self.passes += 1
        buckets = self.bucket(points, extent, side_width)

        origin = self.config.origin
        records = [
            self.builder.build(corner_for_index(i, j, side_width, origin), side_width, cell)
            for (i, j), cell in buckets.items()
        ]

        logger.debug("Clustering pass complete",
                     points=len(points), clusters=len(records),
                     side_width=side_width, cached_leaves=len(self.builder.cache))
        return records
