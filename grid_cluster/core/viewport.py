"""Viewport-driven reload policy for the grid cluster source.

The coordinator owns the retained point set and the published cluster
records. On every view request it decides whether new points must be
fetched, whether the clusters must be recomputed, or whether the currently
published clusters already cover the request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Hashable, Iterable, List, Optional, Protocol, Tuple

import structlog

from .cache import SingleFeatureCache
from .cluster_builder import ClusterBuilder, ClusterRecord
from .clustering import ClusteringEngine
from .extent import Extent
from .grid import DEFAULT_MIN_SIDE_PIXELS, GridConfig, cell_corner
from .points import Point, PointSet

logger = structlog.get_logger()

DEFAULT_BUFFER_FACTOR = 0.5


class PointLoader(Protocol):
    """Fetches raw points for an area.

    Returns True when the request was accepted. The loader delivers the
    points later by calling ``set_points`` on the coordinator.
    """

    def __call__(self, extent: Extent, resolution: float) -> bool:
        ...


class ViewOutcome(str, Enum):
    """What a view request did."""

    IGNORED = "ignored"
    LOAD_REQUESTED = "load_requested"
    LOAD_REJECTED = "load_rejected"
    RECLUSTERED = "reclustered"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class SourceEvent:
    """Notification sent to subscribers when the published clusters change."""

    type: str  # "clear", "addfeature" or "change"
    record: Optional[ClusterRecord] = None


@dataclass
class ViewportState:
    """Mutable viewport bookkeeping, written only by the coordinator."""

    loaded_extent: Extent = field(default_factory=Extent.empty)
    working_extent: Extent = field(default_factory=Extent.empty)
    current_side_width: Optional[float] = None
    resolution: Optional[float] = None


class ViewportLoadCoordinator:
    """
    Grid cluster source: decides when clustering reruns.

    Panning or zooming inside the already clustered (buffered) extent at an
    unchanged cell size costs nothing. Point ids are assumed to be stable: a
    leaf record cached for an id is reused as long as the cache lives, so
    callers reusing ids with moved coordinates must call ``clear_cache()``.

    Single-threaded. Requests are expected one at a time from the view.
    """

    def __init__(self, base_side_width: float,
                 min_side_pixels: float = DEFAULT_MIN_SIDE_PIXELS,
                 origin: Tuple[float, float] = (0.0, 0.0),
                 loader: Optional[PointLoader] = None,
                 ignore_feature_changes: bool = False,
                 buffer_factor: float = DEFAULT_BUFFER_FACTOR):
        self.config = GridConfig(base_side_width, min_side_pixels, origin)
        self.loader = loader
        self.ignore_feature_changes = ignore_feature_changes
        self.buffer_factor = buffer_factor

        self.cache = SingleFeatureCache()
        self.builder = ClusterBuilder(self.config, self.cache)
        self.engine = ClusteringEngine(self.builder)
        self.state = ViewportState()

        self._points = PointSet()
        self._features: List[ClusterRecord] = []
        self._listeners: List[Callable[[SourceEvent], Any]] = []

        logger.info("Grid cluster source created",
                    base_side_width=self.config.base_side_width,
                    min_side_pixels=self.config.min_side_pixels,
                    origin=self.config.origin,
                    has_loader=loader is not None)

    @classmethod
    def from_settings(cls, settings, loader: Optional[PointLoader] = None) -> "ViewportLoadCoordinator":
        return cls(
            base_side_width=settings.base_side_width,
            min_side_pixels=settings.min_side_pixels,
            origin=(settings.origin_x, settings.origin_y),
            loader=loader,
            ignore_feature_changes=settings.ignore_feature_changes,
            buffer_factor=settings.buffer_factor,
        )

    # Published state

    @property
    def features(self) -> List[ClusterRecord]:
        return list(self._features)

    @property
    def points(self) -> PointSet:
        return self._points

    @property
    def passes(self) -> int:
        """Number of clustering passes run so far."""
        return self.engine.passes

    def get_feature_by_id(self, identity: Hashable) -> Optional[ClusterRecord]:
        for record in self._features:
            if record.id == identity:
                return record
        return None

    def subscribe(self, listener: Callable[[SourceEvent], Any]) -> Callable[[], None]:
        """Register a change listener and return a function removing it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Triggers

    def set_points(self, points: Iterable[Any]) -> List[ClusterRecord]:
        """Replace the retained points and recluster them eagerly.

        The cache is cleared because reused ids may now carry different
        coordinates. The pass is not restricted to any extent.
        """
        self._points = PointSet.of(points)
        self.cache.clear()
        self._clear_features()

        side_width = self.state.current_side_width or self.config.base_side_width
        self._publish(self.engine.cluster(self._points, None, side_width))

        logger.info("Points set", points=len(self._points),
                    clusters=len(self._features), side_width=side_width)
        return self.features

    set_coordinates = set_points

    def request_view(self, extent: Optional[Extent], resolution) -> ViewOutcome:
        """Bring the published clusters up to date for a view."""
        if extent is not None and not isinstance(extent, Extent):
            extent = Extent.from_bounds(extent)
        new_side_width = self.config.side_width_for_resolution(resolution)
        if extent is None or extent.is_empty or not extent.is_finite or new_side_width is None:
            logger.debug("View request ignored", extent=extent, resolution=resolution)
            return ViewOutcome.IGNORED

        if self.loader is not None and not self.state.loaded_extent.contains_extent(extent):
            return self._request_load(extent, resolution)

        if (new_side_width == self.state.current_side_width
                and self.state.working_extent.contains_extent(extent)):
            return ViewOutcome.UNCHANGED

        self._clear_features()
        self.state.current_side_width = new_side_width
        self.state.resolution = float(resolution)
        self.state.working_extent = extent.buffer_relative(self.buffer_factor)
        self._publish(self.engine.cluster(self._points, self.state.working_extent, new_side_width))

        logger.debug("View reclustered", side_width=new_side_width,
                     working_extent=tuple(self.state.working_extent),
                     clusters=len(self._features))
        return ViewOutcome.RECLUSTERED

    def clear_cache(self) -> int:
        return self.cache.clear()

    def get_single_feature_for_coordinate(self, point: Any) -> ClusterRecord:
        """Leaf cluster for one point, built on demand and cached."""
        point = Point.coerce(point)
        cached = self.cache.get(point.id)
        if cached is not None:
            return cached
        base = self.config.base_side_width
        return self.builder.build(cell_corner(point, base, self.config.origin), base, [point])

    # Internals

    def _request_load(self, extent: Extent, resolution) -> ViewOutcome:
        self._clear_features()
        self._points = PointSet()

        buffered = extent.buffer_relative(self.buffer_factor)
        try:
            accepted = self.loader(buffered, resolution)
        except Exception as e:
            logger.error("Point loader failed", extent=tuple(buffered), error=str(e))
            raise

        if not accepted:
            logger.info("Point loader rejected request", extent=tuple(buffered))
            return ViewOutcome.LOAD_REJECTED

        self.state.loaded_extent = buffered
        logger.info("Point load requested", extent=tuple(buffered), resolution=resolution)
        return ViewOutcome.LOAD_REQUESTED

    def _clear_features(self) -> None:
        self._features = []
        self._emit(SourceEvent("clear"))

    def _publish(self, records: List[ClusterRecord]) -> None:
        self._features = records
        if not self.ignore_feature_changes:
            for record in records:
                self._emit(SourceEvent("addfeature", record))
        self._emit(SourceEvent("change"))

    def _emit(self, event: SourceEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
