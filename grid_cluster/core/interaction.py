"""Click policy for grid clusters: zoom into clusters, select single features."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Tuple

import structlog

from .cluster_builder import ClusterRecord
from .extent import Extent
from .viewport import ViewportLoadCoordinator

logger = structlog.get_logger()

DEFAULT_ANIMATION_DURATION_MS = 200


@dataclass
class Animation:
    center: Tuple[float, float]
    zoom: float
    duration: int


@dataclass
class MapView:
    """Minimal view model: integer zoom levels halving the resolution."""

    center: Tuple[float, float]
    zoom: float
    max_resolution: float
    size: Tuple[int, int] = (256, 256)
    min_zoom: float = 0
    animations: List[Animation] = field(default_factory=list)

    @property
    def resolution(self) -> float:
        return self.resolution_for_zoom(self.zoom)

    def resolution_for_zoom(self, zoom: float) -> float:
        return self.max_resolution / 2 ** (zoom - self.min_zoom)

    def calculate_extent(self) -> Extent:
        half_w = self.resolution * self.size[0] / 2
        half_h = self.resolution * self.size[1] / 2
        x, y = self.center
        return Extent(x - half_w, y - half_h, x + half_w, y + half_h)

    def animate(self, center: Tuple[float, float], zoom: float, duration: int) -> None:
        # No frames are rendered here; the view jumps to the final state.
        self.animations.append(Animation(center, zoom, duration))
        self.center = center
        self.zoom = zoom


class SelectGridCluster:
    """
    Click handling for a grid cluster source.

    Clicking a cluster that is not selectable pans to it and zooms one level
    deeper. Clicking a single feature selects it (or toggles it), subject to
    an optional filter. Selected records stay selected across zoom levels.
    """

    def __init__(self, view: MapView, source: ViewportLoadCoordinator,
                 animate: bool = True,
                 animation_duration: int = DEFAULT_ANIMATION_DURATION_MS,
                 filter: Optional[Callable[[ClusterRecord], bool]] = None):
        self.view = view
        self.source = source
        self.animate = animate
        self.animation_duration = animation_duration or DEFAULT_ANIMATION_DURATION_MS
        self.filter = filter or (lambda record: True)
        self._selected: Dict[Hashable, ClusterRecord] = {}

    @property
    def selected(self) -> List[ClusterRecord]:
        return list(self._selected.values())

    def handle_click(self, record: ClusterRecord, toggle: bool = False) -> bool:
        """Apply the click policy and return True if ``record`` ends up selected."""
        if not record.selectable:
            self.zoom_to_cluster(record)
            return False
        if not self.filter(record):
            return False

        if toggle and record.id in self._selected:
            del self._selected[record.id]
            return False
        if not toggle:
            self._selected.clear()
        self._selected[record.id] = record
        return True

    def clear_selection(self) -> None:
        self._selected.clear()

    def zoom_to_cluster(self, record: ClusterRecord) -> None:
        target_zoom = self.view.zoom + 1
        target_center = record.extent.center

        logger.debug("Zooming to cluster", cluster=record.id,
                     center=target_center, zoom=target_zoom)

        if self.animate:
            self._preload(target_zoom)
            self.view.animate(target_center, target_zoom, self.animation_duration)
        else:
            self.view.center = target_center
            self.view.zoom = target_zoom

    def _preload(self, target_zoom: float) -> None:
        # Cluster the current extent at the target resolution before the
        # animation starts so the new cells are ready when it ends.
        self.source.request_view(self.view.calculate_extent(),
                                 self.view.resolution_for_zoom(target_zoom))
