"""Multi-resolution grid clustering of point samples."""

from .core import (
    Extent,
    GridConfig,
    Point,
    ViewOutcome,
    ViewportLoadCoordinator,
)

__version__ = "0.1.0"

__all__ = ["Extent", "GridConfig", "Point", "ViewOutcome", "ViewportLoadCoordinator"]
