"""Error types raised by the clustering engine."""


class GridClusterError(Exception):
    """Base class for grid clustering errors."""


class GridConfigError(GridClusterError, ValueError):
    """Raised when the grid configuration cannot produce a usable grid."""


class PointFormatError(GridClusterError, ValueError):
    """Raised when an input point cannot be read as an id/x/y sample."""
