"""
Core grid clustering functionality.
"""

from .errors import GridClusterError, GridConfigError, PointFormatError
from .extent import Extent
from .points import Point, PointSet
from .grid import GridConfig, cell_corner, cell_index, side_width_for_resolution
from .cache import SingleFeatureCache
from .cluster_builder import ClusterBuilder, ClusterRecord
from .clustering import ClusteringEngine
from .viewport import PointLoader, SourceEvent, ViewOutcome, ViewportLoadCoordinator, ViewportState
from .interaction import MapView, SelectGridCluster

__all__ = ['GridClusterError', 'GridConfigError', 'PointFormatError',
           'Extent', 'Point', 'PointSet',
           'GridConfig', 'cell_corner', 'cell_index', 'side_width_for_resolution',
           'SingleFeatureCache', 'ClusterBuilder', 'ClusterRecord', 'ClusteringEngine',
           'PointLoader', 'SourceEvent', 'ViewOutcome', 'ViewportLoadCoordinator', 'ViewportState',
           'MapView', 'SelectGridCluster']
