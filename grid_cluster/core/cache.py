"""Memoization of fully resolved single-point (leaf) clusters."""

from typing import TYPE_CHECKING, Dict, Hashable, Optional

import structlog

if TYPE_CHECKING:
    from .cluster_builder import ClusterRecord

logger = structlog.get_logger()


class SingleFeatureCache:
    """Leaf cluster records keyed by point id.

    Entries are added the first time a leaf is built and are never evicted.
    There is no per-entry invalidation: if a point id is reused with new
    coordinates the cached record is stale until ``clear()`` is called.
    Not safe for concurrent writers.
    """

    def __init__(self):
        self._records: Dict[Hashable, "ClusterRecord"] = {}

    def get(self, identity: Hashable) -> Optional["ClusterRecord"]:
        return self._records.get(identity)

    def put(self, identity: Hashable, record: "ClusterRecord") -> None:
        self._records[identity] = record

    def clear(self) -> int:
        """Drop every entry and return how many were dropped."""
        dropped = len(self._records)
        self._records.clear()
        if dropped:
            logger.debug("Single feature cache cleared", dropped=dropped)
        return dropped

    def __contains__(self, identity: Hashable) -> bool:
        return identity in self._records

    def __len__(self) -> int:
        return len(self._records)
