"""Storage adapters for caching and persistence"""

from .memory import CollectionCache
from .snapshot import SnapshotStore

__all__ = ["CollectionCache", "SnapshotStore"]
