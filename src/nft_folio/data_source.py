"""
Read-only data access for presentation layers: the persisted snapshot when it
exists, otherwise a (cached) live pipeline run.
"""

from typing import Dict, List, Optional

from loguru import logger
from pydantic import ValidationError

from .aggregator import aggregate
from .config import Config, config
from .enrichment import enrich_and_sort_collections, load_display_config
from .models import CollectionGroup, EnrichedCollection
from .storage import CollectionCache, SnapshotStore

LIVE_CACHE_KEY = "collections:live"

_default_storage: Optional[CollectionCache] = None


def _get_default_storage(ttl: int) -> CollectionCache:
    global _default_storage
    if _default_storage is None:
        _default_storage = CollectionCache(ttl=ttl)
    return _default_storage


async def get_collections(
    config_instance: Optional[Config] = None,
    storage: Optional[CollectionCache] = None,
) -> Dict[str, CollectionGroup]:
    """Snapshot if present, else cached live result, else a fresh pipeline run"""
    cfg = config_instance or config
    snapshot = SnapshotStore(cfg.snapshot_path)
    if snapshot.exists():
        try:
            return snapshot.read()
        except (OSError, ValidationError) as e:
            logger.error(f"Unreadable snapshot {snapshot.path}, falling back to live data: {e}")

    storage = storage or _get_default_storage(cfg.cache_ttl)

    async def load_live() -> Dict[str, CollectionGroup]:
        logger.info("No usable snapshot. Fetching live...")
        return await aggregate(cfg)

    return await storage.get_or_load(LIVE_CACHE_KEY, load_live)


async def get_enriched_collections(
    config_instance: Optional[Config] = None,
    storage: Optional[CollectionCache] = None,
) -> List[EnrichedCollection]:
    """Collections with display names and cover images, in display order"""
    cfg = config_instance or config
    grouped = await get_collections(cfg, storage=storage)
    return enrich_and_sort_collections(grouped, load_display_config(cfg.collections_path))
