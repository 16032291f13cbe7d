"""In-memory cache for live pipeline results"""

import asyncio
from typing import Awaitable, Callable, Dict, Optional

from cachetools import TTLCache
from loguru import logger

from ..models import CollectionGroup

Grouped = Dict[str, CollectionGroup]


class CollectionCache:
    """
    TTL cache of grouped collections keyed by data source.

    ``get_or_load`` holds the lock while loading, so concurrent readers of a
    cold key share one pipeline run instead of starting their own.
    """

    def __init__(self, ttl: int = 900, max_size: int = 16):
        self.entries: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[Grouped]:
        async with self._lock:
            return self.entries.get(key)

    async def put(self, key: str, grouped: Grouped) -> None:
        async with self._lock:
            self.entries[key] = grouped

    async def invalidate(self, key: str) -> None:
        async with self._lock:
            self.entries.pop(key, None)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Grouped]]) -> Grouped:
        """Return the cached value for ``key``, running ``loader`` on a miss"""
        async with self._lock:
            grouped = self.entries.get(key)
            if grouped is not None:
                logger.debug(f"Cache hit for {key}")
                return grouped

            grouped = await loader()
            self.entries[key] = grouped
            logger.debug(f"Cached {len(grouped)} collections under {key}")
            return grouped
