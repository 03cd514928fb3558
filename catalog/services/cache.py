# services/cache.py
import asyncio
import time
import uuid
from typing import Awaitable, Callable, Dict, Optional

from aiocache import Cache

from catalog.config import CACHE_TTL_SECONDS
from catalog.models.schemas.product import CacheEntry, CachedPage, PageKey
from catalog.utils.logging import get_logger

logger = get_logger(__name__)

PageFetcher = Callable[[], Awaitable[CachedPage]]


class PageCache:
    """
    Read-through cache of currency-agnostic product pages.

    Entries live for a fixed TTL. Each key has at most one load task at a
    time; it is claimed synchronously, before any await, so concurrent
    callers always share it and observe the same page or the same error.
    Waiters are shielded, so a cancelled request never cancels a load other
    requests depend on.
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self.cache = Cache(Cache.MEMORY, namespace=f"pages-{uuid.uuid4().hex}:")
        self._inflight: Dict[str, asyncio.Task] = {}

    async def get_or_fetch(self, key: PageKey, fetch: PageFetcher) -> CachedPage:
        """
        Get a cached page, fetching and storing it on a miss

        Args:
            key: PageKey - Pagination key identifying the page
            fetch: Coroutine factory producing the page on a miss

        Returns:
            CachedPage: The live cached page, or the freshly fetched one

        Raises:
            Whatever the fetch raises; failures are never cached
        """
        cache_key = key.cache_key()

        # No await between reading and claiming the in-flight slot
        task = self._inflight.get(cache_key)
        if task is None or task.done():
            task = asyncio.create_task(self._load(key, cache_key, fetch))
            self._inflight[cache_key] = task
            task.add_done_callback(lambda t: self._release(cache_key, t))
        else:
            logger.debug(f"Awaiting in-flight load for key: {cache_key}")

        return await asyncio.shield(task)

    async def _lookup(self, cache_key: str) -> Optional[CacheEntry]:
        entry: Optional[CacheEntry] = await self.cache.get(cache_key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug(f"Cache entry expired for key: {cache_key}")
            return None
        return entry

    async def _load(self, key: PageKey, cache_key: str, fetch: PageFetcher) -> CachedPage:
        entry = await self._lookup(cache_key)
        if entry is not None:
            logger.debug(f"Cache hit for key: {cache_key}")
            return entry.value

        logger.info(f"Cache miss. Fetching from product store for key: {cache_key}")
        value = await fetch()
        entry = CacheEntry(key=key, value=value, expires_at=self._clock() + self.ttl)
        await self.cache.set(cache_key, entry, ttl=self.ttl)
        return value

    def _release(self, cache_key: str, task: asyncio.Task) -> None:
        if self._inflight.get(cache_key) is task:
            del self._inflight[cache_key]
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Fetch failed for key {cache_key}: {error!r}")

    async def clear(self) -> None:
        """Drop every cached page"""
        await self.cache.clear(namespace=self.cache.namespace)
        logger.debug("Page cache cleared")
