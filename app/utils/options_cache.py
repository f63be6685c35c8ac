"""In-process cache for dropdown option lists fetched from the backend."""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from app.config import get_settings

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[Any]]


class OptionsCache:
    """Caches option lists per backend path for a fixed TTL.

    Concurrent requests for the same path share one backend call. Failed
    fetches are not cached, so the next request tries again.

    Attributes:
        ttl: Seconds an entry stays fresh.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize OptionsCache.

        Args:
            ttl: Seconds an entry stays fresh; 0 disables caching.
            clock: Monotonic time source.
        """
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, List[Any]]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def peek(self, path: str) -> Optional[List[Any]]:
        """Return the cached list for a path if it is still fresh."""
        entry = self._entries.get(path)
        if entry is None:
            return None
        stored_at, options = entry
        if self._clock() - stored_at >= self.ttl:
            return None
        return options

    async def get(self, path: str, fetcher: Fetcher) -> List[Any]:
        """Return the option list for a path, fetching it when stale.

        Args:
            path: Backend path used as cache key.
            fetcher: Coroutine function called with the path on a miss.

        Returns:
            List of option records as returned by the backend.

        Raises:
            Whatever ``fetcher`` raises; nothing is cached in that case.
        """
        cached = self.peek(path)
        if cached is not None:
            return cached

        lock = self._locks.setdefault(path, asyncio.Lock())
        async with lock:
            # Another waiter may have filled the entry meanwhile
            cached = self.peek(path)
            if cached is not None:
                return cached

            data = await fetcher(path)
            options = list(data) if isinstance(data, list) else []
            if not isinstance(data, list):
                logger.warning(
                    "Backend returned non-list options",
                    extra={"path": path, "type": type(data).__name__},
                )
            self._entries[path] = (self._clock(), options)
            logger.debug(
                "Options cached", extra={"path": path, "count": len(options)}
            )
            return options

    def invalidate(self, path: str) -> None:
        """Drop the cached entry for a path."""
        if self._entries.pop(path, None) is not None:
            logger.debug("Options cache invalidated", extra={"path": path})

    def clear(self) -> None:
        self._entries.clear()


_options_cache: Optional[OptionsCache] = None


def get_options_cache() -> OptionsCache:
    """Get the process-wide options cache, creating it from settings."""
    global _options_cache
    if _options_cache is None:
        _options_cache = OptionsCache(ttl=get_settings().options_cache_ttl)
    return _options_cache
