"""
Memoizing reference cache for SupportPal lookups

Organisations and custom field definitions change rarely and are shared by
many tickets, so each is fetched once per process and kept for its lifetime.
Entries are never evicted or refreshed: a renamed organisation shows up
after a restart.
"""
import asyncio
from typing import Awaitable, Callable, Dict, Generic, TypeVar

from supportpal_exporter.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ReferenceCache(Generic[T]):
    """Read-through cache keyed by numeric ID"""

    def __init__(self, name: str):
        self.name = name
        self._store: Dict[int, T] = {}
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0

    async def get_or_fetch(self, key: int, fetch: Callable[[int], Awaitable[T]]) -> T:
        """
        Return the cached value for key, fetching and storing it on a miss

        Args:
            key: Numeric ID
            fetch: Coroutine function loading the value from the source

        Returns:
            Cached or freshly fetched value

        Raises:
            Whatever fetch raises; nothing is stored in that case
        """
        if key in self._store:
            self.hits += 1
            return self._store[key]

        async with self._lock:
            # Another caller may have filled the entry while we waited
            if key in self._store:
                self.hits += 1
                return self._store[key]

            self.misses += 1
            logger.debug(f"{self.name} cache miss for id {key}")
            value = await fetch(key)
            self._store[key] = value
            return value

    def __contains__(self, key: int) -> bool:
        return key in self._store

    def __len__(self) -> int:
        return len(self._store)
