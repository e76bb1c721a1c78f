"""
Name Cache

Cache-aside store mapping display names to resolved identities. It is never
the authority: a miss only means the caller has to resolve the name itself.

Concurrent first lookups of the same name may both resolve and both write;
population is idempotent, so the last writer wins.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def cache_key(name: str) -> str:
    """Names are cached case-insensitively."""
    return name.lower()


class NameCache(ABC):
    """Abstract name cache interface."""

    @abstractmethod
    async def get(self, name: str) -> Optional[Any]:
        """Get the cached identity for a name."""
        pass

    @abstractmethod
    async def put(self, name: str, value: Any) -> None:
        """Remember the identity for a name."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Forget everything."""
        pass


@dataclass
class CacheEntry:
    """An entry in the memory cache."""

    value: Any
    created_at: datetime = field(default_factory=datetime.utcnow)
    ttl_seconds: int = 0

    @property
    def is_expired(self) -> bool:
        if self.ttl_seconds <= 0:
            return False
        return datetime.utcnow() - self.created_at > timedelta(seconds=self.ttl_seconds)


class MemoryNameCache(NameCache):
    """
    In-memory name cache.

    With the defaults (``max_size=0``, ``ttl_seconds=0``) entries live until
    ``clear``. A size bound evicts the oldest entry; a TTL expires entries.
    """

    def __init__(self, max_size: int = 0, ttl_seconds: int = 0):
        self._cache: Dict[str, CacheEntry] = {}
        self._max_size = max_size
        self._ttl_seconds = ttl_seconds
        self._lock = asyncio.Lock()

    async def get(self, name: str) -> Optional[Any]:
        key = cache_key(name)
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if entry.is_expired:
                del self._cache[key]
                return None
            return entry.value

    async def put(self, name: str, value: Any) -> None:
        key = cache_key(name)
        async with self._lock:
            if self._max_size > 0 and key not in self._cache and len(self._cache) >= self._max_size:
                oldest = min(self._cache.items(), key=lambda x: x[1].created_at)
                del self._cache[oldest[0]]

            self._cache[key] = CacheEntry(value=value, ttl_seconds=self._ttl_seconds)

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()
        logger.debug("Name cache cleared")

    @property
    def size(self) -> int:
        return len(self._cache)
