"""
Identity Lookup

Resolves player display names to user ids.

Lookup order:
    1. name cache
    2. a player currently online with exactly that name
    3. the remote identity resolver

A remote failure of any kind resolves to "no match". The resolver reports
NOT_FOUND and TRANSPORT_ERROR separately so callers can tell them apart.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from .cache import MemoryNameCache, NameCache
from .constants import DEFAULT_LOOKUP_TIMEOUT_S

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Player:
    """A player known to the console."""

    name: str
    user_id: Any


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a remote identity lookup."""

    status: LookupStatus
    user_id: Any = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @classmethod
    def hit(cls, user_id: Any) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, user_id=user_id)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def transport_error(cls, error: str) -> "LookupResult":
        return cls(status=LookupStatus.TRANSPORT_ERROR, error=error)


# =============================================================================
# Resolvers
# =============================================================================


class IdentityResolver(ABC):
    """Remote name -> user id service."""

    @abstractmethod
    async def resolve(self, name: str) -> LookupResult:
        pass

    async def close(self) -> None:
        pass


class DirectoryIdentityResolver(IdentityResolver):
    """Resolver backed by a fixed name -> id mapping."""

    def __init__(self, directory: Optional[Dict[str, Any]] = None):
        self._directory = {name.lower(): user_id for name, user_id in (directory or {}).items()}

    def add(self, name: str, user_id: Any) -> None:
        self._directory[name.lower()] = user_id

    async def resolve(self, name: str) -> LookupResult:
        user_id = self._directory.get(name.lower())
        if user_id is None:
            return LookupResult.not_found()
        return LookupResult.hit(user_id)


class HttpIdentityResolver(IdentityResolver):
    """
    Resolver for an HTTP identity service.

    Expects ``GET {base_url}/users/lookup?username=<name>`` to answer 200 with
    ``{"id": ...}`` or 404 when the name is unknown.
    """

    LOOKUP_PATH = "/users/lookup"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_LOOKUP_TIMEOUT_S,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = base_url
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialize the HTTP client; a closed client is replaced."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def resolve(self, name: str) -> LookupResult:
        try:
            response = await self._get_client().get(self.LOOKUP_PATH, params={"username": name})
        except httpx.HTTPError as e:
            logger.warning(f"Identity lookup for {name!r} failed: {e!r}")
            return LookupResult.transport_error(str(e) or type(e).__name__)

        if response.status_code == 404:
            return LookupResult.not_found()
        if response.status_code != 200:
            logger.warning(f"Identity lookup for {name!r} returned HTTP {response.status_code}")
            return LookupResult.transport_error(f"HTTP {response.status_code}")

        try:
            user_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Identity lookup for {name!r} returned a bad body: {e}")
            return LookupResult.transport_error("malformed response")

        if user_id is None:
            return LookupResult.not_found()
        return LookupResult.hit(user_id)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# =============================================================================
# Cache-aside lookup
# =============================================================================


class IdentityLookup:
    """
    Resolve names through the cache, the online players and a resolver.

    ``players`` returns the players currently online; it is called on every
    lookup so it always reflects the live set.
    """

    def __init__(
        self,
        resolver: Optional[IdentityResolver] = None,
        cache: Optional[NameCache] = None,
        players: Optional[Callable[[], Iterable[Player]]] = None,
    ):
        self.resolver = resolver
        self.cache = cache or MemoryNameCache()
        self._players = players or (lambda: [])

    def online_players(self) -> List[Player]:
        return list(self._players())

    def set_players(self, players: Callable[[], Iterable[Player]]) -> None:
        self._players = players

    async def get_user_id(self, name: str) -> Optional[Any]:
        """User id for ``name``, or None if it cannot be resolved."""
        cached = await self.cache.get(name)
        if cached is not None:
            return cached

        for player in self.online_players():
            if player.name == name:
                await self.cache.put(name, player.user_id)
                return player.user_id

        if self.resolver is None:
            return None

        try:
            result = await self.resolver.resolve(name)
        except Exception as e:
            result = LookupResult.transport_error(str(e) or type(e).__name__)
        if not result.found:
            if result.status == LookupStatus.TRANSPORT_ERROR:
                logger.warning(f"Could not resolve {name!r}: {result.error}")
            return None

        await self.cache.put(name, result.user_id)
        return result.user_id

    async def close(self) -> None:
        if self.resolver is not None:
            await self.resolver.close()
