"""
Session token store.

Holds the live bearer token of each logged-in user, keyed by user ID, with
a time-to-live. A session ends when its TTL runs out, when it is replaced by
a newer login, or on logout.

Two backends share the TokenStore interface:
- RedisTokenStore: keys live in Redis with native expiry (multi-worker).
- MemoryTokenStore: process-local dict guarded by a lock (single worker,
  development and tests).

The store instance is created by the application lifespan and reached
through the get_token_store dependency; nothing here is a module global.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from typing import Callable

import redis
from fastapi import Request

from shared.config.constants import PREFIX_AUTH_SESSION
from shared.config.logging import get_logger
from shared.config.settings import Settings

logger = get_logger(__name__)


class TokenStoreError(Exception):
    """The backing store could not be reached or rejected the operation."""


class TokenStore(ABC):
    """Keyed token storage with per-key expiry."""

    @abstractmethod
    def set(self, key: str, token: str, ttl_seconds: int) -> None:
        """Store token under key, replacing any previous value and TTL."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the live token for key, or None if absent or expired."""

    @abstractmethod
    def get_ttl(self, key: str) -> float | None:
        """Seconds until key expires, or None if absent or expired."""

    @abstractmethod
    def extend_ttl(self, key: str, ttl_seconds: int) -> bool:
        """Reset the TTL of an existing key. False if the key is absent."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. False if it was not present."""

    def ping(self) -> bool:
        """True when the backend is reachable."""
        return True

    def close(self) -> None:
        """Release backend resources."""


class MemoryTokenStore(TokenStore):
    """
    In-process store.

    Entries are (token, expires_at) pairs in wall-clock seconds. Expired
    entries are dropped on access. A single lock makes each operation
    atomic with respect to concurrent readers of the same key.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def _live_entry(self, key: str) -> tuple[str, float] | None:
        # Caller holds the lock
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, token: str, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (token, self._clock() + ttl_seconds)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live_entry(key)
            return entry[0] if entry else None

    def get_ttl(self, key: str) -> float | None:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            return entry[1] - self._clock()

    def extend_ttl(self, key: str, ttl_seconds: int) -> bool:
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return False
            self._entries[key] = (entry[0], self._clock() + ttl_seconds)
            return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def close(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for _, expires_at in self._entries.values() if expires_at > now)


class RedisTokenStore(TokenStore):
    """
    Redis-backed store.

    Uses SET EX / TTL / EXPIRE, each of which is atomic per key on the
    server. Connection and command failures raise TokenStoreError.
    """

    def __init__(self, client: redis.Redis, prefix: str = PREFIX_AUTH_SESSION):
        self._client = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def set(self, key: str, token: str, ttl_seconds: int) -> None:
        try:
            self._client.set(self._key(key), token, ex=ttl_seconds)
        except redis.RedisError as e:
            logger.error("Failed to store session token", key=key, error=str(e))
            raise TokenStoreError("set") from e

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.error("Failed to read session token", key=key, error=str(e))
            raise TokenStoreError("get") from e

    def get_ttl(self, key: str) -> float | None:
        try:
            ttl_ms = self._client.pttl(self._key(key))
        except redis.RedisError as e:
            logger.error("Failed to read session TTL", key=key, error=str(e))
            raise TokenStoreError("ttl") from e
        # -2: key missing, -1: key without expiry (never written by this store)
        if ttl_ms is None or ttl_ms < 0:
            return None
        return ttl_ms / 1000

    def extend_ttl(self, key: str, ttl_seconds: int) -> bool:
        try:
            return bool(self._client.expire(self._key(key), ttl_seconds))
        except redis.RedisError as e:
            logger.error("Failed to extend session TTL", key=key, error=str(e))
            raise TokenStoreError("expire") from e

    def delete(self, key: str) -> bool:
        try:
            return self._client.delete(self._key(key)) > 0
        except redis.RedisError as e:
            logger.error("Failed to delete session token", key=key, error=str(e))
            raise TokenStoreError("delete") from e

    def ping(self) -> bool:
        from shared.infrastructure.redis_client import check_redis_health

        return check_redis_health(self._client)

    def close(self) -> None:
        from shared.infrastructure.redis_client import close_redis_pool

        close_redis_pool()


def build_token_store(settings: Settings) -> TokenStore:
    """Create the store selected by settings.token_store_backend."""
    backend = settings.token_store_backend.lower()
    if backend == "memory":
        logger.info("Using in-process session token store")
        return MemoryTokenStore()
    if backend == "redis":
        from shared.infrastructure.redis_client import get_redis_client

        logger.info("Using Redis session token store")
        return RedisTokenStore(get_redis_client(settings.redis_url))
    raise ValueError(f"Unknown token store backend: {settings.token_store_backend!r}")


def get_token_store(request: Request) -> TokenStore:
    """FastAPI dependency returning the store owned by the running app."""
    return request.app.state.token_store
