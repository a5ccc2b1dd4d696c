"""
Redis connection management.

The session token store runs inside synchronous request handlers, so a
blocking client backed by a shared connection pool is used. The pool is
created lazily and closed by the application lifespan.
"""

from __future__ import annotations

import threading

import redis

from shared.config.settings import settings
from shared.config.logging import get_logger

logger = get_logger(__name__)

_redis_pool: redis.ConnectionPool | None = None
_pool_lock = threading.Lock()


def _get_pool(url: str) -> redis.ConnectionPool:
    global _redis_pool
    if _redis_pool is None:
        with _pool_lock:
            # Double-check after acquiring the lock
            if _redis_pool is None:
                _redis_pool = redis.ConnectionPool.from_url(
                    url,
                    max_connections=settings.redis_pool_max_connections,
                    decode_responses=True,
                    socket_connect_timeout=settings.redis_socket_timeout,
                    socket_timeout=settings.redis_socket_timeout,
                    health_check_interval=30,
                )
                logger.info(
                    "Redis pool initialized",
                    max_connections=settings.redis_pool_max_connections,
                    timeout=settings.redis_socket_timeout,
                )
    return _redis_pool


def get_redis_client(url: str | None = None) -> redis.Redis:
    """Return a client backed by the shared connection pool."""
    return redis.Redis(connection_pool=_get_pool(url or settings.redis_url))


def check_redis_health(client: redis.Redis) -> bool:
    """PING the server; False on any connection error."""
    try:
        return bool(client.ping())
    except redis.RedisError as e:
        logger.warning("Redis health check failed", error=str(e))
        return False


def close_redis_pool() -> None:
    """Disconnect every pooled connection. Safe to call more than once."""
    global _redis_pool
    with _pool_lock:
        if _redis_pool is not None:
            try:
                _redis_pool.disconnect()
                logger.info("Redis pool closed")
            finally:
                _redis_pool = None
