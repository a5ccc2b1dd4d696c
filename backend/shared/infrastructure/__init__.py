"""
Infrastructure module: Database, Redis and request correlation.

Provides:
- Database sessions and transactions (db.py)
- Redis connection pool for the session store (redis_client.py)
- X-Request-ID propagation (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)
from shared.infrastructure.redis_client import (
    get_redis_client,
    check_redis_health,
    close_redis_pool,
)
from shared.infrastructure.correlation import (
    CorrelationIdMiddleware,
    get_request_id,
)

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    # redis
    "get_redis_client",
    "check_redis_health",
    "close_redis_pool",
    # correlation
    "CorrelationIdMiddleware",
    "get_request_id",
]
