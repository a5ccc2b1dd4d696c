"""
Security module: authentication, password hashing, session token store, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_access_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    require_roles,
    require_admin,
)
from shared.security.password import hash_password, verify_password
from shared.security.token_store import (
    TokenStore,
    TokenStoreError,
    MemoryTokenStore,
    RedisTokenStore,
    build_token_store,
    get_token_store,
)
from shared.security.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    LOGIN_RATE_LIMIT,
)

__all__ = [
    # auth
    "sign_jwt",
    "sign_access_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "require_roles",
    "require_admin",
    # password
    "hash_password",
    "verify_password",
    # token_store
    "TokenStore",
    "TokenStoreError",
    "MemoryTokenStore",
    "RedisTokenStore",
    "build_token_store",
    "get_token_store",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
    "LOGIN_RATE_LIMIT",
]
