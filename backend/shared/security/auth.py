"""
Access tokens and the request dependencies that check them.

Access tokens are HS256 JWTs carrying the user ID (sub) and role type. A
token is only accepted while it is also the live session stored for its
user in the token store, so logout, session expiry and a newer login all
invalidate it before the JWT itself expires.

    @router.get("/orders/getall")
    def list_orders(ctx: dict = Depends(current_user_context)): ...

    @router.post("/products/create")
    def create_product(ctx: dict = Depends(require_admin)): ...
"""

from __future__ import annotations

import time
import uuid
from typing import Any

import jwt
from fastapi import Depends, Header

from shared.config.constants import Roles
from shared.config.logging import mask_token
from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET, settings
from shared.security.token_store import TokenStore, TokenStoreError, get_token_store
from shared.utils.exceptions import ForbiddenError, InternalError, UnauthorizedError


ALGORITHM = "HS256"


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign ``payload`` after adding iss, aud, iat, exp and a random jti.

    The lifetime defaults to jwt_access_token_expire_minutes; the jti makes
    two tokens signed in the same second differ.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    issued_at = int(time.time())
    claims = dict(payload)
    claims.update(
        iss=JWT_ISSUER,
        aud=JWT_AUDIENCE,
        iat=issued_at,
        exp=issued_at + ttl_seconds,
        jti=uuid.uuid4().hex,
    )
    return jwt.encode(claims, JWT_SECRET, algorithm=ALGORITHM)


def sign_access_token(user_id: str, role_type: str) -> str:
    return sign_jwt({"sub": user_id, "role": role_type})


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Decode a token we signed.

    Raises:
        UnauthorizedError: expired, tampered, foreign or subject-less token.
    """
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        # Callers only see the generic message
        raise UnauthorizedError("Invalid token", reason=str(e))

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthorizedError("Invalid token: missing subject claim")
    return claims


def get_bearer_token(authorization: str | None) -> str:
    """Token part of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise UnauthorizedError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")
    return token


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
    store: TokenStore = Depends(get_token_store),
) -> dict[str, Any]:
    """
    Claims of the caller's token, once it is confirmed as the live session.

    With AUTH_ENABLED=false every caller is treated as an anonymous admin.
    """
    if not settings.auth_enabled:
        return {"sub": None, "role": Roles.ADMIN}

    token = get_bearer_token(authorization)
    claims = verify_jwt(token)

    try:
        live_token = store.get(claims["sub"])
    except TokenStoreError as e:
        raise InternalError(user_id=claims["sub"], error=str(e))

    if live_token != token:
        raise UnauthorizedError(
            "Session expired or revoked", user_id=claims["sub"], token=mask_token(token)
        )
    return claims


def require_roles(ctx: dict[str, Any], allowed: list[str]) -> None:
    """Raise ForbiddenError unless the caller's role is in ``allowed``."""
    role = ctx.get("role")
    if role not in allowed:
        raise ForbiddenError("perform this action", role=role, required=allowed)


def require_admin(ctx: dict[str, Any] = Depends(current_user_context)) -> dict[str, Any]:
    require_roles(ctx, [Roles.ADMIN])
    return ctx
