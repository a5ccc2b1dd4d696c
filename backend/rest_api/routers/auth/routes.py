"""
Authentication router.
Handles login, session TTL inspection and refresh, and logout.
"""

from fastapi import APIRouter, Depends, Query, Request
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from rest_api.services.domain import AuthService
from shared.config.constants import Roles
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from shared.security.rate_limit import limiter, LOGIN_RATE_LIMIT
from shared.security.token_store import TokenStore, get_token_store
from shared.utils.exceptions import ForbiddenError
from shared.utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    TokenTimeRequest,
    TokenTimeResponse,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _get_service(db: Session, store: TokenStore) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db, store)


def _require_own_session(ctx: dict, user_id: str) -> None:
    """Callers may only act on their own session unless they are admins."""
    if ctx.get("role") != Roles.ADMIN and ctx.get("sub") != user_id:
        raise ForbiddenError("access another user's session", user_id=ctx.get("sub"))


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
) -> LoginResponse:
    """
    Authenticate a user and open a session.

    The access token contains:
    - sub: user ID
    - role: the user's role type

    Rate limited per client IP.
    """
    return _get_service(db, store).login(
        body.email, body.password, ip_address=get_remote_address(request)
    )


@router.post("/gettime", response_model=TokenTimeResponse)
def get_token_time(
    body: TokenTimeRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
    ctx: dict = Depends(current_user_context),
) -> TokenTimeResponse:
    """Seconds left in the user's session and the time it ends."""
    _require_own_session(ctx, body.user_id)
    return _get_service(db, store).get_token_time(body.user_id)


@router.get("/update", response_model=MessageResponse)
def refresh_token_ttl(
    user_id: str = Query(alias="userId", min_length=1),
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
    ctx: dict = Depends(current_user_context),
) -> MessageResponse:
    """Reset the session TTL of the user."""
    _require_own_session(ctx, user_id)
    _get_service(db, store).refresh_token_ttl(user_id)
    return MessageResponse(message="Token updated successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
    ctx: dict = Depends(current_user_context),
) -> MessageResponse:
    """End the caller's session. Idempotent."""
    if ctx.get("sub"):
        _get_service(db, store).logout(ctx["sub"])
    return MessageResponse(message="Logged out successfully")
