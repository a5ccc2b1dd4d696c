"""
Auth Session Service.

Login verifies the credentials of an active user, signs a 15 minute access
token and records it as the user's live session in the token store with a
1800 second TTL. The session TTL can be inspected, reset to 900 seconds or
ended (logout).
"""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from rest_api.services.crud.repository import UserRepository
from shared.config.logging import audit_auth_event, auth_logger as logger
from shared.config.settings import settings
from shared.security.auth import sign_access_token
from shared.security.password import verify_password
from shared.security.token_store import TokenStore, TokenStoreError
from shared.utils.exceptions import InternalError, NotFoundError, UnauthorizedError
from shared.utils.schemas import (
    LoginResponse,
    LoginUser,
    RoleInfo,
    TokenTimeResponse,
)

# Same message for unknown, inactive and wrong-password logins
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Issues access tokens and manages their sessions in the token store."""

    def __init__(self, db: Session, store: TokenStore):
        self._users = UserRepository(db)
        self._store = store

    def login(self, email: str, password: str, ip_address: str | None = None) -> LoginResponse:
        """
        Authenticate and open a session.

        Raises:
            UnauthorizedError: Unknown email, inactive user or wrong password.
            InternalError: The session could not be stored.
        """
        user = self._users.find_by_email(email)

        if user is None:
            audit_auth_event(
                "LOGIN_FAILED", email=email, success=False,
                reason="user_not_found_or_inactive", ip_address=ip_address,
            )
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password):
            audit_auth_event(
                "LOGIN_FAILED", user_id=user.id, email=email, success=False,
                reason="invalid_password", ip_address=ip_address,
            )
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = sign_access_token(user.id, user.role_type)
        try:
            # A newer login replaces any previous session of the user
            self._store.set(user.id, token, settings.session_ttl_seconds)
        except TokenStoreError:
            raise InternalError("Failed to store session", user_id=user.id)

        audit_auth_event(
            "LOGIN_SUCCESS", user_id=user.id, email=email, ip_address=ip_address,
        )

        return LoginResponse(
            access_token=token,
            user=LoginUser(
                id=user.id,
                username=user.name,
                email=user.email,
                role=RoleInfo(role_type=user.role_type, description=user.role_description or ""),
            ),
        )

    def get_token_time(self, user_id: str) -> TokenTimeResponse:
        """
        Remaining session lifetime and the local time at which it ends.

        Raises:
            NotFoundError: No live session for the user.
        """
        ttl = self._call_store(lambda: self._store.get_ttl(user_id))
        if ttl is None:
            raise NotFoundError("Session token", user_id=user_id)

        expires_at = datetime.now() + timedelta(seconds=ttl)
        return TokenTimeResponse(
            time_to_life=int(ttl),
            exp_time=expires_at.strftime("%H:%M:%S"),
        )

    def refresh_token_ttl(self, user_id: str) -> None:
        """
        Reset the session TTL to session_refresh_ttl_seconds.

        Raises:
            NotFoundError: No live session for the user.
        """
        extended = self._call_store(
            lambda: self._store.extend_ttl(user_id, settings.session_refresh_ttl_seconds)
        )
        if not extended:
            raise NotFoundError("Session token", user_id=user_id)
        logger.info(
            "Session TTL reset", user_id=user_id, ttl=settings.session_refresh_ttl_seconds
        )

    def logout(self, user_id: str, reason: str = "logout") -> bool:
        """End the user's session. Returns False if there was none."""
        removed = self._call_store(lambda: self._store.delete(user_id))
        audit_auth_event(
            "LOGOUT", user_id=user_id, success=True, reason=reason, had_session=removed,
        )
        return removed

    @staticmethod
    def _call_store(operation):
        try:
            return operation()
        except TokenStoreError:
            raise InternalError("Session store unavailable")
