"""
User directory endpoints under /api/auth.

Thin router that delegates to UserService. Registration is public; listing,
updating and deleting users is admin-only.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import EmailStr
from sqlalchemy.orm import Session

from rest_api.services.domain import AuthService, UserService
from shared.infrastructure.db import get_db
from shared.security.auth import require_admin
from shared.security.token_store import TokenStore, get_token_store
from shared.utils.schemas import (
    RegisterRequest,
    UserListResponse,
    UserLookupResponse,
    UserResponse,
    UserUpdate,
)


router = APIRouter(prefix="/api/auth", tags=["users"])


def _get_service(db: Session) -> UserService:
    """Get UserService instance."""
    return UserService(db)


@router.get("/getall", response_model=UserListResponse | UserLookupResponse)
def list_users(
    user_email: EmailStr | None = Query(default=None, alias="userEmail"),
    db: Session = Depends(get_db),
    _: dict = Depends(require_admin),
) -> UserListResponse | UserLookupResponse:
    """
    List active users.

    With userEmail, return only that active user (404 if there is none).
    """
    service = _get_service(db)
    if user_email:
        return UserLookupResponse(user=service.get_by_email(user_email))
    return UserListResponse(user_list=service.list_active())


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
) -> UserResponse:
    """Create a user account."""
    user = _get_service(db).register(body)
    return UserResponse(message="User registered successfully", user=user)


@router.patch("/update", response_model=UserResponse)
def update_user(
    body: UserUpdate,
    email: EmailStr = Query(),
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
    _: dict = Depends(require_admin),
) -> UserResponse:
    """
    Partially update the active user with the given email.

    A role change ends the user's session so the new role applies from
    their next login.
    """
    service = _get_service(db)
    previous_role = service.get_by_email(email).role.role_type
    user = service.update_by_email(email, body)
    if user.role.role_type != previous_role:
        AuthService(db, store).logout(user.id, reason="role_changed")
    return UserResponse(message="User updated successfully", user=user)


@router.delete("/delete/{user_id}", response_model=UserResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
    _: dict = Depends(require_admin),
) -> UserResponse:
    """Logically delete a user and end their session."""
    user = _get_service(db).delete(user_id)
    AuthService(db, store).logout(user_id, reason="user_deleted")
    return UserResponse(message="User deleted successfully", user=user)
