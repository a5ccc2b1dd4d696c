"""
User Service.

Account registration, lookup, partial update and logical delete.
Passwords are stored as bcrypt hashes and never leave this layer.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.crud.repository import UserRepository
from shared.infrastructure.db import safe_commit
from shared.config.logging import get_logger, mask_email
from shared.security.password import hash_password
from shared.utils.exceptions import ConflictError, NotFoundError
from shared.utils.schemas import RegisterRequest, RoleInfo, UserOutput, UserUpdate

logger = get_logger(__name__)


class UserService(BaseCRUDService[User, UserOutput]):
    """
    Service for the user directory.

    Business rules:
    - email is unique across all users, including deleted ones
    - lookups and updates only see active users
    - delete is logical and records deleted_at
    """

    def __init__(self, db: Session):
        self._users = UserRepository(db)
        super().__init__(
            db=db,
            model=User,
            output_schema=UserOutput,
            entity_name="User",
            repo=self._users,
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_active(self) -> list[UserOutput]:
        return self.list_all(order_by=User.created_at)

    def get_by_email(self, email: str) -> UserOutput:
        return self.to_output(self._get_active_by_email(email))

    # =========================================================================
    # Commands
    # =========================================================================

    def register(self, request: RegisterRequest) -> UserOutput:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self._users.email_taken(request.email):
            raise ConflictError("Email is already registered", email=mask_email(request.email))

        user = User(
            name=request.name,
            email=request.email,
            password=hash_password(request.password),
            role_type=request.role.role_type,
            role_description=request.role.description or "",
            phone=request.phone,
        )
        self._db.add(user)
        try:
            safe_commit(self._db)
        except IntegrityError:
            # Concurrent registration with the same email
            raise ConflictError("Email is already registered", email=mask_email(request.email))
        self._db.refresh(user)

        logger.info("User registered", user_id=user.id, role=user.role_type)
        return self.to_output(user)

    def update_by_email(self, email: str, request: UserUpdate) -> UserOutput:
        """
        Partially update the active user with this email.

        A supplied password is re-hashed. A supplied role replaces the current
        one, keeping the previous description when none is given.

        Raises:
            NotFoundError: If no active user has the email.
        """
        user = self._get_active_by_email(email)

        if request.name:
            user.name = request.name
        if request.phone:
            user.phone = request.phone
        if request.password:
            user.password = hash_password(request.password)
        if request.role is not None:
            user.role_type = request.role.role_type
            if request.role.description is not None:
                user.role_description = request.role.description
        user.touch()

        self._commit(user, "update")
        logger.info("User updated", user_id=user.id)
        return self.to_output(user)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: User) -> UserOutput:
        return UserOutput(
            id=entity.id,
            name=entity.name,
            email=entity.email,
            role=RoleInfo(role_type=entity.role_type, description=entity.role_description or ""),
            phone=entity.phone,
            created_date=entity.created_at,
            delete_date=entity.deleted_at,
            status=entity.is_active,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _get_active_by_email(self, email: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("User", email=mask_email(email))
        return user
