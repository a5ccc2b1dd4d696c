"""
HTTP exceptions raised by services and security helpers.

Each exception logs itself when constructed, with any keyword context passed
in, so call sites do not need a separate log line:

    raise NotFoundError("Product", product_id)
    raise ValidationError("Quantity must be greater than 0", product_id=pid)
    raise InternalError("Failed to store session", user_id=user.id)

FastAPI renders them as {"detail": "..."} with the matching status code.
"""

from typing import Any

from fastapi import HTTPException, status

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """HTTPException that logs on creation."""

    status_code_for_class = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = "warning"

    def __init__(self, detail: str, headers: dict[str, str] | None = None, **log_context: Any):
        code = self.status_code_for_class
        getattr(logger, self.log_level)(detail, status_code=code, **log_context)
        super().__init__(status_code=code, detail=detail, headers=headers)


class NotFoundError(AppException):
    """404 for a missing or logically deleted entity."""

    status_code_for_class = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        detail = f"{entity} not found" if entity_id is None else f"{entity} with ID {entity_id} not found"
        super().__init__(detail, entity=entity, entity_id=entity_id, **log_context)


class UnauthorizedError(AppException):
    """401 with a Bearer challenge."""

    status_code_for_class = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Not authenticated", **log_context: Any):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"}, **log_context)


class ForbiddenError(AppException):
    status_code_for_class = status.HTTP_403_FORBIDDEN

    def __init__(self, action: str | None = None, **log_context: Any):
        detail = f"Not allowed to {action}" if action else "Access denied"
        super().__init__(detail, action=action, **log_context)


class ValidationError(AppException):
    """400 for business-rule violations the request schema cannot express."""

    status_code_for_class = status.HTTP_400_BAD_REQUEST


class InvalidStatusError(ValidationError):
    def __init__(self, entity: str, value: str, allowed: tuple[str, ...] | list[str], **log_context: Any):
        detail = f"Invalid {entity} status '{value}'. Must be one of: {', '.join(allowed)}"
        super().__init__(detail, entity=entity, value=value, **log_context)


class ConflictError(AppException):
    status_code_for_class = status.HTTP_409_CONFLICT


class DuplicateEntityError(ConflictError):
    """409 for a unique value that is already taken."""

    def __init__(self, entity: str, field: str, value: str, **log_context: Any):
        super().__init__(
            f"{entity} with {field} '{value}' already exists",
            entity=entity,
            field=field,
            **log_context,
        )


class InternalError(AppException):
    """500; logged at ERROR."""

    log_level = "error"

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(detail, **log_context)


class DatabaseError(InternalError):
    def __init__(self, operation: str, **log_context: Any):
        super().__init__(
            f"Database error during {operation}. Please try again.",
            operation=operation,
            **log_context,
        )
