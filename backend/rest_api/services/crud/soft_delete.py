"""
Soft delete helper shared by all services.

Entities are never removed: is_active is cleared and deleted_at recorded.
"""

from typing import TypeVar

from sqlalchemy.orm import Session

from rest_api.models import AuditMixin
from shared.infrastructure.db import safe_commit

T = TypeVar("T", bound=AuditMixin)


def soft_delete(db: Session, entity: T) -> T:
    """
    Soft delete an entity and commit.

    Raises:
        Exception: Re-raises any commit failure after rollback.
    """
    entity.soft_delete()
    safe_commit(db)
    db.refresh(entity)
    return entity
