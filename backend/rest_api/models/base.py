"""
Base class and AuditMixin for all SQLAlchemy ORM models.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Opaque primary key: 32-char UUID4 hex."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    """
    Mixin providing soft delete and audit timestamps for all models.

    Fields added:
    - is_active: Soft delete flag (False = deleted, True = active)
    - created_at, updated_at, deleted_at: Audit timestamps

    Methods:
    - soft_delete(): Mark entity as deleted
    - touch(): Refresh updated_at
    """

    # Soft delete flag (False = deleted/inactive, True = active)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def soft_delete(self) -> None:
        """Mark as deleted; the row is kept."""
        now = utcnow()
        self.is_active = False
        self.deleted_at = now
        self.updated_at = now

    def touch(self) -> None:
        """Force an updated_at write even when no other column changed."""
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        active = "active" if self.is_active else "deleted"
        return f"<{class_name}(id={id_val}, {active})>"
