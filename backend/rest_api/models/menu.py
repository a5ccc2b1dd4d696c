"""
Navigation Menu Model.
"""

from __future__ import annotations

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base, new_id


class MenuItem(AuditMixin, Base):
    """
    An entry of the admin panel navigation.
    roles lists the role types allowed to see it.
    Inherits: is_active, created_at, updated_at, deleted_at from AuditMixin.
    """

    __tablename__ = "menu_item"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    path: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    icon: Mapped[str] = mapped_column(String(100), nullable=False)
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, path='{self.path}')>"
