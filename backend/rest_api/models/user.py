"""
User Model.
"""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import AuditMixin, Base, new_id


class User(AuditMixin, Base):
    """
    An account that can log in to the admin panel.
    The role is embedded as (role_type, role_description).
    Inherits: is_active, created_at, updated_at, deleted_at from AuditMixin.
    """

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    role_type: Mapped[str] = mapped_column(String(50), nullable=False)
    role_description: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(30), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role_type}')>"
