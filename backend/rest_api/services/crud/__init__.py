"""
CRUD building blocks shared by the domain services.

Provides:
- Repository Pattern: Type-safe data access with soft-delete filtering
- soft_delete: Logical delete with deleted_at timestamp
"""

from .repository import BaseRepository, UserRepository, MenuItemRepository
from .soft_delete import soft_delete

__all__ = [
    # Repository Pattern
    "BaseRepository",
    "UserRepository",
    "MenuItemRepository",
    # Soft delete
    "soft_delete",
]
