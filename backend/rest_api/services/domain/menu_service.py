"""
Menu Service.

Navigation entries of the admin panel, each visible to a set of role types.
Paths are unique across all entries, including deleted ones.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from rest_api.models import MenuItem
from rest_api.services.base_service import BaseCRUDService
from rest_api.services.crud.repository import MenuItemRepository
from shared.utils.exceptions import DuplicateEntityError
from shared.utils.schemas import MenuItemOutput


class MenuService(BaseCRUDService[MenuItem, MenuItemOutput]):
    """Service for menu registry CRUD and role filtering."""

    def __init__(self, db: Session):
        self._items = MenuItemRepository(db)
        super().__init__(
            db=db,
            model=MenuItem,
            output_schema=MenuItemOutput,
            entity_name="Menu item",
            repo=self._items,
        )

    def list_active(self) -> list[MenuItemOutput]:
        return self.list_all(order_by=MenuItem.created_at)

    def list_by_role(self, role: str) -> list[MenuItemOutput]:
        """Active items whose role set contains role."""
        # roles is a JSON list; filtered here to stay portable across dialects
        return [item for item in self.list_active() if role in item.roles]

    def _validate_create(self, data: dict[str, Any]) -> None:
        if self._items.path_taken(data["path"]):
            raise DuplicateEntityError("Menu item", "path", data["path"])

    def _validate_update(self, entity: MenuItem, data: dict[str, Any]) -> None:
        path = data.get("path")
        if path and self._items.path_taken(path, exclude_id=entity.id):
            raise DuplicateEntityError("Menu item", "path", path)
