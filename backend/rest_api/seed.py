"""
Startup seed data.
Creates the default navigation menu when the menu table is empty.
"""

from sqlalchemy.orm import Session

from rest_api.models import MenuItem
from rest_api.services.crud.repository import MenuItemRepository
from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit

logger = get_logger(__name__)


DEFAULT_MENU_ITEMS: list[dict] = [
    {"title": "Home", "path": "/", "icon": "HomeOutlined", "roles": [Roles.ADMIN, Roles.USER]},
    {"title": "Users", "path": "/users", "icon": "UserOutlined", "roles": [Roles.ADMIN]},
    {"title": "Products", "path": "/products", "icon": "ShoppingOutlined", "roles": [Roles.ADMIN, Roles.USER]},
    {"title": "Orders", "path": "/orders", "icon": "ShoppingCartOutlined", "roles": [Roles.ADMIN, Roles.USER]},
    {"title": "Reports", "path": "/reports", "icon": "BarChartOutlined", "roles": [Roles.ADMIN]},
]


def seed_menu(db: Session) -> int:
    """
    Insert the default menu items.
    Idempotent: skipped when any menu row exists, deleted ones included.

    Returns:
        Number of items inserted.
    """
    if MenuItemRepository(db).count(include_inactive=True) > 0:
        logger.info("Menu already seeded, skipping")
        return 0

    db.add_all([MenuItem(**item) for item in DEFAULT_MENU_ITEMS])
    safe_commit(db)

    logger.info("Menu seeded with default items", count=len(DEFAULT_MENU_ITEMS))
    return len(DEFAULT_MENU_ITEMS)
