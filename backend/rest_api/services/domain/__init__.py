"""
Domain Services - Application Layer.

Services contain business logic and orchestrate operations.
They use Repositories for data access.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Repository (data access)
        ↓
    Model (entity)

Usage:
    from rest_api.services.domain import OrderService

    # In router
    service = OrderService(db)
    order = service.create(user_id, lines)
"""

from .product_service import ProductService
from .order_service import OrderService
from .user_service import UserService
from .auth_service import AuthService
from .menu_service import MenuService

__all__ = [
    "ProductService",
    "OrderService",
    "UserService",
    "AuthService",
    "MenuService",
]
