"""
Services module for business logic.

- domain/: Application services (business logic) - USE THESE
- crud/: Repository pattern, soft delete

Usage:
    from rest_api.services.domain import ProductService
    service = ProductService(db)
    products = service.list_active()
"""

from .domain import (
    ProductService,
    OrderService,
    UserService,
    AuthService,
    MenuService,
)

__all__ = [
    "ProductService",
    "OrderService",
    "UserService",
    "AuthService",
    "MenuService",
]
