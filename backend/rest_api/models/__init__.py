"""
SQLAlchemy ORM Models Package.

Models are organized into domain-specific modules:
- base: Base class, AuditMixin, id/timestamp helpers
- catalog: Product
- order: Order, OrderItem
- user: User
- menu: MenuItem
"""

# Base classes
from .base import Base, AuditMixin

# Catalog
from .catalog import Product

# Orders
from .order import Order, OrderItem

# Users
from .user import User

# Navigation menu
from .menu import MenuItem

__all__ = [
    "Base",
    "AuditMixin",
    "Product",
    "Order",
    "OrderItem",
    "User",
    "MenuItem",
]
