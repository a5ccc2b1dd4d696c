"""
Centralized constants for the backend application.
Avoids magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, OrderStatus, TAX_RATE

    if status not in OrderStatus.ALL:
        ...
"""

from decimal import Decimal
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """Role type constants stored in User.role_type and MenuItem.roles."""

    ADMIN: Final[str] = "admin"
    USER: Final[str] = "user"

    ALL: Final[list[str]] = [ADMIN, USER]


# =============================================================================
# Order Status
# =============================================================================


class OrderStatus:
    """
    Order status constants.

    Any value may be set through an update; only membership is enforced.
    """

    PENDING: Final[str] = "pending"
    PAID: Final[str] = "paid"
    CANCELLED: Final[str] = "cancelled"

    ALL: Final[tuple[str, ...]] = (PENDING, PAID, CANCELLED)


# =============================================================================
# Pricing
# =============================================================================

# Flat sales tax applied to every order subtotal
TAX_RATE: Final[Decimal] = Decimal("0.16")


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Pagination and size limits."""

    DEFAULT_PAGE_SIZE: Final[int] = 100
    MAX_PAGE_SIZE: Final[int] = 500

    MAX_ORDER_LINES: Final[int] = 200
    MAX_LINE_QUANTITY: Final[int] = 10_000

    # Product limits
    MAX_STOCK_QUANTITY: Final[int] = 1_000_000
    MAX_PRICE_CENTS: Final[int] = 1_000_000_00  # 1,000,000.00

    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_PASSWORD_LENGTH: Final[int] = 72  # bcrypt truncates beyond this
    MIN_PASSWORD_LENGTH: Final[int] = 6


# =============================================================================
# Redis key prefixes
# =============================================================================

PREFIX_AUTH_SESSION: Final[str] = "auth:session:"
