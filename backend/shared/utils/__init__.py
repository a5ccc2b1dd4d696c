"""
Utilities module: Exceptions, schemas, money helpers.
"""

from shared.utils.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    ConflictError,
    InternalError,
)
from shared.utils.money import to_cents, from_cents, compute_totals

__all__ = [
    # exceptions
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "ConflictError",
    "InternalError",
    # money
    "to_cents",
    "from_cents",
    "compute_totals",
]
