"""
Password hashing utilities using bcrypt.
"""

import bcrypt

from shared.config.logging import get_logger

logger = get_logger(__name__)

BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its bcrypt hash.

    Stored values that are not bcrypt hashes never match.
    """
    if not hashed_password or not hashed_password.startswith(BCRYPT_PREFIXES):
        logger.warning("SECURITY: stored credential is not a bcrypt hash")
        return False

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
