"""
Shared module for common utilities used by the REST API.

STRUCTURE:
- shared.security: Authentication, authorization, session tokens
  - auth.py: JWT signing/verification, current_user_context, require_admin
  - password.py: Bcrypt hashing
  - token_store.py: Session token store (Redis or in-process) with TTL
  - rate_limit.py: Login rate limiting

- shared.infrastructure: Database, Redis and request plumbing
  - db.py: SQLAlchemy engine, sessions, safe_commit()
  - redis_client.py: Redis connection pool
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, OrderStatus, TAX_RATE, Limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Request/response Pydantic schemas
  - money.py: Integer-cent arithmetic

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context, require_admin
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, ValidationError
"""
