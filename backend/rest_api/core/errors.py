"""
Exception handlers for the FastAPI application.

- Request body / query validation failures answer 400 naming the first bad field.
- Unhandled database errors answer 500 without internal details.
- Login throttling answers 429 (slowapi).
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from shared.config.logging import rest_api_logger as logger
from shared.security.rate_limit import rate_limit_exceeded_handler


def _field_path(loc: tuple | list) -> str:
    # Drop the "body"/"query"/"path" source prefix
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts)


def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with a message for the first failing field."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = _field_path(first.get("loc", ()))
        message = first.get("msg", "Invalid value")
        detail = f"{field}: {message}" if field else message
    else:
        detail = "Invalid request"

    logger.info(
        "Request validation failed",
        path=request.url.path,
        error_count=len(errors),
        detail=detail,
    )
    return JSONResponse(status_code=400, content={"detail": detail})


def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Return 500 for database errors that escaped the service layer."""
    logger.error(
        "Unhandled database error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
