"""
Structured logging for the shop admin backend.

Loggers returned by get_logger() accept keyword context fields:

    logger.info("Order created", order_id=order.id, total=order.total_cents)

Production writes one JSON object per line; every other environment writes a
coloured single line. Both include the request correlation ID when a request
is being handled.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings


def _request_id(record: logging.LogRecord) -> str | None:
    value = getattr(record, "request_id", None)
    return value if value and value != "-" else None


class StructuredFormatter(logging.Formatter):
    """One JSON document per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = _request_id(record)
        if request_id:
            entry["request_id"] = request_id
        data = getattr(record, "extra_data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if settings.debug:
            entry["source"] = f"{record.pathname}:{record.lineno} ({record.funcName})"
        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Coloured console output."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        parts = [f"{color}[{stamp}] {record.levelname:8}{self.RESET}"]

        request_id = _request_id(record)
        if request_id:
            parts.append(f"{self.DIM}[{request_id[:8]}]{self.RESET}")
        parts.append(f"{record.name}: {record.getMessage()}")

        line = " ".join(parts)
        data = getattr(record, "extra_data", None)
        if data:
            line += " (" + " | ".join(f"{k}={v}" for k, v in data.items()) + ")"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class StructuredLogger(logging.Logger):
    """logging.Logger whose level methods take keyword context fields."""

    def _log_with_data(self, level: int, msg: str, args: tuple, **fields: Any) -> None:
        if not self.isEnabledFor(level):
            return
        exc_info = fields.pop("exc_info", None)
        extra = fields.pop("extra", None) or {}
        extra["extra_data"] = fields or None
        self._log(level, msg, args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_with_data(logging.DEBUG, msg, args, **fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_with_data(logging.INFO, msg, args, **fields)

    def warning(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_with_data(logging.WARNING, msg, args, **fields)

    def error(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_with_data(logging.ERROR, msg, args, **fields)

    def critical(self, msg: str, *args: Any, **fields: Any) -> None:
        self._log_with_data(logging.CRITICAL, msg, args, **fields)


logging.setLoggerClass(StructuredLogger)

# Third-party loggers kept quieter than our own
_NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def setup_logging() -> None:
    """
    Install the stdout handler on the root logger.
    Safe to call more than once; previous handlers are replaced.
    """
    from shared.infrastructure.correlation import CorrelationIdFilter

    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(
        StructuredFormatter() if settings.environment == "production" else DevelopmentFormatter()
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )


def get_logger(name: str) -> StructuredLogger:
    """Return the StructuredLogger registered under ``name``."""
    return logging.getLogger(name)  # type: ignore[return-value]


def mask_email(email: str | None) -> str:
    """
    Hide most of the local part of an email address.

        >>> mask_email("customer@example.com")
        'cu***@example.com'
    """
    if not email:
        return "<no-email>"
    local, sep, domain = email.partition("@")
    if not sep:
        return "***@invalid"
    return f"{local[:2] if len(local) > 2 else local[:1]}***@{domain}"


def mask_token(token: str | None) -> str:
    """First 8 characters of a bearer token."""
    if not token:
        return "<no-token>"
    return token if len(token) <= 8 else f"{token[:8]}..."


rest_api_logger = get_logger("rest_api")
auth_logger = get_logger("rest_api.auth")
orders_logger = get_logger("rest_api.orders")

security_audit_logger = get_logger("security.audit")


def audit_auth_event(
    event_type: str,
    user_id: str | None = None,
    email: str | None = None,
    success: bool = True,
    reason: str | None = None,
    ip_address: str | None = None,
    **extra: Any,
) -> None:
    """
    Record a session lifecycle event on the security audit logger.

    event_type is LOGIN_SUCCESS, LOGIN_FAILED or LOGOUT.
    Failures go out at WARNING, successes at INFO.
    """
    security_audit_logger._log_with_data(
        logging.INFO if success else logging.WARNING,
        f"AUTH_AUDIT: {event_type}",
        (),
        event_type=event_type,
        user_id=user_id,
        email=mask_email(email) if email else None,
        success=success,
        reason=reason,
        ip_address=ip_address,
        **extra,
    )
