"""
CORS for the admin panel front end.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings


# Admin panel dev server
DEV_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]

CORS_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Authorization", "Content-Type", "X-Request-ID", "Accept", "Accept-Language"]


def get_cors_origins() -> list[str]:
    """ALLOWED_ORIGINS (comma-separated) when set, otherwise DEV_ORIGINS."""
    configured = [origin.strip() for origin in settings.allowed_origins.split(",")]
    return [origin for origin in configured if origin] or DEV_ORIGINS


def configure_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=["X-Request-ID"],
        # No preflight caching while developing
        max_age=0 if settings.environment == "development" else 600,
    )
