"""
Application lifespan handler.
Manages startup and shutdown events for the FastAPI application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from shared.infrastructure.db import engine, get_db_context
from shared.config.settings import settings
from shared.config.logging import setup_logging, rest_api_logger as logger
from shared.security.token_store import build_token_store
from rest_api.models import Base
from rest_api.seed import seed_menu


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    # Initialize logging
    setup_logging()

    # Validate production secrets before startup
    secret_errors = settings.validate_production_secrets()
    if secret_errors:
        for error in secret_errors:
            logger.error("Configuration error: %s", error)
        if settings.environment == "production":
            raise RuntimeError(
                f"Production configuration errors: {'; '.join(secret_errors)}. "
                "Server will not start with insecure configuration."
            )
        else:
            logger.warning(
                "Running with insecure defaults (acceptable for development only)"
            )

    # Startup
    logger.info("Starting REST API", port=settings.rest_api_port, env=settings.environment)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    if settings.seed_menu_on_startup:
        with get_db_context() as db:
            seed_menu(db)

    # Session token store shared by all requests of this process
    app.state.token_store = build_token_store(settings)

    yield

    # Shutdown
    logger.info("Shutting down REST API")

    app.state.token_store.close()
    logger.info("Session token store closed")
