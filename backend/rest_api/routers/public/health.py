"""
Health check endpoints for the REST API.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from shared.config.settings import settings
from shared.infrastructure.db import get_db
from shared.security.token_store import TokenStore, get_token_store
from shared.utils.health import (
    HealthStatus,
    aggregate_health_checks,
    health_check_with_timeout,
)


router = APIRouter(prefix="/api", tags=["health"])

SERVICE_NAME = "shop-admin-api"


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": settings.environment,
    }


@health_check_with_timeout(timeout=3.0, component="database")
def check_database_health(db: Session) -> dict:
    """Check database connectivity."""
    db.execute(text("SELECT 1"))
    return {"dialect": db.get_bind().dialect.name}


@health_check_with_timeout(timeout=3.0, component="token_store")
def check_token_store_health(store: TokenStore) -> dict | bool:
    """Check that the session token store answers."""
    if not store.ping():
        return False
    return {"backend": settings.token_store_backend}


@router.get("/health/detailed")
def detailed_health_check(
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    """
    Detailed health check that verifies connectivity to dependencies.
    Returns status of the database and the session token store.

    Returns 503 Service Unavailable if any dependency is down.
    """
    health_results = aggregate_health_checks([
        check_database_health(db),
        check_token_store_health(store),
    ])

    checks = {
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "status": health_results["status"],
        "dependencies": health_results["components"],
    }

    if health_results["status"] != HealthStatus.HEALTHY.value:
        return JSONResponse(status_code=503, content=checks)
    return checks
