"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from rest_api.core.cors import configure_cors
from rest_api.core.errors import register_exception_handlers
from rest_api.core.lifespan import lifespan
from rest_api.core.middlewares import register_middlewares
from rest_api.routers.admin import router as admin_router
from rest_api.routers.auth import router as auth_router
from rest_api.routers.public import health_router
from shared.config.settings import settings
from shared.security.rate_limit import limiter


# Create FastAPI application
app = FastAPI(
    title="Shop Admin REST API",
    description="Orders, products, users and navigation menu for the shop admin panel",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
register_exception_handlers(app)

register_middlewares(app)
configure_cors(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(admin_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rest_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
