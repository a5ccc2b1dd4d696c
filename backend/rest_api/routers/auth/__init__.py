"""
Authentication routers - /api/auth/*
Handles login, session TTL, logout and the user directory.
"""

from fastapi import APIRouter

from .routes import router as session_router
from .users import router as users_router

router = APIRouter()
router.include_router(session_router)
router.include_router(users_router)

__all__ = ["router"]
