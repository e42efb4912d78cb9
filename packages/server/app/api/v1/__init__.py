"""
API v1 Router
"""

from fastapi import APIRouter
from . import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["Users"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/users",
            "/users/{userId}",
        ],
    }
