"""
Room authorization codes.

Members authenticate with an opaque per-user code issued when they join a
room; the room creator's code doubles as the room's admin code.
"""

from __future__ import annotations

import secrets

from fastapi import HTTPException, Query

AUTH_CODE_BYTES = 16


def generate_auth_code() -> str:
    """Generate an unguessable authorization code (32 hex chars)."""
    return secrets.token_hex(AUTH_CODE_BYTES)


def generate_invitation_code() -> str:
    """Generate a shorter, URL-safe room invitation code."""
    return secrets.token_urlsafe(9)


async def require_user_code(
    user_code: str = Query(alias="userCode", min_length=1, max_length=128),
) -> str:
    """FastAPI dependency: the caller's authorization code from the query string."""
    code = user_code.strip()
    if not code:
        raise HTTPException(status_code=401, detail="Authorization code is required")
    return code
