"""
Room member API endpoints.

GET    /api/v1/users?userCode=…  List members of the caller's room
DELETE /api/v1/users/{userId}?userCode=…  Remove a member (room admin only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_user_code
from app.core.database import get_session
from app.core.results import Failure
from app.services import user_deletion
from app.services import users as user_service
from santa_shared.schemas.common import ERROR_STATUS_CODES, ErrorResponse
from santa_shared.schemas.users import UserListResponse, UserResponse

router = APIRouter()

ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in ERROR_STATUS_CODES.values()
}


def raise_for_failure(failure: Failure) -> None:
    """Translate a service failure into an HTTP error with field-level detail."""
    raise HTTPException(
        status_code=ERROR_STATUS_CODES[failure.kind],
        detail=[{"field": e.field, "message": e.message} for e in failure.errors],
        headers={"X-Error-Kind": failure.kind.value},
    )


@router.get("", response_model=UserListResponse, responses=ERROR_RESPONSES, tags=["Users"])
async def list_users(
    user_code: str = Depends(require_user_code),
    session: AsyncSession = Depends(get_session),
):
    """List all members of the caller's room."""
    result = await user_service.list_room_users(user_code, session)
    if not result.is_success:
        raise_for_failure(result)
    return UserListResponse(data=[UserResponse(**item) for item in result.value])


@router.delete("/{userId}", status_code=204, responses=ERROR_RESPONSES, tags=["Users"])
async def delete_user(
    userId: int,
    user_code: str = Depends(require_user_code),
    session: AsyncSession = Depends(get_session),
):
    """Remove a member from the room (room admin only). Clears draw assignments and wishes."""
    result = await user_deletion.delete_user(userId, user_code, session)
    if not result.is_success:
        raise_for_failure(result)
    return Response(status_code=204)
