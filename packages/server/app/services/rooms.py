"""
Room lookup service.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.core.results import Failure, Result, Success
from app.models.room import Room
from app.models.user import User


async def get_room_by_user_code(
    code: str,
    session: AsyncSession,
    *,
    include_wishes: bool = False,
) -> Result[Room]:
    """Find the room containing the member with ``code``.

    Members are reloaded on every call, so a room already held by the session
    reflects deletions made earlier in the same session.
    """
    members = selectinload(Room.users)
    if include_wishes:
        members = members.selectinload(User.wishes)

    result = await session.execute(
        select(Room)
        .join(User, User.room_id == Room.id)
        .where(User.auth_code == code)
        .options(members)
        .execution_options(populate_existing=True)
    )
    room = result.scalar_one_or_none()
    if room is None:
        return Failure.not_found("userCode", "Room with provided user code not found")
    return Success(room)
