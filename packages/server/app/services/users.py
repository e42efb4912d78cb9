"""
User lookup service: resolve room members by authorization code or id,
and apply profile updates.

Callers declare which related data they need (owning room, wish list) so
relationships are loaded eagerly up front; async sessions never lazy-load.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.core.results import Failure, Result, Success
from app.models.base import utcnow
from app.models.room import Room
from app.models.user import User
from app.services.rooms import get_room_by_user_code

log = structlog.get_logger()


def _user_query(include_room: bool, include_wishes: bool):
    stmt = select(User)
    if include_room:
        stmt = stmt.options(selectinload(User.room))
    if include_wishes:
        stmt = stmt.options(selectinload(User.wishes))
    return stmt


async def get_user_by_code(
    code: str,
    session: AsyncSession,
    *,
    include_room: bool = False,
    include_wishes: bool = False,
) -> Result[User]:
    """Find a user by authorization code."""
    result = await session.execute(
        _user_query(include_room, include_wishes).where(User.auth_code == code)
    )
    user = result.scalar_one_or_none()
    if user is None:
        return Failure.not_found("userCode", "User with such code not found")
    return Success(user)


async def get_user_by_id(
    user_id: int,
    session: AsyncSession,
    *,
    include_room: bool = False,
    include_wishes: bool = False,
) -> Result[User]:
    """Find a user by numeric id."""
    result = await session.execute(
        _user_query(include_room, include_wishes).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()
    if user is None:
        return Failure.not_found("id", "User with such id not found")
    return Success(user)


async def list_users_by_gift_recipient(
    user_id: int, session: AsyncSession
) -> Result[list[User]]:
    """List every user whose gift-recipient assignment points at ``user_id``."""
    result = await session.execute(
        select(User)
        .where(User.gift_recipient_user_id == user_id)
        .order_by(User.id)
    )
    return Success(list(result.scalars().all()))


UPDATABLE_FIELDS = frozenset({
    "first_name",
    "last_name",
    "phone",
    "email",
    "delivery_info",
    "interests",
    "want_surprise",
    "gift_recipient_user_id",
})


async def update_user(
    user_id: int, changes: dict[str, Any], session: AsyncSession
) -> Result[User]:
    """Apply profile or draw-assignment changes to a user.

    ``changes`` holds only the fields being set, in the manner of
    ``model_dump(exclude_unset=True)``. The session is flushed, not committed.
    """
    unknown = sorted(set(changes) - UPDATABLE_FIELDS)
    if unknown:
        return Failure.bad_request(unknown[0], f"Field '{unknown[0]}' cannot be updated.")

    found = await get_user_by_id(user_id, session)
    if not found.is_success:
        return Failure.not_found("id", "User not found")
    user = found.value

    for key, value in changes.items():
        setattr(user, key, value)
    user.modified_on = utcnow()
    session.add(user)
    await session.flush()

    log.info("user.updated", user_id=user.id, fields=sorted(changes))
    return Success(user)


def _user_info(user: User, room: Room) -> dict[str, Any]:
    return {
        "id": user.id,
        "room_id": user.room_id,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "phone": user.phone,
        "email": user.email,
        "delivery_info": user.delivery_info,
        "interests": user.interests,
        "want_surprise": user.want_surprise,
        "is_admin": user.auth_code == room.admin_auth_code,
        "gift_recipient_user_id": user.gift_recipient_user_id,
        "wishes": [
            {"id": wish.id, "name": wish.name, "info_link": wish.info_link}
            for wish in user.wishes
        ],
        "created_on": user.created_on,
        "modified_on": user.modified_on,
    }


async def list_room_users(
    user_code: str, session: AsyncSession
) -> Result[list[dict[str, Any]]]:
    """List the members of the room the caller belongs to, with wish lists."""
    room_result = await get_room_by_user_code(user_code, session, include_wishes=True)
    if not room_result.is_success:
        return room_result

    room = room_result.value
    users = sorted(room.users, key=lambda u: u.id)
    log.debug("room.users_listed", room_id=room.id, count=len(users))
    return Success([_user_info(user, room) for user in users])
