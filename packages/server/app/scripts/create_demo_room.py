"""
Script to create a demo room with an admin and a few members for local testing.

Usage:
    python -m app.scripts.create_demo_room --name "Office party" --member "Ada Lovelace" --member "Alan Turing"
"""

import argparse
import asyncio
from typing import Optional, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import generate_auth_code, generate_invitation_code
from app.core.config import get_settings
from app.core.database import get_session_context, init_db
from app.core.logger import configure_logging
from app.models.room import Room
from app.models.user import User

log = structlog.get_logger()


def _split_name(full_name: str) -> tuple[str, str]:
    first, _, last = full_name.strip().partition(" ")
    return first, last


async def create_demo_room(
    session: AsyncSession,
    name: str,
    admin_name: str,
    member_names: Sequence[str] = (),
    description: Optional[str] = None,
) -> Room:
    """Create a room whose first member (``admin_name``) holds the admin code."""
    admin_code = generate_auth_code()
    room = Room(
        name=name,
        description=description,
        invitation_code=generate_invitation_code(),
        admin_auth_code=admin_code,
    )
    session.add(room)
    await session.flush()  # Get room id

    first, last = _split_name(admin_name)
    session.add(User(auth_code=admin_code, room_id=room.id, first_name=first, last_name=last))
    for member_name in member_names:
        first, last = _split_name(member_name)
        session.add(
            User(auth_code=generate_auth_code(), room_id=room.id, first_name=first, last_name=last)
        )
    await session.flush()

    log.info("room.created", room_id=room.id, members=1 + len(member_names))
    return room


async def main(name: str, admin_name: str, member_names: Sequence[str]) -> None:
    await init_db()
    async with get_session_context() as session:
        room = await create_demo_room(session, name, admin_name, member_names)
        print(f"Room {room.id} '{room.name}'")
        print(f"  invitation code: {room.invitation_code}")
        print(f"  admin code:      {room.admin_auth_code}")


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    parser = argparse.ArgumentParser(description="Create a demo Secret Santa room.")
    parser.add_argument("--name", required=True, help="Room name")
    parser.add_argument("--admin", default="Room Admin", help="Admin's full name")
    parser.add_argument("--member", action="append", default=[], help="Member full name (repeatable)")

    args = parser.parse_args()

    asyncio.run(main(args.name, args.admin, args.member))
