"""
Shared fixtures: an in-memory SQLite database per test and a room builder.
"""

import os

# Point the app's own engine at SQLite before anything from `app` is imported.
os.environ.setdefault("SANTA_DATABASE_URL", "sqlite+aiosqlite://")

from typing import Optional, Sequence

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import init_db
from app.models.base import utcnow
from app.models.room import Room
from app.models.user import User
from app.models.wish import Wish


@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def build_room(session):
    """Create a room whose members carry the given codes; the first code is the admin's."""

    async def _build(
        member_codes: Sequence[str] = ("A1",),
        *,
        admin_code: Optional[str] = None,
        closed: bool = False,
        name: str = "Office Party",
    ) -> tuple[Room, list[User]]:
        admin_code = admin_code or member_codes[0]
        room = Room(
            name=name,
            invitation_code=f"invite-{admin_code}",
            admin_auth_code=admin_code,
            closed_on=utcnow() if closed else None,
        )
        session.add(room)
        await session.flush()

        users = []
        for code in member_codes:
            user = User(auth_code=code, room_id=room.id, first_name=code, last_name="Tester")
            session.add(user)
            users.append(user)
        await session.commit()
        return room, users

    return _build


@pytest.fixture
def add_wishes(session):
    async def _add(user: User, *names: str) -> list[Wish]:
        wishes = [Wish(user_id=user.id, name=n) for n in names]
        session.add_all(wishes)
        await session.commit()
        return wishes

    return _add


@pytest.fixture
def assign(session):
    """Set ``giver`` to give a gift to ``recipient``."""

    async def _assign(giver: User, recipient: User) -> None:
        giver.gift_recipient_user_id = recipient.id
        session.add(giver)
        await session.commit()

    return _assign
