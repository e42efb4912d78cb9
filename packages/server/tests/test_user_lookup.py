"""
Tests for the user and room lookup services.

Tests cover:
- Lookup by authorization code and by id, with optional eager loading
- Structured not-found results naming the failed key
- Reverse gift-recipient lookup
- Room resolution through any member's code
- Room member listing with derived admin flag
- Profile and assignment updates
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from app.models.user import User
from app.services import users
from app.services.rooms import get_room_by_user_code
from app.services.users import (
    get_user_by_code,
    get_user_by_id,
    list_room_users,
    list_users_by_gift_recipient,
    update_user,
)
from santa_shared.schemas.common import ErrorKind


# ---------------------------------------------------------------------------
# Single-user lookups
# ---------------------------------------------------------------------------

class TestUserLookup:

    @pytest.mark.asyncio
    async def test_by_code(self, session, build_room):
        _, (admin, member) = await build_room(["A1", "U2"])
        result = await get_user_by_code("U2", session)
        assert result.is_success
        assert result.value.id == member.id

    @pytest.mark.asyncio
    async def test_by_code_not_found(self, session, build_room):
        await build_room(["A1"])
        result = await get_user_by_code("nope", session)
        assert not result.is_success
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.field == "userCode"

    @pytest.mark.asyncio
    async def test_by_id(self, session, build_room):
        _, (admin,) = await build_room(["A1"])
        result = await get_user_by_id(admin.id, session)
        assert result.is_success
        assert result.value.auth_code == "A1"

    @pytest.mark.asyncio
    async def test_by_id_not_found(self, session, build_room):
        await build_room(["A1"])
        result = await get_user_by_id(999, session)
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.field == "id"
        assert result.message == "User with such id not found"

    @pytest.mark.asyncio
    async def test_include_room_and_wishes(self, session_factory, build_room, add_wishes):
        room, (admin,) = await build_room(["A1"])
        await add_wishes(admin, "Socks", "Board game")

        async with session_factory() as fresh:
            result = await get_user_by_code(
                "A1", fresh, include_room=True, include_wishes=True
            )
        user = result.value
        assert user.room.id == room.id
        assert sorted(w.name for w in user.wishes) == ["Board game", "Socks"]


# ---------------------------------------------------------------------------
# Reverse assignment lookup
# ---------------------------------------------------------------------------

class TestGiftRecipientLookup:

    @pytest.mark.asyncio
    async def test_lists_givers(self, session, build_room, assign):
        _, (a, b, c) = await build_room(["A1", "U2", "U3"])
        await assign(a, c)
        await assign(b, c)

        result = await list_users_by_gift_recipient(c.id, session)
        assert [u.id for u in result.value] == [a.id, b.id]

    @pytest.mark.asyncio
    async def test_no_givers(self, session, build_room):
        _, (a, _) = await build_room(["A1", "U2"])
        result = await list_users_by_gift_recipient(a.id, session)
        assert result.is_success
        assert result.value == []


# ---------------------------------------------------------------------------
# Room lookup
# ---------------------------------------------------------------------------

class TestRoomLookup:

    @pytest.mark.asyncio
    async def test_resolves_through_any_member(self, session_factory, build_room):
        room, _ = await build_room(["A1", "U2"])
        async with session_factory() as fresh:
            result = await get_room_by_user_code("U2", fresh)
        assert result.value.id == room.id
        assert sorted(u.auth_code for u in result.value.users) == ["A1", "U2"]

    @pytest.mark.asyncio
    async def test_unknown_code(self, session, build_room):
        await build_room(["A1"])
        result = await get_room_by_user_code("missing", session)
        assert result.kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_rooms_are_isolated(self, session_factory, build_room):
        first, _ = await build_room(["A1", "U2"], name="First")
        second, _ = await build_room(["B1"], name="Second")
        async with session_factory() as fresh:
            result = await get_room_by_user_code("B1", fresh)
        assert result.value.id == second.id
        assert [u.auth_code for u in result.value.users] == ["B1"]


class TestListRoomUsers:

    @pytest.mark.asyncio
    async def test_admin_flag_and_order(self, session_factory, build_room, add_wishes):
        _, (admin, member) = await build_room(["A1", "U2"])
        await add_wishes(member, "Book")

        async with session_factory() as fresh:
            result = await list_room_users("U2", fresh)
        items = result.value
        assert [i["id"] for i in items] == [admin.id, member.id]
        assert items[0]["is_admin"] is True
        assert items[1]["is_admin"] is False
        assert items[1]["wishes"][0]["name"] == "Book"

    @pytest.mark.asyncio
    async def test_unknown_code_propagates(self, session, build_room):
        await build_room(["A1"])
        result = await list_room_users("missing", session)
        assert not result.is_success
        assert result.kind == ErrorKind.NOT_FOUND


# ---------------------------------------------------------------------------
# Updates
# ---------------------------------------------------------------------------

class TestUpdateUser:

    @pytest.mark.asyncio
    async def test_updates_profile_and_assignment(
        self, session, session_factory, build_room, monkeypatch
    ):
        _, (admin, member) = await build_room(["A1", "U2"])
        admin_id, member_id = admin.id, member.id
        stamp = datetime(2026, 12, 1, 9, 30, tzinfo=timezone.utc)
        monkeypatch.setattr(users, "utcnow", lambda: stamp)

        result = await update_user(
            member_id,
            {
                "first_name": "Nora",
                "email": "nora@example.com",
                "want_surprise": True,
                "gift_recipient_user_id": admin_id,
            },
            session,
        )
        await session.commit()

        assert result.is_success
        assert result.value.modified_on == stamp
        async with session_factory() as fresh:
            stored = await fresh.get(User, member_id)
        assert stored.first_name == "Nora"
        assert stored.email == "nora@example.com"
        assert stored.want_surprise is True
        assert stored.gift_recipient_user_id == admin_id

    @pytest.mark.asyncio
    async def test_unknown_id(self, session, build_room):
        await build_room(["A1"])
        result = await update_user(999, {"first_name": "Ghost"}, session)
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.field == "id"
        assert result.message == "User not found"

    @pytest.mark.asyncio
    async def test_rejects_fields_outside_profile(self, session, build_room):
        _, (admin,) = await build_room(["A1"])
        result = await update_user(admin.id, {"auth_code": "stolen"}, session)
        assert result.kind == ErrorKind.BAD_REQUEST
        assert result.field == "auth_code"
