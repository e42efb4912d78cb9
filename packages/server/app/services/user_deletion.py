"""
Delete-user workflow: remove a member from a room on behalf of its admin.

The request passes an ordered series of gates; the first failing gate
decides the outcome. A request that clears every gate becomes a
``UserDeletion`` unit of work, applied in a single transaction:

1. admin resolved by authorization code          → not_found
2. target resolved by id                          → not_found
3. admin and target share a room                  → forbidden
4. room resolved through the admin's code         → propagated
5. admin is a member (and, when strict, holds the room's admin code) → forbidden
6. target is not the last member of the room      → bad_request
7. target is not the admin                        → bad_request
8. room is open                                   → bad_request
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.results import Failure, Result, Success
from app.models.base import utcnow
from app.models.user import User
from app.models.wish import Wish
from app.services.rooms import get_room_by_user_code
from app.services.users import (
    get_user_by_code,
    get_user_by_id,
    list_users_by_gift_recipient,
)

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Observability
# ---------------------------------------------------------------------------

class DeletionObserver:
    """Receives workflow checkpoints. Subclass to route them elsewhere."""

    def started(self, user_id: int) -> None:
        pass

    def rejected(self, user_id: int, failure: Failure) -> None:
        pass

    def deleted(self, deletion: "UserDeletion") -> None:
        pass

    def failed(self, user_id: int, failure: Failure) -> None:
        pass


class LoggingDeletionObserver(DeletionObserver):
    """Default observer: one structlog event per checkpoint."""

    def started(self, user_id: int) -> None:
        log.info("user_deletion.started", user_id=user_id)

    def rejected(self, user_id: int, failure: Failure) -> None:
        log.info(
            "user_deletion.rejected",
            user_id=user_id,
            kind=failure.kind.value,
            field=failure.field,
            reason=failure.message,
        )

    def deleted(self, deletion: "UserDeletion") -> None:
        log.info(
            "user.deleted",
            user_id=deletion.user_id,
            room_id=deletion.room_id,
            cleared_assignments=len(deletion.referrer_ids),
        )

    def failed(self, user_id: int, failure: Failure) -> None:
        log.error("user_deletion.failed", user_id=user_id, reason=failure.message)


# ---------------------------------------------------------------------------
# Unit of work
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UserDeletion:
    """Everything removed or rewritten when a member leaves a room."""
    user_id: int
    room_id: int
    referrer_ids: tuple[int, ...] = ()
    clear_own_recipient: bool = False


async def apply_user_deletion(
    deletion: UserDeletion, session: AsyncSession
) -> Result[bool]:
    """Apply a deletion in one transaction.

    Incoming gift-recipient assignments are cleared by predicate rather than
    by ``referrer_ids`` so assignments made after planning are covered too.
    On a storage error the transaction is rolled back and nothing changes.
    """
    now = utcnow()
    try:
        await session.execute(
            update(User)
            .where(User.gift_recipient_user_id == deletion.user_id)
            .values(gift_recipient_user_id=None, modified_on=now)
        )
        if deletion.clear_own_recipient:
            await session.execute(
                update(User)
                .where(User.id == deletion.user_id)
                .values(gift_recipient_user_id=None, modified_on=now)
            )
        await session.execute(delete(Wish).where(Wish.user_id == deletion.user_id))
        await session.execute(delete(User).where(User.id == deletion.user_id))
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error(
            "user.delete_failed",
            user_id=deletion.user_id,
            error=exc.__class__.__name__,
            exc_info=True,
        )
        return Failure.storage_error("user", "Failed to delete user.")

    return Success(True)


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------

async def plan_user_deletion(
    user_id: int,
    admin_code: str,
    session: AsyncSession,
    *,
    strict_admin_authority: bool = True,
) -> Result[UserDeletion]:
    """Run every gate and, if all pass, describe the deletion to perform."""
    admin_result = await get_user_by_code(admin_code, session)
    if not admin_result.is_success:
        return Failure.not_found(
            "adminUserCode", "User with provided authorization code not found."
        )
    admin = admin_result.value

    target_result = await get_user_by_id(user_id, session)
    if not target_result.is_success:
        return Failure.not_found("userId", f"User with ID {user_id} not found.")
    target = target_result.value

    if target.room_id != admin.room_id:
        return Failure.forbidden(
            "userId", "Administrator and user belong to different rooms."
        )

    room_result = await get_room_by_user_code(admin.auth_code, session)
    if not room_result.is_success:
        return room_result
    room = room_result.value

    is_member = any(member.auth_code == admin.auth_code for member in room.users)
    holds_admin_code = admin.auth_code == room.admin_auth_code
    if not is_member or (strict_admin_authority and not holds_admin_code):
        return Failure.forbidden(
            "adminUserCode", "Only room administrators can delete users."
        )

    if not any(member.id != target.id for member in room.users):
        return Failure.bad_request("userId", "Cannot delete the last user in room.")

    if target.id == admin.id:
        return Failure.bad_request("userId", "Administrator cannot delete themselves.")

    if room.is_closed:
        return Failure.bad_request("Room", "Cannot delete users from a closed room.")

    referrers = await list_users_by_gift_recipient(target.id, session)
    return Success(
        UserDeletion(
            user_id=target.id,
            room_id=room.id,
            referrer_ids=tuple(user.id for user in referrers.value),
            clear_own_recipient=target.gift_recipient_user_id is not None,
        )
    )


async def delete_user(
    user_id: int,
    admin_code: str,
    session: AsyncSession,
    *,
    observer: Optional[DeletionObserver] = None,
    strict_admin_authority: Optional[bool] = None,
) -> Result[bool]:
    """Delete ``user_id`` from the room administered by ``admin_code``.

    Returns ``Success(True)`` or a ``Failure`` classified as not_found,
    forbidden, bad_request or storage_error. A storage fault while looking
    up the admin, target, room or referrers is a storage_error too. Task
    cancellation before the final commit leaves the store untouched.
    """
    observer = observer or LoggingDeletionObserver()
    if strict_admin_authority is None:
        strict_admin_authority = get_settings().strict_admin_authority

    observer.started(user_id)
    try:
        planned = await plan_user_deletion(
            user_id,
            admin_code,
            session,
            strict_admin_authority=strict_admin_authority,
        )
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error(
            "user.lookup_failed",
            user_id=user_id,
            error=exc.__class__.__name__,
            exc_info=True,
        )
        failure = Failure.storage_error("user", "Failed to look up user.")
        observer.failed(user_id, failure)
        return failure

    if not planned.is_success:
        observer.rejected(user_id, planned)
        return planned

    deletion = planned.value
    outcome = await apply_user_deletion(deletion, session)
    if outcome.is_success:
        observer.deleted(deletion)
    else:
        observer.failed(user_id, outcome)
    return outcome
