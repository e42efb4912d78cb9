"""Room model."""

from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from .base import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Room(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "rooms"

    name: str = Field(nullable=False)
    description: Optional[str] = None
    invitation_code: str = Field(unique=True, index=True, nullable=False)
    admin_auth_code: str = Field(unique=True, index=True, nullable=False)
    gift_exchange_date: Optional[date] = None
    gift_maximum_budget: int = Field(default=0, nullable=False)
    # null = open; once set the room accepts no membership changes
    closed_on: Optional[datetime] = Field(default=None, sa_type=sa.DateTime(timezone=True))

    users: List["User"] = Relationship(back_populates="room")

    @property
    def is_closed(self) -> bool:
        return self.closed_on is not None
