"""Room member model."""

from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from .base import IntIdMixin, TimestampMixin

if TYPE_CHECKING:
    from .room import Room
    from .wish import Wish


class User(IntIdMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "users"

    auth_code: str = Field(unique=True, index=True, nullable=False)
    room_id: int = Field(foreign_key="rooms.id", index=True, nullable=False)
    # Directed draw edge: the user this one gives a gift to
    gift_recipient_user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    first_name: str = Field(nullable=False)
    last_name: str = Field(nullable=False)
    phone: Optional[str] = None
    email: Optional[str] = None
    delivery_info: Optional[str] = None
    interests: Optional[str] = None
    want_surprise: bool = Field(default=False, nullable=False)

    room: Optional["Room"] = Relationship(back_populates="users")
    wishes: List["Wish"] = Relationship(back_populates="user")
