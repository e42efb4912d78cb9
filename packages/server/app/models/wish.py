"""Wish-list entry model."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from .base import IntIdMixin

if TYPE_CHECKING:
    from .user import User


class Wish(IntIdMixin, SQLModel, table=True):
    __tablename__ = "wishes"

    user_id: int = Field(foreign_key="users.id", index=True, nullable=False)
    name: str = Field(nullable=False)
    info_link: Optional[str] = None

    user: Optional["User"] = Relationship(back_populates="wishes")
