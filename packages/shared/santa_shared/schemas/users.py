"""Room member schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class WishResponse(BaseModel):
    """A single wish-list entry."""
    id: int
    name: str
    info_link: Optional[str] = None


class UserResponse(BaseModel):
    """A room member as seen by another member of the same room."""
    id: int
    room_id: int
    first_name: str
    last_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    delivery_info: Optional[str] = None
    interests: Optional[str] = None
    want_surprise: bool = False
    is_admin: bool = False
    gift_recipient_user_id: Optional[int] = None
    wishes: List[WishResponse] = []
    created_on: datetime
    modified_on: datetime


class UserListResponse(BaseModel):
    """All members of the caller's room."""
    data: List[UserResponse]
