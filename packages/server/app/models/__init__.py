# Imported here so SQLModel metadata is populated before create_all.
from .base import IntIdMixin, TimestampMixin  # noqa: F401
from .room import Room  # noqa: F401
from .user import User  # noqa: F401
from .wish import Wish  # noqa: F401
