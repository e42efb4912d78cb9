"""
Async engine and sessions for the room store.

Rooms, members and wish lists all live behind one engine. Every request
gets its own session, committed when the handler returns and rolled back
if it raises. Objects stay readable after a commit (``expire_on_commit``
is off) because async sessions cannot refresh them lazily.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from app.core.config import get_settings

settings = get_settings()

engine = create_async_engine(settings.database_url, echo=settings.debug, future=True)

async_session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(bind: AsyncEngine | None = None):
    """Create the rooms, users and wishes tables on ``bind`` (default engine).

    Used by debug startup, the demo seeding script and the test suite.
    """
    import app.models  # noqa: F401  registers the tables

    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """Unit-of-work session for scripts: commit on exit, roll back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session dependency for the API routes."""
    async with get_session_context() as session:
        yield session
