"""Database configuration and session management."""

from cadence.core.config import settings
from collections.abc import AsyncGenerator
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool


class Base(DeclarativeBase):
    """Base class for database models."""
    pass


def _build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL."""
    if url.startswith("sqlite"):
        # File-backed SQLite: one connection per session, no cross-loop reuse
        return create_async_engine(url, echo=echo, poolclass=NullPool)
    return create_async_engine(url, echo=echo, future=True)


async_engine: AsyncEngine = _build_engine(settings.DATABASE_URL, settings.DATABASE_ECHO)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def configure_database(url: str, echo: bool = False) -> AsyncEngine:
    """Point the session factory at a different database.

    Used at startup when the URL is overridden and by the test suite.
    """
    global async_engine
    async_engine = _build_engine(url, echo)
    AsyncSessionLocal.configure(bind=async_engine)
    return async_engine


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get async database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_database():
    """Initialize database tables."""
    # Register models on the metadata before create_all
    import cadence.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_database() -> bool:
    """Return True if the database answers a trivial query."""
    async with AsyncSessionLocal() as session:
        await session.execute(text("SELECT 1"))
    return True


async def close_database():
    """Close database connections."""
    await async_engine.dispose()
