"""Database session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings

POOLER_HOSTS = ("supabase.com", "pooler.supabase.com")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the record store.

    Supavisor runs in transaction mode, which breaks asyncpg's prepared
    statement cache, so the cache is disabled for pooler URLs.
    """
    connect_args: dict[str, Any] = {}
    if any(host in url for host in POOLER_HOSTS):
        connect_args["statement_cache_size"] = 0
    return create_async_engine(url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.async_database_url, echo=settings.debug)
async_session_factory = build_session_factory(engine)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session_factory() as session:
        yield session
