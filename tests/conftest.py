"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Disable rate limiting and point the app engine at SQLite in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.identity import Identity
from infrastructure.database.models import Base
from tests.fakes import STUDENT_EMAIL, FakeBlobStore, FakeIdentityProvider

# Test database URL (SQLite in memory, one connection shared per test)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def student(identity_provider: FakeIdentityProvider) -> Identity:
    """A registered account with an allowed email."""
    return identity_provider.register(STUDENT_EMAIL)


@pytest.fixture
def auth_headers(identity_provider: FakeIdentityProvider, student: Identity) -> dict[str, str]:
    """Authorization headers carrying a live session for ``student``."""
    return {"Authorization": f"Bearer {identity_provider.issue_token(student)}"}


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession],
    identity_provider: FakeIdentityProvider,
    blob_store: FakeBlobStore,
) -> FastAPI:
    """
    Application wired to the in-memory database and fake Supabase collaborators.

    Services are built exactly as in production; only their collaborators differ.
    """
    from api.dependencies.services import (
        get_account_service,
        get_feed_service,
        get_profile_service,
        get_session_gate,
    )
    from domain.services.account_service import AccountService
    from domain.services.feed_service import FeedService
    from domain.services.profile_service import ProfileService
    from domain.services.session_gate import SessionGate
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app = create_app()
    app.dependency_overrides[get_session_gate] = lambda: SessionGate(identity_provider)
    app.dependency_overrides[get_account_service] = lambda: AccountService(identity_provider)
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(
        uow_factory, blob_store
    )
    app.dependency_overrides[get_feed_service] = lambda: FeedService(uow_factory, blob_store)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for the wired application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
