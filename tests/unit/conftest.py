"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.identity import Identity
from domain.entities.profile import Profile
from tests.fakes import STUDENT_EMAIL


class FakeUnitOfWork:
    """Fake Unit of Work with repository mocks for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.posts = AsyncMock()
        self.commits = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commits > 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def identity(user_id: UUID) -> Identity:
    """An allowed identity for ``user_id``."""
    return Identity(id=user_id, email=STUDENT_EMAIL)


@pytest.fixture
def profile(identity: Identity) -> Profile:
    """A filled-in profile for ``identity``."""
    return Profile(
        id=identity.id,
        email=identity.email,
        full_name="Alex Coyote",
        major="Biology",
        grad_year=2028,
        bio="Pre-med",
    )
