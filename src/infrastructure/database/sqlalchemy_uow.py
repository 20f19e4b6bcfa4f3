"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import StoreError
from infrastructure.database.repositories.sqlalchemy_post_repo import SQLAlchemyPostRepository
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy.

    Driver and constraint failures leave the block as StoreError so services
    only deal with the application error taxonomy.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyProfileRepository(self._session)

    @property
    def posts(self) -> SQLAlchemyPostRepository:
        """Get post repository."""
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return SQLAlchemyPostRepository(self._session)

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            try:
                if exc_type:
                    await self.rollback()
            finally:
                await self._session.close()
                self._session = None

        if isinstance(exc_val, SQLAlchemyError):
            raise StoreError(
                "The record store rejected the request",
                source="record_store",
            ) from exc_val
