"""Service and adapter factories shared by the API dependencies and routes."""

from functools import lru_cache
from typing import Callable

import httpx

from domain.services.account_service import AccountService
from domain.services.feed_service import FeedService
from domain.services.profile_service import ProfileService
from domain.services.session_gate import SessionGate
from infrastructure.auth.jwt_provider import JWTVerifier
from infrastructure.auth.supabase_provider import SupabaseIdentityProvider
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.supabase_storage import SupabaseBlobStore
from infrastructure.supabase_http import create_http_client


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_http_client() -> httpx.AsyncClient:
    """Shared HTTP client for Supabase calls (closed on shutdown)."""
    return create_http_client()


@lru_cache
def get_identity_provider() -> SupabaseIdentityProvider:
    """Get Supabase Auth identity provider instance."""
    return SupabaseIdentityProvider(get_http_client(), JWTVerifier())


@lru_cache
def get_blob_store() -> SupabaseBlobStore:
    """Get Supabase Storage blob store instance."""
    return SupabaseBlobStore(get_http_client())


@lru_cache
def get_session_gate() -> SessionGate:
    """Get Session gate instance."""
    return SessionGate(get_identity_provider())


@lru_cache
def get_account_service() -> AccountService:
    """Get Account service instance."""
    return AccountService(get_identity_provider())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory(), get_blob_store())


@lru_cache
def get_feed_service() -> FeedService:
    """Get Feed service instance."""
    return FeedService(get_uow_factory(), get_blob_store())
