"""Unit tests for AccountService."""

import pytest

from core.exceptions import ErrorCode, StoreError, ValidationError
from domain.services.account_service import ACCOUNT_CREATED_MESSAGE, AccountService
from tests.fakes import FakeIdentityProvider

DOMAIN = "@yotes.collegeofidaho.edu"


@pytest.fixture
def provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def service(provider: FakeIdentityProvider) -> AccountService:
    return AccountService(provider, allowed_domain=DOMAIN, min_password_length=8)


class TestSignUp:
    @pytest.mark.asyncio
    async def test_creates_account_with_normalized_email(
        self, service: AccountService, provider: FakeIdentityProvider
    ):
        message = await service.sign_up("  New@Yotes.CollegeOfIdaho.edu ", "password123")

        assert message == ACCOUNT_CREATED_MESSAGE
        assert provider.sign_up_calls == ["new@yotes.collegeofidaho.edu"]

    @pytest.mark.asyncio
    async def test_rejects_outside_email_without_calling_provider(
        self, service: AccountService, provider: FakeIdentityProvider
    ):
        with pytest.raises(ValidationError) as exc_info:
            await service.sign_up("a@gmail.com", "password123")

        assert "restricted to C of I emails" in exc_info.value.message
        assert DOMAIN in exc_info.value.message
        assert provider.sign_up_calls == []

    @pytest.mark.asyncio
    async def test_rejects_short_password(
        self, service: AccountService, provider: FakeIdentityProvider
    ):
        with pytest.raises(ValidationError) as exc_info:
            await service.sign_up("a@yotes.collegeofidaho.edu", "short")

        assert exc_info.value.message == "Password must be at least 8 characters."
        assert exc_info.value.details == {"field": "password"}
        assert provider.sign_up_calls == []

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(
        self, service: AccountService, provider: FakeIdentityProvider
    ):
        provider.register("a@yotes.collegeofidaho.edu")

        with pytest.raises(StoreError) as exc_info:
            await service.sign_up("a@yotes.collegeofidaho.edu", "password123")

        assert exc_info.value.error_code == ErrorCode.STORE_ERROR
        assert exc_info.value.message == "User already registered"


class TestSignIn:
    @pytest.mark.asyncio
    async def test_returns_session(self, service: AccountService, provider: FakeIdentityProvider):
        identity = provider.register("a@yotes.collegeofidaho.edu")

        session = await service.sign_in("A@yotes.collegeofidaho.edu", "password123")

        assert session.identity == identity
        assert session.access_token in provider.sessions

    @pytest.mark.asyncio
    async def test_rejects_outside_email(self, service: AccountService):
        with pytest.raises(ValidationError) as exc_info:
            await service.sign_in("a@gmail.com", "password123")

        assert exc_info.value.message == f"You must sign in with a C of I email ({DOMAIN})."

    @pytest.mark.asyncio
    async def test_wrong_password_surfaces_provider_message(
        self, service: AccountService, provider: FakeIdentityProvider
    ):
        provider.register("a@yotes.collegeofidaho.edu")

        with pytest.raises(StoreError) as exc_info:
            await service.sign_in("a@yotes.collegeofidaho.edu", "wrong-password")

        assert exc_info.value.message == "Invalid login credentials"


class TestSignOut:
    @pytest.mark.asyncio
    async def test_revokes_session(self, service: AccountService, provider: FakeIdentityProvider):
        identity = provider.register("a@yotes.collegeofidaho.edu")
        token = provider.issue_token(identity)

        await service.sign_out(token)

        assert token not in provider.sessions
