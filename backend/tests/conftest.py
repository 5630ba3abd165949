"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any

from api.dependencies import reset_container
from modules.auth.exceptions import ProviderTokenRejectedError
from modules.auth.models import JwtSettings, TokenSubject
from modules.auth.provider import IdentityProviderHandle, reset_identity_provider
from modules.auth.tokens import SessionTokenService
from modules.identity.memory import InMemoryIdentityRepository
from modules.identity.service import IdentitySynchronizer


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock for deterministic expiry tests."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeProviderClient:
    """
    In-memory identity provider client.

    Maps token strings to claim dicts; unknown tokens are rejected.
    ``error`` is raised for every call when set.
    """

    def __init__(self, tokens: dict[str, dict[str, Any]] | None = None):
        self.tokens = dict(tokens or {})
        self.error: Exception | None = None
        self.calls: list[str] = []

    def verify_id_token(self, token: str) -> dict[str, Any]:
        self.calls.append(token)
        if self.error is not None:
            raise self.error
        if token not in self.tokens:
            raise ProviderTokenRejectedError("Unknown token")
        return self.tokens[token]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and provider handle before and after each test."""
    reset_container()
    reset_identity_provider()
    yield
    reset_container()
    reset_identity_provider()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def jwt_settings() -> JwtSettings:
    return JwtSettings(secret=TEST_JWT_SECRET)


@pytest.fixture
def token_service(jwt_settings: JwtSettings, clock: FakeClock) -> SessionTokenService:
    return SessionTokenService(jwt_settings, clock=clock)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def test_subject(test_user_id: str, test_user_email: str) -> TokenSubject:
    return TokenSubject(subject=test_user_id, email=test_user_email)


@pytest.fixture
def auth_token(token_service: SessionTokenService, test_subject: TokenSubject) -> str:
    """Create a valid session token for testing."""
    return token_service.issue(test_subject)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def provider_claims(test_user_id: str, test_user_email: str) -> dict[str, Any]:
    return {
        "sub": test_user_id,
        "email": test_user_email,
        "phone_number": "+14155552671",
        "email_verified": True,
    }


@pytest.fixture
def provider_client(provider_claims: dict[str, Any]) -> FakeProviderClient:
    return FakeProviderClient({"provider-token": provider_claims})


@pytest.fixture
def provider_handle(provider_client: FakeProviderClient) -> IdentityProviderHandle:
    return IdentityProviderHandle(
        project_id="eros-test",
        client=provider_client,
        timeout_seconds=1.0,
    )


@pytest.fixture
def identity_repository() -> InMemoryIdentityRepository:
    return InMemoryIdentityRepository()


@pytest.fixture
def synchronizer(
    identity_repository: InMemoryIdentityRepository, clock: FakeClock
) -> IdentitySynchronizer:
    return IdentitySynchronizer(identity_repository, clock=clock)
