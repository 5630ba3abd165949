"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Tests replace services through ``app.dependency_overrides``.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IExternalIdentityVerifier, ISessionTokenService
    from modules.identity.interfaces import IIdentityRepository, IIdentitySynchronizer


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._token_service: "ISessionTokenService | None" = None
        self._identity_verifier: "IExternalIdentityVerifier | None" = None
        self._identity_repository: "IIdentityRepository | None" = None
        self._identity_synchronizer: "IIdentitySynchronizer | None" = None

    @property
    def tokens(self) -> "ISessionTokenService":
        """Get the session token service. Fails if JWT_SECRET is blank."""
        if self._token_service is None:
            from modules.auth.models import JwtSettings
            from modules.auth.tokens import SessionTokenService
            from shared.config import get_settings
            self._token_service = SessionTokenService(JwtSettings.from_settings(get_settings()))
        return self._token_service

    @property
    def identity_verifier(self) -> "IExternalIdentityVerifier":
        """Get the external identity verifier. Requires an initialized provider."""
        if self._identity_verifier is None:
            from modules.auth.provider import get_identity_provider
            from modules.auth.verifier import ExternalIdentityVerifier
            self._identity_verifier = ExternalIdentityVerifier(get_identity_provider())
        return self._identity_verifier

    @property
    def identity_repository(self) -> "IIdentityRepository":
        """Get the identity repository selected by IDENTITY_STORE."""
        if self._identity_repository is None:
            from shared.config import get_settings
            if get_settings().identity_store == "memory":
                from modules.identity.memory import InMemoryIdentityRepository
                self._identity_repository = InMemoryIdentityRepository()
            else:
                from modules.identity.repository import SupabaseIdentityRepository
                from shared.database import get_supabase_client
                self._identity_repository = SupabaseIdentityRepository(get_supabase_client())
        return self._identity_repository

    @property
    def identity_synchronizer(self) -> "IIdentitySynchronizer":
        """Get the identity synchronizer instance."""
        if self._identity_synchronizer is None:
            from modules.identity.service import IdentitySynchronizer
            from modules.validation.models import ValidationPolicy
            from shared.config import get_settings
            self._identity_synchronizer = IdentitySynchronizer(
                repository=self.identity_repository,
                policy=ValidationPolicy.from_settings(get_settings()),
            )
        return self._identity_synchronizer

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._token_service = None
        self._identity_verifier = None
        self._identity_repository = None
        self._identity_synchronizer = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "ISessionTokenService":
    """FastAPI dependency for the session token service."""
    return get_container().tokens


def get_identity_verifier() -> "IExternalIdentityVerifier":
    """FastAPI dependency for the external identity verifier."""
    return get_container().identity_verifier


def get_identity_synchronizer() -> "IIdentitySynchronizer":
    """FastAPI dependency for the identity synchronizer."""
    return get_container().identity_synchronizer
