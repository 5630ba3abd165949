"""
Identity provider initialization and client adapter.

The provider is initialized exactly once per process. ``initialize``
returns an explicit handle that is threaded into the verifier; a second
initialization fails instead of silently replacing credentials.

The production client verifies tokens against Supabase Auth.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
from supabase import Client, create_client
from supabase_auth.errors import AuthError, AuthRetryableError

from shared.exceptions import ConfigError

from .exceptions import (
    AlreadyInitializedError,
    ProviderNotInitializedError,
    ProviderTokenRejectedError,
    ProviderUnavailableError,
)
from .interfaces import IIdentityProviderClient
from .models import ProviderSettings

logger = logging.getLogger(__name__)

PLACEHOLDER_PROJECT_IDS = frozenset(
    {
        "your-project-id",
        "your_project_id",
        "project-id",
        "changeme",
        "change-me",
        "placeholder",
        "example",
        "todo",
    }
)


class SupabaseIdentityProviderClient(IIdentityProviderClient):
    """
    Verifies access tokens issued by Supabase Auth.

    The token is sent to the Auth server, which checks signature, expiry
    and session revocation, and returns the user it belongs to.
    """

    def __init__(self, client: Client):
        self._client = client

    def verify_id_token(self, token: str) -> dict[str, Any]:
        try:
            response = self._client.auth.get_user(token)
        except AuthRetryableError as e:
            raise ProviderUnavailableError(str(e)) from e
        except AuthError as e:
            raise ProviderTokenRejectedError(str(e)) from e
        except httpx.HTTPError as e:
            # Transport faults (connect, read timeout, DNS) are not wrapped by the auth client
            raise ProviderUnavailableError(f"{type(e).__name__}: {e}") from e

        if response is None or response.user is None:
            raise ProviderTokenRejectedError("Provider returned no user for token")

        return self._claims_from_user(response.user)

    @staticmethod
    def _claims_from_user(user: Any) -> dict[str, Any]:
        claims = user.model_dump(mode="json")
        phone = user.phone or None
        # Supabase stores phone numbers without the leading '+'
        if phone and not phone.startswith("+"):
            phone = f"+{phone}"
        claims.update(
            {
                "sub": user.id,
                "email": user.email or None,
                "phone_number": phone,
                "email_verified": user.email_confirmed_at is not None,
            }
        )
        return claims


def _read_credential(path: str) -> str:
    credential_path = Path(path)
    if not path or not credential_path.is_file():
        raise ConfigError(
            f"Identity provider credential file not found: {path!r}. "
            "Set IDENTITY_PROVIDER_CREDENTIALS_PATH."
        )
    credential = credential_path.read_text(encoding="utf-8").strip()
    if not credential:
        raise ConfigError(f"Identity provider credential file is empty: {path!r}")
    return credential


def create_supabase_provider_client(settings: ProviderSettings) -> IIdentityProviderClient:
    """Build the Supabase Auth client for the configured project."""
    credential = _read_credential(settings.credential_source)
    url = f"https://{settings.project_id}.supabase.co"
    return SupabaseIdentityProviderClient(create_client(url, credential))


@dataclass(frozen=True)
class IdentityProviderHandle:
    """Read-only handle to the initialized provider. Safe to share."""

    project_id: str
    client: IIdentityProviderClient
    timeout_seconds: float


ClientFactory = Callable[[ProviderSettings], IIdentityProviderClient]

_init_lock = threading.Lock()
_handle: Optional[IdentityProviderHandle] = None


def validate_project_id(project_id: str) -> str:
    """Return the trimmed project ID, rejecting blank and placeholder values."""
    cleaned = (project_id or "").strip()
    if not cleaned:
        raise ConfigError(
            "Identity provider project ID must not be blank. "
            "Set IDENTITY_PROVIDER_PROJECT_ID."
        )
    if cleaned.lower() in PLACEHOLDER_PROJECT_IDS:
        raise ConfigError(
            f"Identity provider project ID is a placeholder value: {cleaned!r}"
        )
    return cleaned


def initialize_identity_provider(
    settings: ProviderSettings,
    client_factory: Optional[ClientFactory] = None,
) -> IdentityProviderHandle:
    """
    Initialize the identity provider for this process.

    Args:
        settings: Credential source, project ID and timeout
        client_factory: Builds the provider client; defaults to Supabase Auth

    Returns:
        The process-wide provider handle

    Raises:
        ConfigError: If the project ID is blank or a placeholder, or the
            credential source is unusable
        AlreadyInitializedError: If called a second time
    """
    global _handle

    project_id = validate_project_id(settings.project_id)
    factory = client_factory or create_supabase_provider_client

    with _init_lock:
        if _handle is not None:
            raise AlreadyInitializedError()
        _handle = IdentityProviderHandle(
            project_id=project_id,
            client=factory(settings),
            timeout_seconds=settings.timeout_seconds,
        )

    logger.info("Identity provider initialized for project: %s", project_id)
    return _handle


def get_identity_provider() -> IdentityProviderHandle:
    """Return the provider handle, failing if it was never initialized."""
    if _handle is None:
        raise ProviderNotInitializedError()
    return _handle


def is_identity_provider_initialized() -> bool:
    return _handle is not None


def reset_identity_provider() -> None:
    """Forget the provider handle (for testing only)."""
    global _handle
    with _init_lock:
        _handle = None
