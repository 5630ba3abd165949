"""
Bearer authentication dependencies.

Two disjoint token kinds share the Authorization header: self-issued
session tokens and third-party identity tokens. Each route group picks
one of the dependencies below, never both.

Every failure becomes the same 401 response; the reason is only logged.
"""

import logging
from typing import Callable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import Principal
from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IExternalIdentityVerifier, ISessionTokenService
from modules.auth.models import Role, SessionClaims

from ..dependencies import get_identity_verifier, get_token_service

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHENTICATED_DETAIL = "Invalid or expired token. Please authenticate and provide a valid token."


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str = UNAUTHENTICATED_DETAIL):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_session(token: str, tokens: ISessionTokenService) -> SessionClaims:
    """
    Verify a session token, collapsing every failure into AuthError.

    Raises:
        AuthError: If the token is missing, invalid or expired
    """
    try:
        return tokens.verify(token)
    except AuthenticationError as e:
        logger.debug("Session token rejected: %s", e.code)
        raise AuthError()


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ISessionTokenService = Depends(get_token_service),
) -> SessionClaims:
    """
    Dependency that requires a valid session token.

    Usage:
        @router.get("/protected")
        async def protected_route(session: SessionClaims = Depends(get_current_session)):
            return {"user_id": session.subject}
    """
    if credentials is None:
        raise AuthError()
    return decode_session(credentials.credentials, tokens)


async def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: ISessionTokenService = Depends(get_token_service),
) -> Optional[SessionClaims]:
    """Dependency that returns the session claims if a valid token is present."""
    if credentials is None:
        return None

    try:
        return decode_session(credentials.credentials, tokens)
    except AuthError:
        return None


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IExternalIdentityVerifier = Depends(get_identity_verifier),
) -> Principal:
    """
    Dependency that requires a valid third-party identity token.

    A failed verification becomes "no principal" and then a 401.
    """
    if credentials is None:
        raise AuthError()

    principal = await verifier.verify_or_none(credentials.credentials)
    if principal is None:
        raise AuthError()
    return principal


def require_role(role: Role) -> Callable:
    """
    Build a dependency that requires the session to carry ``role``.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_role(Role.ADMIN))])
    """

    async def dependency(session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
        if not session.has_role(role):
            raise InsufficientPermissionsError(role.value, list(session.roles))
        return session

    return dependency


# Type aliases for cleaner route definitions
RequireSession = Depends(get_current_session)
OptionalSession = Depends(get_optional_session)
RequirePrincipal = Depends(get_current_principal)
