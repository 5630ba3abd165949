"""
User-related endpoints.

Authenticated with self-issued session tokens.
"""

from fastapi import APIRouter, Depends

from modules.auth.models import Role, SessionClaims
from ..middleware.auth import get_current_session, require_role
from ..models.session import SessionUserResponse

router = APIRouter()


def _to_response(session: SessionClaims) -> SessionUserResponse:
    return SessionUserResponse(
        id=session.subject,
        email=session.email,
        roles=list(session.roles),
        issued_at=session.issued_at,
        expires_at=session.expires_at,
    )


@router.get("/me", response_model=SessionUserResponse)
async def get_current_user_profile(
    session: SessionClaims = Depends(get_current_session),
) -> SessionUserResponse:
    """
    Get the current user's session claims.

    Requires a session token.
    """
    return _to_response(session)


@router.get("/admin/me", response_model=SessionUserResponse)
async def get_admin_profile(
    session: SessionClaims = Depends(require_role(Role.ADMIN)),
) -> SessionUserResponse:
    """Same as /me, restricted to sessions carrying the admin role."""
    return _to_response(session)
