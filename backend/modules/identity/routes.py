"""
Identity API endpoints.

All routes authenticate with a third-party identity token and keep the
local identity row in step with it.
"""

from fastapi import APIRouter, Depends, Response

from api.middleware.auth import get_current_principal
from api.dependencies import get_identity_synchronizer, get_token_service
from shared.models import Principal
from modules.auth.interfaces import ISessionTokenService
from modules.auth.models import TokenSubject

from .exceptions import IdentityNotFoundError
from .interfaces import IIdentitySynchronizer
from .models import AuthResponse, IdentitySummary, SyncProfileResponse

router = APIRouter()


@router.post("/sync-profile", response_model=SyncProfileResponse)
async def sync_profile(
    principal: Principal = Depends(get_current_principal),
    synchronizer: IIdentitySynchronizer = Depends(get_identity_synchronizer),
) -> SyncProfileResponse:
    """
    Create or update the caller's identity row.

    Call after every successful sign-in with the identity provider.
    """
    result = await synchronizer.sync_principal(principal)
    await synchronizer.touch_last_active(principal.subject_id)

    return SyncProfileResponse(
        user=IdentitySummary.from_record(result.record, principal.email_verified),
        is_new_user=result.was_created,
    )


@router.get("/me", response_model=IdentitySummary)
async def get_identity(
    principal: Principal = Depends(get_current_principal),
    synchronizer: IIdentitySynchronizer = Depends(get_identity_synchronizer),
) -> IdentitySummary:
    """
    Get the caller's stored identity.

    Returns 404 until the identity has been synced.
    """
    record = await synchronizer.find_by_id(principal.subject_id)
    if record is None:
        raise IdentityNotFoundError(principal.subject_id)

    await synchronizer.touch_last_active(principal.subject_id)
    return IdentitySummary.from_record(record, principal.email_verified)


@router.delete("/delete-account", status_code=204)
async def delete_account(
    principal: Principal = Depends(get_current_principal),
    synchronizer: IIdentitySynchronizer = Depends(get_identity_synchronizer),
) -> Response:
    """
    Delete the caller's identity row.

    The provider account itself is not touched.
    """
    rows = await synchronizer.delete(principal.subject_id)
    if rows == 0:
        raise IdentityNotFoundError(principal.subject_id)
    return Response(status_code=204)


@router.post("/session", response_model=AuthResponse)
async def create_session(
    principal: Principal = Depends(get_current_principal),
    synchronizer: IIdentitySynchronizer = Depends(get_identity_synchronizer),
    tokens: ISessionTokenService = Depends(get_token_service),
) -> AuthResponse:
    """
    Exchange a provider token for a self-issued session token.

    The identity must already be synced; the session carries the stored email.
    """
    record = await synchronizer.find_by_id(principal.subject_id)
    if record is None:
        raise IdentityNotFoundError(principal.subject_id)

    token = tokens.issue(TokenSubject(subject=record.id, email=record.email))
    return AuthResponse(
        access_token=token,
        expires_in=tokens.expires_in,
        user=IdentitySummary.from_record(record, principal.email_verified),
    )
