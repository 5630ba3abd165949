"""
Identity module exceptions.
"""

from typing import Any, Optional

from shared.exceptions import ConflictError, ExternalServiceError, NotFoundError, ValidationError
from modules.validation.errors import ErrorCode


class IdentityConflictError(ConflictError):
    """Raised when an email or phone already belongs to a different subject."""

    def __init__(self, field: str):
        code = ErrorCode.IDENTITY_PHONE_TAKEN if field == "phone" else ErrorCode.IDENTITY_EMAIL_TAKEN
        super().__init__(code.message, code=code.value, details={"field": field})
        self.field = field


class MissingEmailError(ValidationError):
    """Raised when a verified principal carries no email."""

    def __init__(self):
        super().__init__(
            [ErrorCode.IDENTITY_EMAIL_REQUIRED],
            message=ErrorCode.IDENTITY_EMAIL_REQUIRED.message,
        )


class IdentityNotFoundError(NotFoundError):
    """Raised by endpoints that require an already-synced identity."""

    def __init__(self, subject_id: str):
        super().__init__(
            ErrorCode.IDENTITY_NOT_FOUND.message,
            code=ErrorCode.IDENTITY_NOT_FOUND.value,
            details={"user_id": subject_id},
        )


class IdentityStoreError(ExternalServiceError):
    """Unclassified failure from the identity store."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message, service="identity-store", code="IDENTITY_STORE_ERROR", details=details
        )
