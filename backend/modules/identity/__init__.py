"""
Identity module.

Synchronizes verified third-party identities into the local identity row.

Public API:
- IIdentitySynchronizer / IdentitySynchronizer: Upsert, lookup, touch, delete
- IIdentityRepository: Store contract (Supabase and in-memory implementations)
- InMemoryIdentityRepository: Selected with IDENTITY_STORE=memory
- Models: IdentityRecord, SyncResult, IdentitySummary
- Identity exceptions: IdentityConflictError, MissingEmailError, etc.
"""

from .interfaces import IIdentityRepository, IIdentitySynchronizer
from .memory import InMemoryIdentityRepository
from .models import (
    AuthResponse,
    IdentityRecord,
    IdentitySummary,
    SyncProfileResponse,
    SyncResult,
)
from .exceptions import (
    IdentityConflictError,
    IdentityNotFoundError,
    IdentityStoreError,
    MissingEmailError,
)

__all__ = [
    # Interfaces
    "IIdentityRepository",
    "IIdentitySynchronizer",
    # Stores
    "InMemoryIdentityRepository",
    # Models
    "AuthResponse",
    "IdentityRecord",
    "IdentitySummary",
    "SyncProfileResponse",
    "SyncResult",
    # Exceptions
    "IdentityConflictError",
    "IdentityNotFoundError",
    "IdentityStoreError",
    "MissingEmailError",
]
