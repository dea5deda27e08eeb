"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in catalog/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/, web/, or catalog/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# Temporary accounts are ordinary users whose email lives in this
# non-deliverable domain. Nothing else distinguishes them.
TEMPORARY_EMAIL_DOMAIN = "temporary.local"


@dataclass
class User:
    """A registered or temporary account.

    hashed_password is never serialized outward; api/models.py builds the
    response shapes field by field.
    """

    email: str
    name: str
    id: int | None = None
    hashed_password: str | None = None
    created_at: str | None = None  # ISO 8601, set by store on insert


@dataclass(frozen=True)
class SessionClaims:
    """Decoded payload of a session token. Never persisted."""

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a single request after its token verified.

    Route handlers receive this as a typed dependency parameter:
        def route(identity: AuthenticatedUser = Depends(get_current_identity)): ...
    """

    user_id: int
    email: str
