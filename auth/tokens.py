"""
auth/tokens.py -- Session token issuance and verification.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry user_id, email, iat and exp and
       are self-verifying: there is no server-side session table, so a token
       stays valid until exp unless the secret is rotated.

  Verification raises Unauthorized on ANY failure (bad signature, malformed
       structure, missing or ill-typed claims, expired). The message is the
       same for every cause so clients learn nothing about which check failed.

  Timestamps are whole seconds. JWT NumericDate is an integer on the wire,
       and truncating before computing exp keeps exp - iat exactly the TTL.

  The secret and TTL are constructor arguments. create_app() builds one
       TokenService from Settings and stores it on app.state; nothing here
       reads configuration on import.

Layer rule: no imports from api/, web/, or catalog/. Import from core/ is
allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import SessionClaims
from core.errors import Unauthorized

logger = logging.getLogger("furnishare.auth")

_ALGORITHM = "HS256"
_INVALID_TOKEN = "Invalid token"


class TokenService:
    """Issue and verify signed, expiring session tokens.

    Usage:
        tokens = TokenService(settings.jwt_secret, settings.token_ttl_seconds)
        token = tokens.issue(user.id, user.email)
        claims = tokens.verify(token)   # raises Unauthorized
    """

    def __init__(self, secret: str, ttl_seconds: int = 24 * 60 * 60) -> None:
        self._secret = secret
        self.ttl = timedelta(seconds=ttl_seconds)

    def issue(self, user_id: int, email: str, issued_at: datetime | None = None) -> str:
        """Encode a signed token for user_id/email.

        issued_at defaults to now; tests pass a past value to mint tokens that
        are already expired.
        """
        iat = (issued_at or datetime.now(timezone.utc)).replace(microsecond=0)
        payload = {
            "user_id": user_id,
            "email": email,
            "iat": iat,
            "exp": iat + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> SessionClaims:
        """Decode and check a token. Raises Unauthorized on any failure."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require_iat": True, "require_exp": True},
            )
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise Unauthorized(_INVALID_TOKEN) from None

        user_id = payload.get("user_id")
        email = payload.get("email")
        # bool is an int subclass; a token carrying user_id=true is malformed.
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            logger.debug("Token rejected: malformed identity claims")
            raise Unauthorized(_INVALID_TOKEN)

        return SessionClaims(
            user_id=user_id,
            email=email,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
