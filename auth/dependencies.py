"""
auth/dependencies.py -- FastAPI Depends() helper for Bearer authentication.

get_current_identity() is the auth middleware for protected routes. It reads
the Authorization header, verifies the token with the TokenService on
app.state, and hands the route a typed AuthenticatedUser. Nothing is cached:
every request re-verifies, and the identity lives only as long as the
request.

Layer rule: no imports from web/ or catalog/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import AuthenticatedUser
from auth.tokens import TokenService
from core.errors import Unauthorized

BEARER_PREFIX = "Bearer "


def get_current_identity(request: Request) -> AuthenticatedUser:
    """Require a valid Bearer token. Raises Unauthorized (401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: AuthenticatedUser = Depends(get_current_identity)): ...

    The prefix match is case-sensitive with exactly one space; "bearer x" and
    "Bearer  x" are both rejected (the latter as an invalid token).
    """
    auth_header = request.headers.get("Authorization")
    if auth_header is None or auth_header == "":
        raise Unauthorized("Authorization header required")
    if not auth_header.startswith(BEARER_PREFIX):
        raise Unauthorized("Invalid authorization header format")

    token = auth_header[len(BEARER_PREFIX):]
    tokens: TokenService = request.app.state.tokens
    claims = tokens.verify(token)
    return AuthenticatedUser(user_id=claims.user_id, email=claims.email)
