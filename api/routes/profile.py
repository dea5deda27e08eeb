"""
api/routes/profile.py -- Current-user profile.

Routes:
  GET /api/profile  -- requires Bearer token; 200 {"user": {id, email, name, createdAt}}

A token outlives the account it names (there is no revocation), so a valid
token for a deleted user gets 404 rather than 401.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.models import ProfileResponse, ProfileUser
from auth.dependencies import get_current_identity
from auth.models import AuthenticatedUser
from auth.store import UserStore
from core.errors import InternalError, NotFound

logger = logging.getLogger("furnishare.api")

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    request: Request,
    identity: AuthenticatedUser = Depends(get_current_identity),
) -> JSONResponse:
    """Return the profile of the user named by the session token."""
    user_store: UserStore = request.app.state.user_store
    try:
        user = user_store.get_by_id(identity.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Profile lookup failed for user %d", identity.user_id)
        raise InternalError("Error fetching profile") from exc
    if user is None:
        raise NotFound("User not found")
    return JSONResponse(content=ProfileResponse(user=ProfileUser.from_user(user)).model_dump(by_alias=True))
