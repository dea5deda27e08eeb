"""
api/routes/auth.py -- Account creation and login endpoints.

Routes:
  POST /api/auth/signup     -- register name/email/password; 201 + token
  POST /api/auth/login      -- email/password login; 200 + token
  POST /api/auth/temporary  -- anonymous account from a display name; 201 + token

All three are public and all three answer with AuthResponse:
  {"message": ..., "token": <JWT>, "user": {"id", "email", "name"}}

Security:
  [T1] Login goes through authenticate_user(), which runs bcrypt even for
       unknown emails. Do NOT inline get_by_email() + verify() here.
  [T2] Unknown email and wrong password raise the same InvalidCredentials,
       so the two responses are byte-identical.
  [T3] Cache-Control: no-store on every response that carries a token.

Handlers are plain `def` on purpose: bcrypt is CPU-bound and the store is
synchronous, so FastAPI runs each request on its own threadpool worker.
"""

from __future__ import annotations

import logging
import secrets
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from api.models import AuthResponse, LoginRequest, SignupRequest, TemporaryUserRequest, UserSummary
from auth.models import TEMPORARY_EMAIL_DOMAIN, User
from auth.passwords import MAX_PASSWORD_BYTES, HashingError, PasswordHasher, authenticate_user
from auth.store import UserStore
from auth.tokens import TokenService
from core.errors import Conflict, InternalError, InvalidCredentials, ValidationError

logger = logging.getLogger("furnishare.auth")

MIN_PASSWORD_LENGTH = 6

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _auth_response(message: str, token: str, user: User, status_code: int) -> JSONResponse:
    resp = JSONResponse(
        status_code=status_code,
        content=AuthResponse(message=message, token=token, user=UserSummary.from_user(user)).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"  # [T3]
    return resp


def _hash(hasher: PasswordHasher, plain: str) -> str:
    try:
        return hasher.hash(plain)
    except HashingError as exc:
        logger.error("Password hashing failed: %s", exc.__cause__)
        raise InternalError("Error hashing password") from exc


def _temporary_email() -> str:
    return f"temp_{time.time_ns()}@{TEMPORARY_EMAIL_DOMAIN}"


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/auth/signup", response_model=AuthResponse, status_code=201)
def signup(request: Request, body: SignupRequest) -> JSONResponse:
    """Register a new account and log it in.

    The email check before insert gives the common case a clean Conflict; the
    UNIQUE constraint catches the race where two signups for one address pass
    the check together.
    """
    if not body.name or not body.email or not body.password:
        raise ValidationError("Name, email, and password are required")
    # Both bounds count UTF-8 bytes, not characters.
    if len(body.password.encode("utf-8")) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(body.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    user_store: UserStore = request.app.state.user_store
    hasher: PasswordHasher = request.app.state.hasher
    tokens: TokenService = request.app.state.tokens

    try:
        if user_store.email_exists(body.email):
            raise Conflict("User already exists")
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed during signup")
        raise InternalError("Error creating user") from exc

    user = User(email=body.email, name=body.name, hashed_password=_hash(hasher, body.password))
    try:
        user.id = user_store.create_user(user)
    except IntegrityError as exc:
        raise Conflict("User already exists") from exc
    except SQLAlchemyError as exc:
        logger.exception("User insert failed during signup")
        raise InternalError("Error creating user") from exc

    token = tokens.issue(user.id, user.email)
    logger.info("Registered user %d", user.id)
    return _auth_response("User created successfully", token, user, 201)


@router.post("/auth/login", response_model=AuthResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password [T1][T2]."""
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user_store: UserStore = request.app.state.user_store
    hasher: PasswordHasher = request.app.state.hasher
    tokens: TokenService = request.app.state.tokens

    try:
        user = authenticate_user(user_store, hasher, body.email, body.password)
    except SQLAlchemyError as exc:
        logger.exception("User lookup failed during login")
        raise InternalError("Error logging in") from exc
    if user is None:
        logger.warning("Failed login attempt")
        raise InvalidCredentials("Invalid credentials")

    token = tokens.issue(user.id, user.email)
    logger.info("Login: user %d", user.id)
    return _auth_response("Login successful", token, user, 200)


@router.post("/auth/temporary", response_model=AuthResponse, status_code=201)
def create_temporary_user(request: Request, body: TemporaryUserRequest) -> JSONResponse:
    """Create a throwaway account reachable only through the returned token.

    The account gets a synthetic, non-deliverable email and a random password
    that is hashed and then dropped -- nobody, including the caller, can log
    in to it with a password.
    """
    if not body.name:
        raise ValidationError("Name is required")

    user_store: UserStore = request.app.state.user_store
    hasher: PasswordHasher = request.app.state.hasher
    tokens: TokenService = request.app.state.tokens

    user = User(
        email=_temporary_email(),
        name=body.name,
        hashed_password=_hash(hasher, secrets.token_urlsafe(32)),
    )
    try:
        user.id = user_store.create_user(user)
    except SQLAlchemyError as exc:
        logger.exception("Temporary user insert failed")
        raise InternalError("Error creating temporary user") from exc

    token = tokens.issue(user.id, user.email)
    logger.info("Created temporary user %d", user.id)
    return _auth_response("Temporary user created successfully", token, user, 201)
