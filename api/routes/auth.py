"""
api/routes/auth.py -- Registration and login REST endpoints.

Routes:
  POST /api/auth/register   -- self-registration; role is always "customer"
  POST /api/auth/login      -- email/password login; returns a signed token

Security:
  POST /login is rate-limited per client IP (LOGIN_RATE_LIMIT).
  authenticate_user() provides timing equalization -- use it, never inline.
  Unknown email and wrong password raise the same InvalidCredentialsError,
  so both produce byte-identical responses.
  Cache-Control: no-store on login responses.

Both handlers are plain `def`: FastAPI runs them in its threadpool, which
keeps bcrypt's deliberate CPU cost off the event loop.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from api.limiter import limiter
from api.models import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, UserProfile
from auth.accounts import create_account
from auth.models import Role
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token
from core.config import get_settings
from core.errors import InvalidCredentialsError

logger = logging.getLogger("shopdesk.api")

# Auth policy: both endpoints are public -- they are how a caller gets a token.
router = APIRouter()


def _login_rate_limit() -> str:
    # slowapi calls dynamic limit providers without the request, so this one
    # reads the cached process settings rather than app.state.settings.
    return get_settings().login_rate_limit


@router.post("/auth/register", response_model=MessageResponse)
def register(request: Request, body: RegisterRequest) -> MessageResponse:
    """Create a customer account.

    All fields are required; no format checks beyond presence. The role is
    fixed to customer -- admins grant other roles through /api/users.
    """
    settings = request.app.state.settings
    user_store: UserStore = request.app.state.user_store

    create_account(
        user_store,
        name=body.name,
        email=body.email,
        password=body.password,
        gender=body.gender,
        date_of_birth=body.date_of_birth,
        mobile_number=body.mobile_number,
        address=body.address,
        role=Role.customer,
        rounds=settings.bcrypt_rounds,
    )
    return MessageResponse(msg="User registered successfully")


@router.post("/auth/login", response_model=LoginResponse)
@limiter.limit(_login_rate_limit)
def login(request: Request, response: Response, body: LoginRequest) -> LoginResponse:
    """Authenticate with email and password; return a token and minimal profile.

    The token embeds the user's id and role and expires after
    TOKEN_EXPIRE_SECONDS (24 hours by default).
    """
    settings = request.app.state.settings
    user_store: UserStore = request.app.state.user_store

    user = authenticate_user(user_store, body.email, body.password, settings.bcrypt_rounds)
    if user is None:
        logger.warning("Failed login attempt from %s", request.client.host if request.client else "unknown")
        raise InvalidCredentialsError()

    token = create_access_token(
        user.id,
        user.role,
        secret_key=settings.secret_key,
        expire_seconds=settings.token_expire_seconds,
    )
    logger.info("User %s logged in", user.id)
    response.headers["Cache-Control"] = "no-store"
    return LoginResponse(
        token=token,
        user=UserProfile(id=user.id, name=user.name, email=user.email, role=user.role),
    )
