"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The access token travels in the custom "x-auth-token" request header as an
opaque string. There is no cookie session and no Authorization: Bearer
fallback.

get_current_identity() verifies the token and returns the TokenIdentity it
carries. It performs no database lookup: the id and role embedded at login
are trusted for the rest of the request.

require_role(*roles) builds a second-stage dependency that compares the
identity's role against the roles a route allows. require_admin is the one
the user-management routes use.

Per-request flow:
  no header          -> 401 no_token
  header, bad token  -> 401 invalid_token
  valid, wrong role  -> 403 forbidden
  valid, right role  -> route handler

Layer rule: auth/dependencies.py may import from fastapi because this module
is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, Request

from auth.models import Role, TokenIdentity
from auth.tokens import decode_access_token
from core.errors import AuthenticationError, AuthorizationError

TOKEN_HEADER = "x-auth-token"


def get_current_identity(request: Request) -> TokenIdentity:
    """Require a valid access token. Raises AuthenticationError (401) otherwise.

    On success the identity is also stored on request.state.identity so
    middleware and handlers further down can read it without re-decoding.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: TokenIdentity = Depends(get_current_identity)): ...
    """
    token = request.headers.get(TOKEN_HEADER)
    if not token:
        raise AuthenticationError("No token, authorization denied", code="no_token")

    settings = request.app.state.settings
    identity = decode_access_token(token, secret_key=settings.secret_key)
    if identity is None:
        raise AuthenticationError("Token is not valid", code="invalid_token")

    request.state.identity = identity
    return identity


def require_role(*roles: Role | str, message: str = "Access denied") -> Callable[..., TokenIdentity]:
    """Return a dependency that admits only tokens whose role is in *roles*.

    Runs get_current_identity first, so a missing or invalid token is still
    a 401; only a valid token with the wrong role becomes a 403.
    """
    allowed = frozenset(r.value if isinstance(r, Role) else r for r in roles)

    def _check(identity: TokenIdentity = Depends(get_current_identity)) -> TokenIdentity:
        if identity.role not in allowed:
            raise AuthorizationError(message)
        return identity

    return _check


require_admin = require_role(Role.admin, message="Access denied: Admins only")
