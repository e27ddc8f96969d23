"""
auth/tokens.py -- JWT and password hashing utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry {"user": {"id", "role"}}, iat and
       exp. Verification returns None on any failure -- the dependency layer
       turns that into a 401. The secret and lifetime are passed in by the
       caller (from app.state.settings); nothing here reads configuration.

  Passwords: bcrypt directly (no passlib wrapper). gensalt() draws a random
       per-record salt and embeds it in the hash string together with the
       cost factor, so verify_password() needs nothing but the stored hash.
       The _dummy_hash() helper enables timing equalization in
       authenticate_user() so response time does not reveal whether an
       email is registered.

Layer rule: no imports from api/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import TYPE_CHECKING

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from auth.models import TokenIdentity
from core.errors import InternalError

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("shopdesk.auth")

_ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes of its input; bcrypt>=5 raises
# instead of truncating, so both hash and verify cut the input explicitly.
_BCRYPT_MAX_BYTES = 72

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = 10) -> str:
    """Return a salted bcrypt hash of the given plaintext password."""
    return bcrypt.hashpw(_password_bytes(plain), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    """Hash compared against when the email is unknown.

    Cached per cost factor so the unknown-email path costs one bcrypt check,
    the same as the wrong-password path.
    """
    return hash_password("shopdesk_timing_dummy", rounds)


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(
    user_id: str,
    role: str,
    *,
    secret_key: str,
    expire_seconds: int,
    issued_at: datetime | None = None,
) -> str:
    """Encode a signed JWT embedding the user's id and role.

    Args:
        user_id:        Store-assigned user ID.
        role:           Role at issuance time; trusted until the token expires.
        secret_key:     HS256 signing key.
        expire_seconds: Lifetime; exp = iat + expire_seconds.
        issued_at:      Issuance time, defaults to now (UTC).

    Raises InternalError if signing fails.
    """
    iat = issued_at or datetime.now(timezone.utc)
    payload = {
        "user": {"id": user_id, "role": role},
        "iat": iat,
        "exp": iat + timedelta(seconds=expire_seconds),
    }
    try:
        return jwt.encode(payload, secret_key, algorithm=_ALGORITHM)
    except JWTError as exc:
        raise InternalError("Could not sign access token.") from exc


def decode_access_token(token: str, *, secret_key: str) -> TokenIdentity | None:
    """Verify signature and expiry, then extract the embedded identity.

    Returns None for any invalid token: bad signature, expired, malformed, or
    missing the user claim. A token is still accepted at the exact second of
    its exp claim and rejected from the next second on.
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[_ALGORITHM])
    except ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except JWTError:
        logger.debug("Rejected token with bad signature or format")
        return None

    claims = payload.get("user")
    if not isinstance(claims, dict):
        return None
    user_id = claims.get("id")
    role = claims.get("role")
    if not isinstance(user_id, str) or not isinstance(role, str):
        return None
    return TokenIdentity(user_id=user_id, role=role)


# ---------------------------------------------------------------------------
# User authentication (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, email: str, password: str, rounds: int = 10) -> User | None:
    """Check an email/password pair with timing equalization.

    Always runs bcrypt whether or not the user exists:
    - Unknown email: bcrypt runs against _dummy_hash (same cost as a real check)
    - Wrong password: bcrypt runs against the real hash

    Returns the User on success, None on any failure.
    """
    user = store.get_by_email(email)
    if user is None:
        # Equalize timing -- do NOT return before running bcrypt.
        verify_password(password, _dummy_hash(rounds))
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user
