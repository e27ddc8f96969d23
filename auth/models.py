"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Dataclasses own the
domain shape; the store and routes do the work.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    admin = "admin"
    employee = "employee"
    customer = "customer"


@dataclass
class User:
    """A registered identity with its profile fields.

    hashed_password is the bcrypt string (salt embedded). It never leaves the
    server: API response models copy every field except this one.

    id is assigned by the store on insert (opaque 32-char hex string).
    """

    name: str
    email: str  # unique, compared case-sensitively
    hashed_password: str
    gender: str
    date_of_birth: str
    mobile_number: str
    address: str
    role: str = Role.customer.value
    id: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class TokenIdentity:
    """The claims a verified access token carries.

    Built from the token alone -- no database lookup -- so role changes made
    after issuance are not seen until the holder logs in again.
    """

    user_id: str
    role: str
