"""
auth/accounts.py -- Account creation shared by self-registration, the admin
create route, and the CLI.

The email lookup before the insert gives a friendly conflict in the common
case. It is not atomic: two concurrent requests can both pass it. The UNIQUE
constraint on users.email catches the loser, and its IntegrityError is
reported as the same ConflictError.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth.models import Role, User
from auth.store import UserStore
from auth.tokens import hash_password
from core.errors import ConflictError

logger = logging.getLogger("shopdesk.auth")


def create_account(
    store: UserStore,
    *,
    name: str,
    email: str,
    password: str,
    gender: str,
    date_of_birth: str,
    mobile_number: str,
    address: str,
    role: Role | str = Role.customer,
    rounds: int = 10,
) -> str:
    """Hash the password, insert the user and return the new ID.

    Raises ConflictError if the email is already registered.
    """
    if store.get_by_email(email) is not None:
        raise ConflictError("User already exists")

    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password, rounds),
        gender=gender,
        date_of_birth=date_of_birth,
        mobile_number=mobile_number,
        address=address,
        role=role.value if isinstance(role, Role) else Role(role).value,
    )
    try:
        user_id = store.create_user(user)
    except IntegrityError as exc:
        raise ConflictError("User already exists") from exc

    logger.info("Created user %s with role %s", user_id, user.role)
    return user_id
