"""
api/routes/users.py -- Admin-only user management REST endpoints.

Routes:
  GET    /api/users             -- list all users, newest first
  POST   /api/users             -- create a user with any role
  PUT    /api/users/{user_id}   -- update profile fields and role (not password)
  DELETE /api/users/{user_id}   -- hard delete

Every route depends on require_admin: no token or a bad token is a 401, a
valid token whose embedded role is not admin is a 403.

Role changes take effect on the next login. Tokens already issued keep the
role they were signed with until they expire.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import IntegrityError

from api.models import MessageResponse, UserCreate, UserMessageResponse, UserResponse, UserUpdate
from auth.accounts import create_account
from auth.dependencies import require_admin
from auth.models import TokenIdentity
from auth.store import UserStore
from core.errors import ConflictError, InternalError, NotFoundError

logger = logging.getLogger("shopdesk.api")

router = APIRouter()


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    request: Request,
    admin: TokenIdentity = Depends(require_admin),
) -> list[UserResponse]:
    """List all user accounts. Admin only."""
    user_store: UserStore = request.app.state.user_store
    return [UserResponse.from_user(u) for u in user_store.list_users()]


@router.post("/users", response_model=UserMessageResponse, status_code=201)
def create_user(
    request: Request,
    body: UserCreate,
    admin: TokenIdentity = Depends(require_admin),
) -> UserMessageResponse:
    """Create a user with the given role. Admin only.

    Same required fields as registration plus role. Duplicate email is a
    conflict (400).
    """
    settings = request.app.state.settings
    user_store: UserStore = request.app.state.user_store

    user_id = create_account(
        user_store,
        name=body.name,
        email=body.email,
        password=body.password,
        gender=body.gender,
        date_of_birth=body.date_of_birth,
        mobile_number=body.mobile_number,
        address=body.address,
        role=body.role,
        rounds=settings.bcrypt_rounds,
    )
    logger.info("Admin %s created user %s", admin.user_id, user_id)
    return UserMessageResponse(msg="User created successfully", user=_load(user_store, user_id))


@router.put("/users/{user_id}", response_model=UserMessageResponse)
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdate,
    admin: TokenIdentity = Depends(require_admin),
) -> UserMessageResponse:
    """Update a user's profile fields or role. Admin only.

    Omitted fields are left unchanged. Passwords cannot be changed here.
    """
    user_store: UserStore = request.app.state.user_store

    updates = body.model_dump(exclude_none=True)
    if "role" in updates:
        updates["role"] = body.role.value

    try:
        updated = user_store.update_user(user_id, **updates)
    except IntegrityError as exc:
        raise ConflictError("A user with that email already exists") from exc
    if not updated:
        raise NotFoundError("User not found")

    logger.info("Admin %s updated user %s (%s)", admin.user_id, user_id, ", ".join(sorted(updates)) or "no changes")
    return UserMessageResponse(msg="User updated successfully", user=_load(user_store, user_id))


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    request: Request,
    user_id: str,
    admin: TokenIdentity = Depends(require_admin),
) -> MessageResponse:
    """Permanently delete a user. Admin only. A missing id is a 404 every time."""
    user_store: UserStore = request.app.state.user_store
    if not user_store.delete_user(user_id):
        raise NotFoundError("User not found")
    logger.info("Admin %s deleted user %s", admin.user_id, user_id)
    return MessageResponse(msg="User deleted successfully")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load(user_store: UserStore, user_id: str) -> UserResponse:
    user = user_store.get_by_id(user_id)
    if user is None:
        raise InternalError("User not found after write.")
    return UserResponse.from_user(user)
