"""
API request and response models for ShopDesk REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.

Wire format is camelCase (dateOfBirth, mobileNumber, createdAt) to match the
existing web clients; Python attribute names stay snake_case. populate_by_name
lets handlers construct models with either spelling.

Input validation is presence-only: every required string must be present and
non-empty. No email or phone format checks are applied.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from auth.models import Role, User

# Shared config for all request/response bodies that carry camelCase fields.
_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses.

    msg duplicates error.message for clients that only read the flat field.
    """

    model_config = ConfigDict(frozen=True)

    msg: str
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]


# ---------------------------------------------------------------------------
# Auth -- requests
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/auth/register. Role is never accepted here."""

    model_config = _WIRE_CONFIG

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)
    gender: str = Field(min_length=1, max_length=50)
    date_of_birth: str = Field(min_length=1, max_length=50)
    mobile_number: str = Field(min_length=1, max_length=50)
    address: str = Field(min_length=1, max_length=1000)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    model_config = _WIRE_CONFIG

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Auth -- responses
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    msg: str


class UserProfile(BaseModel):
    """Minimal identity returned alongside a fresh token."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """Response for POST /api/auth/login."""

    model_config = ConfigDict(frozen=True)

    token: str
    user: UserProfile


# ---------------------------------------------------------------------------
# User management (admin only)
# ---------------------------------------------------------------------------


class UserCreate(RegisterRequest):
    """Request body for POST /api/users. Same as registration plus a role."""

    role: Role


class UserUpdate(BaseModel):
    """Request body for PUT /api/users/{user_id}.

    Every field is optional; omitted fields keep their stored value. A
    password field in the body is ignored -- passwords are not changed here.
    """

    model_config = _WIRE_CONFIG

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[Role] = None
    gender: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date_of_birth: Optional[str] = Field(default=None, min_length=1, max_length=50)
    mobile_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    address: Optional[str] = Field(default=None, min_length=1, max_length=1000)


class UserResponse(BaseModel):
    """A stored user as returned by the admin endpoints. Never includes the password hash."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    email: str
    role: str
    gender: str
    date_of_birth: str
    mobile_number: str
    address: str
    created_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build a UserResponse from an auth.models.User, dropping hashed_password."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            gender=user.gender,
            date_of_birth=user.date_of_birth,
            mobile_number=user.mobile_number,
            address=user.address,
            created_at=user.created_at or "",
        )


class UserMessageResponse(BaseModel):
    """Response for POST /api/users and PUT /api/users/{user_id}."""

    model_config = ConfigDict(frozen=True)

    msg: str
    user: UserResponse
