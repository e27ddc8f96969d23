"""
core/errors.py -- Application error taxonomy.

Every failure a handler can report maps to one of these classes. Route code
raises them; api/main.py owns the single exception handler that renders them
into the JSON error envelope. Nothing below knows about HTTP frameworks --
status_code is plain data the API layer reads.

  ValidationError      400  missing or malformed input
  ConflictError        400  duplicate email
  AuthenticationError  401  missing/invalid/expired token (400 for bad credentials)
  AuthorizationError   403  valid token, insufficient role
  NotFoundError        404  target record does not exist
  InternalError        500  hashing/signing failure, database unavailable

Layer rule: core/ is the kernel. No imports from api/ or auth/.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that carry their own HTTP status and error code."""

    status_code: int = 500
    code: str = "internal_error"
    message: str = "Server error"

    def __init__(self, message: str | None = None, *, code: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.message
        if code is not None:
            self.code = code
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    message = "Request validation failed."


class ConflictError(AppError):
    status_code = 400
    code = "conflict"
    message = "User already exists"


class AuthenticationError(AppError):
    status_code = 401
    code = "invalid_token"
    message = "Token is not valid"


class InvalidCredentialsError(AuthenticationError):
    """Bad email or password on login.

    Reported as 400 with one fixed message for both unknown email and wrong
    password, so the response never tells a caller which accounts exist.
    """

    status_code = 400
    code = "invalid_credentials"
    message = "Invalid credentials"


class AuthorizationError(AppError):
    status_code = 403
    code = "forbidden"
    message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class InternalError(AppError):
    status_code = 500
    code = "internal_error"
    message = "Server error"
