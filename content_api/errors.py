"""
Application error taxonomy.

Every error raised by services, the validator or the auth gate derives from
AppError. The exception handlers in content_api.main render them into the
uniform envelope: {"status": 0, "message": ..., "error": <code>}.
"""

from fastapi import status


class AppError(Exception):
    """Base exception for all client-visible application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Request body or query failed validation. Carries the first error only."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthError(AppError):
    """Base exception for authentication failures."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_message = "Invalid token"


class NoTokenError(AuthError):
    """Raised when no bearer token was sent."""

    code = "no_token"
    default_message = "No token provided"


class InvalidSignatureError(AuthError):
    """Raised when the token signature does not match."""

    code = "invalid_signature"


class TokenExpiredError(AuthError):
    """Raised when the token expiry is in the past."""

    code = "token_expired"


class MalformedTokenError(AuthError):
    """Raised when the token cannot be parsed."""

    code = "malformed_token"


class InvalidCredentialsError(AuthError):
    """Raised on login failure, whichever of email or password was wrong."""

    code = "invalid_credentials"
    default_message = "Invalid credentials"


class NotFoundError(AppError):
    """Raised when a record does not exist or its identifier is not valid."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class ConflictError(AppError):
    """Raised when a unique key is already taken."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "conflict"
    default_message = "Already in use"


class InternalError(AppError):
    """Store or unexpected failure. The message shown to clients stays generic."""

    code = "internal_error"
    default_message = "Server error"


# Postgres SQLSTATE reported by PostgREST on unique-constraint violations
UNIQUE_VIOLATION = "23505"
