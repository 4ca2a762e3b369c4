"""
Authentication: password hashing, JWT issuing/verification and the
FastAPI dependency that guards protected routes.
"""

from .dependencies import AuthenticatedUser, get_authenticated_user, get_token_service
from .passwords import hash_password, verify_password
from .tokens import TokenClaims, TokenService

__all__ = [
    "AuthenticatedUser",
    "TokenClaims",
    "TokenService",
    "get_authenticated_user",
    "get_token_service",
    "hash_password",
    "verify_password",
]
