"""
FastAPI dependency functions for authentication.

These functions are used as FastAPI dependencies to verify bearer tokens
and expose the authenticated identity to route handlers.

Gate flow per request:
    Start -> TokenExtracted -> TokenVerified -> Authorized
Any failed step rejects the request with 401 before the route body runs.
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Header

from content_api.auth.tokens import TokenService
from content_api.config import settings
from content_api.errors import AuthError, NoTokenError
from content_api.utils.logging import get_logger

logger = get_logger(__name__)

_token_service: TokenService | None = None


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated user with their token.

    Attributes:
        user_id: The user's id from the token's 'sub' claim
        email: The email claim, if present
        access_token: The raw bearer token
    """
    user_id: str
    email: Optional[str]
    access_token: str


def get_token_service() -> TokenService:
    """
    Get or create the process-wide TokenService.

    Lazy initialization so importing the app does not require a secret;
    tests override this dependency with their own TokenService.

    Raises:
        ValueError: If JWT_SECRET is not configured
    """
    global _token_service

    if _token_service is None:
        _token_service = TokenService(
            secret=settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            ttl_seconds=settings.JWT_TTL_SECONDS,
        )
        logger.info(f"Token service initialized (algorithm={settings.JWT_ALGORITHM})")

    return _token_service


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an 'Authorization: Bearer <token>' header value.

    Raises:
        NoTokenError: Header missing, empty, or not a bearer credential
    """
    if not authorization:
        raise NoTokenError()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise NoTokenError()

    return parts[1]


async def get_authenticated_user(
    token_service: Annotated[TokenService, Depends(get_token_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    """
    Verify the bearer token and return the authenticated identity.

    Returns:
        AuthenticatedUser built from the token claims

    Raises:
        NoTokenError: 401 "No token provided" when no bearer token was sent
        AuthError: 401 "Invalid token" for bad signature, expiry or garbage

    Usage:
        @router.post("/protected")
        async def protected_route(
            auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
        ):
            ...
    """
    try:
        token = extract_bearer_token(authorization)
    except NoTokenError:
        logger.warning("Missing or malformed Authorization header")
        raise

    try:
        claims = token_service.verify(token)
    except AuthError as e:
        logger.warning(f"Token rejected: {e.code}")
        # Same client message for every failure; the code tells them apart
        e.message = "Invalid token"
        raise

    logger.debug(f"Token verified for user_id={claims.sub}")
    return AuthenticatedUser(
        user_id=claims.sub,
        email=claims.email,
        access_token=token,
    )
