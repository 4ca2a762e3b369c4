"""
Auth API endpoints.

Provides endpoints for authentication-related operations:
- POST /api/auth/register - Create an account and receive a token
- POST /api/auth/login - Exchange email/password for a token
- GET /api/auth/me - Identity decoded from the bearer token

Register and login bodies are validated before the handler runs; the first
failing rule is returned as a 400 with a single message.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from content_api.auth.dependencies import (
    AuthenticatedUser,
    get_authenticated_user,
    get_token_service,
)
from content_api.auth.tokens import TokenService
from content_api.config import settings
from content_api.db.client import get_supabase_client
from content_api.errors import AppError, InternalError
from content_api.schemas.auth import (
    AuthData,
    AuthMeData,
    LoginRequest,
    PublicUser,
    RegisterRequest,
)
from content_api.schemas.common import ApiResponse, ErrorResponse
from content_api.services.auth_service import login_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed or email already in use"},
    },
    description="""
    Create a user account and sign the user in.

    This endpoint:
    - Validates name, email, password and confirmPassword
    - Rejects emails that are already registered
    - Stores only the bcrypt digest of the password
    - Returns a bearer token valid for one hour and the public profile
    """
)
async def register(
    request: RegisterRequest,
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> ApiResponse[AuthData]:
    """Register a user and return a token."""
    try:
        supabase_client = get_supabase_client()
        token, user = await register_user(
            supabase_client=supabase_client,
            token_service=token_service,
            name=request.name,
            email=request.email,
            password=request.password,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        raise InternalError("Registration failed")

    return ApiResponse[AuthData](
        message="Registration successful",
        data=AuthData(token=token, user=PublicUser(**user)),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_200_OK,
    summary="Log in",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    description="""
    Authenticate with email and password.

    Unknown emails and wrong passwords get the same 401 response.
    """
)
async def login(
    request: LoginRequest,
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> ApiResponse[AuthData]:
    """Authenticate a user and return a token."""
    try:
        supabase_client = get_supabase_client()
        token, user = await login_user(
            supabase_client=supabase_client,
            token_service=token_service,
            email=request.email,
            password=request.password,
            rounds=settings.BCRYPT_ROUNDS,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        raise InternalError("Login failed")

    return ApiResponse[AuthData](
        message="Login successful",
        data=AuthData(token=token, user=PublicUser(**user)),
    )


@router.get(
    "/me",
    response_model=ApiResponse[AuthMeData],
    status_code=status.HTTP_200_OK,
    summary="Get authenticated user identity",
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def get_auth_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[AuthMeData]:
    """Return the identity carried by the bearer token."""
    return ApiResponse[AuthMeData](
        message="Authenticated successfully",
        data=AuthMeData(user_id=auth_user.user_id, email=auth_user.email),
    )
