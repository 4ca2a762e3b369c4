"""
Author CRUD API endpoints.

Endpoints:
- GET /api/authors - List all authors
- GET /api/authors/{author_id} - Get one author (UUID or public code)
- POST /api/authors - Create an author (requires token)
- PUT /api/authors/{author_id} - Update an author (requires token)
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from content_api.auth.dependencies import AuthenticatedUser, get_authenticated_user
from content_api.db.client import get_supabase_client
from content_api.errors import AppError, InternalError, NotFoundError, ValidationError
from content_api.schemas.authors import (
    AuthorCreateRequest,
    AuthorListData,
    AuthorResponse,
    AuthorUpdateRequest,
)
from content_api.schemas.common import ApiResponse, ErrorResponse
from content_api.services.author_service import (
    create_author,
    get_all_authors,
    get_author_by_id,
    update_author,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/authors", tags=["authors"])


@router.get(
    "",
    response_model=ApiResponse[AuthorListData],
    status_code=status.HTTP_200_OK,
    summary="List all authors",
)
async def list_authors() -> ApiResponse[AuthorListData]:
    """List all authors."""
    try:
        supabase_client = get_supabase_client()
        authors = await get_all_authors(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch authors: {e}", exc_info=True)
        raise InternalError("Failed to retrieve authors")

    return ApiResponse[AuthorListData](
        data=AuthorListData(authors=[AuthorResponse.model_validate(a) for a in authors])
    )


@router.get(
    "/{author_id}",
    response_model=ApiResponse[AuthorResponse],
    status_code=status.HTTP_200_OK,
    summary="Get author details",
    responses={404: {"model": ErrorResponse, "description": "Author not found"}},
)
async def get_author(author_id: str) -> ApiResponse[AuthorResponse]:
    """Get a single author by UUID or public author code."""
    try:
        supabase_client = get_supabase_client()
        author = await get_author_by_id(supabase_client, author_id)
    except Exception as e:
        logger.error(f"Failed to fetch author {author_id}: {e}", exc_info=True)
        raise InternalError("Failed to retrieve author")

    if not author:
        logger.warning(f"Author {author_id} not found")
        raise NotFoundError("Author not found")

    return ApiResponse[AuthorResponse](data=AuthorResponse.model_validate(author))


@router.post(
    "",
    response_model=ApiResponse[AuthorResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an author",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
async def create_new_author(
    request: AuthorCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[AuthorResponse]:
    """Create an author."""
    logger.info(f"Creating author for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        created = await create_author(
            supabase_client=supabase_client,
            author_name=request.author_name,
            author_image=request.author_image,
            description=request.description,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create author: {e}", exc_info=True)
        raise InternalError("Failed to create author")

    return ApiResponse[AuthorResponse](
        message="Author created successfully",
        data=AuthorResponse.model_validate(created),
    )


@router.put(
    "/{author_id}",
    response_model=ApiResponse[AuthorResponse],
    status_code=status.HTTP_200_OK,
    summary="Update an author",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Author not found"},
    },
)
async def update_existing_author(
    author_id: str,
    request: AuthorUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[AuthorResponse]:
    """
    Update an author (partial update).

    Raises:
        ValidationError 400: If no fields provided
        NotFoundError 404: If the author does not exist
    """
    if request.author_name is None and request.author_image is None and request.description is None:
        raise ValidationError("At least one field must be provided for update")

    logger.info(f"Updating author {author_id} for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        updated = await update_author(
            supabase_client=supabase_client,
            author_id=author_id,
            author_name=request.author_name,
            author_image=request.author_image,
            description=request.description,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update author {author_id}: {e}", exc_info=True)
        raise InternalError("Failed to update author")

    if not updated:
        raise NotFoundError("Author not found")

    return ApiResponse[AuthorResponse](
        message="Author updated successfully",
        data=AuthorResponse.model_validate(updated),
    )
