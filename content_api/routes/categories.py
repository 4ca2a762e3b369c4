"""
Category CRUD API endpoints.

Endpoints:
- GET /api/categories - List all categories
- GET /api/categories/{category_id} - Get one category ('cat-' code or UUID)
- POST /api/categories - Create a category (requires token)
- PUT /api/categories/{category_id} - Rename a category (requires token)

An id that is neither a 'cat-' code nor a UUID is reported as not found,
same as an id that matches nothing.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from content_api.auth.dependencies import AuthenticatedUser, get_authenticated_user
from content_api.db.client import get_supabase_client
from content_api.errors import AppError, InternalError, NotFoundError
from content_api.schemas.categories import (
    CategoryCreateRequest,
    CategoryListData,
    CategoryResponse,
    CategoryUpdateRequest,
)
from content_api.schemas.common import ApiResponse, ErrorResponse
from content_api.services.category_service import (
    create_category,
    get_all_categories,
    get_category_by_id,
    update_category,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get(
    "",
    response_model=ApiResponse[CategoryListData],
    status_code=status.HTTP_200_OK,
    summary="List all categories",
)
async def list_categories() -> ApiResponse[CategoryListData]:
    """List all categories."""
    try:
        supabase_client = get_supabase_client()
        categories = await get_all_categories(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch categories: {e}", exc_info=True)
        raise InternalError("Failed to retrieve categories")

    return ApiResponse[CategoryListData](
        data=CategoryListData(
            categories=[CategoryResponse.model_validate(c) for c in categories]
        )
    )


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="Get category details",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
async def get_category(category_id: str) -> ApiResponse[CategoryResponse]:
    """Get a single category by 'cat-' code or UUID."""
    try:
        supabase_client = get_supabase_client()
        category = await get_category_by_id(supabase_client, category_id)
    except Exception as e:
        logger.error(f"Failed to fetch category {category_id}: {e}", exc_info=True)
        raise InternalError("Failed to retrieve category")

    if not category:
        logger.warning(f"Category {category_id} not found")
        raise NotFoundError("Category not found")

    return ApiResponse[CategoryResponse](data=CategoryResponse.model_validate(category))


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed or name already in use"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    },
)
async def create_new_category(
    request: CategoryCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[CategoryResponse]:
    """Create a category."""
    logger.info(f"Creating category for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        created = await create_category(supabase_client, request.category_name)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create category: {e}", exc_info=True)
        raise InternalError("Failed to create category")

    return ApiResponse[CategoryResponse](
        message="Category created successfully",
        data=CategoryResponse.model_validate(created),
    )


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_200_OK,
    summary="Rename a category",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed or name already in use"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def update_existing_category(
    category_id: str,
    request: CategoryUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[CategoryResponse]:
    """Rename a category."""
    logger.info(f"Updating category {category_id} for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        updated = await update_category(supabase_client, category_id, request.category_name)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update category {category_id}: {e}", exc_info=True)
        raise InternalError("Failed to update category")

    if not updated:
        raise NotFoundError("Category not found")

    return ApiResponse[CategoryResponse](
        message="Category updated successfully",
        data=CategoryResponse.model_validate(updated),
    )
