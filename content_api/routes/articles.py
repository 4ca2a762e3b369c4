"""
Article API endpoints.

Endpoints:
- GET /api/articles - List articles with filters and pagination
- GET /api/articles/{article_id} - Get one article with author and category
- POST /api/articles - Create an article (requires token)
- PUT /api/articles/{article_id} - Update an article (requires token)

List filters (query parameters, all optional):
- categoryId: category code ('cat-...') or UUID
- tag: a single tag
- authorName: exact author name
- articleType: text, audio or video
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from content_api.auth.dependencies import AuthenticatedUser, get_authenticated_user
from content_api.db.client import get_supabase_client
from content_api.errors import AppError, InternalError, NotFoundError, ValidationError
from content_api.schemas.articles import (
    ArticleCreateRequest,
    ArticleListData,
    ArticleResponse,
    ArticleSummary,
    ArticleType,
    ArticleUpdateRequest,
)
from content_api.schemas.common import ApiResponse, ErrorResponse
from content_api.services.article_service import (
    create_article,
    format_article_summary,
    get_article_by_id,
    list_articles,
    total_pages,
    update_article,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get(
    "",
    response_model=ApiResponse[ArticleListData],
    status_code=status.HTTP_200_OK,
    summary="List articles",
    responses={404: {"model": ErrorResponse, "description": "No articles found"}},
    description="""
    List articles, newest first.

    This endpoint:
    - Combines all provided filters with AND
    - Paginates with page (1-based) and limit
    - Returns 404 when nothing matches
    """
)
async def get_articles(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(10, ge=1, le=100, description="Articles per page"),
    category_id: Optional[str] = Query(None, alias="categoryId", description="Category code or UUID"),
    tag: Optional[str] = Query(None, description="Tag to match"),
    author_name: Optional[str] = Query(None, alias="authorName", description="Exact author name"),
    article_type: Optional[ArticleType] = Query(None, alias="articleType", description="text, audio or video"),
) -> ApiResponse[ArticleListData]:
    """List articles with filters."""
    try:
        supabase_client = get_supabase_client()
        articles, total = await list_articles(
            supabase_client=supabase_client,
            page=page,
            limit=limit,
            category_id=category_id,
            tag=tag,
            author_name=author_name,
            article_type=article_type,
        )
    except Exception as e:
        logger.error(f"Failed to fetch articles: {e}", exc_info=True)
        raise InternalError("Failed to retrieve articles")

    if not articles or total == 0:
        raise NotFoundError("No articles found")

    return ApiResponse[ArticleListData](
        data=ArticleListData(
            articles=[ArticleSummary.model_validate(format_article_summary(a)) for a in articles],
            category_id=category_id,
            tag=tag,
            author_name=author_name,
            page=page,
            total_pages=total_pages(total, limit),
        )
    )


@router.get(
    "/{article_id}",
    response_model=ApiResponse[ArticleResponse],
    status_code=status.HTTP_200_OK,
    summary="Get article details",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def get_article(article_id: str) -> ApiResponse[ArticleResponse]:
    """Get a single article with its author and category."""
    try:
        supabase_client = get_supabase_client()
        article = await get_article_by_id(supabase_client, article_id)
    except Exception as e:
        logger.error(f"Failed to fetch article {article_id}: {e}", exc_info=True)
        raise InternalError("Failed to retrieve article")

    if not article:
        raise NotFoundError("Article not found")

    return ApiResponse[ArticleResponse](data=ArticleResponse.model_validate(article))


@router.post(
    "",
    response_model=ApiResponse[ArticleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an article",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Category or author not found"},
    },
)
async def create_new_article(
    request: ArticleCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[ArticleResponse]:
    """Create an article."""
    logger.info(f"Creating article for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        created = await create_article(
            supabase_client=supabase_client,
            title=request.title,
            article_image=request.article_image,
            description=request.description,
            category_ref=str(request.category),
            author_ref=str(request.author),
            subtitle=request.subtitle,
            article_type=request.article_type,
            media_url=request.media_url,
            tags=request.tags,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create article: {e}", exc_info=True)
        raise InternalError("Error saving article")

    return ApiResponse[ArticleResponse](
        message="Article created successfully",
        data=ArticleResponse.model_validate(created),
    )


@router.put(
    "/{article_id}",
    response_model=ApiResponse[ArticleResponse],
    status_code=status.HTTP_200_OK,
    summary="Update an article",
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Article, category or author not found"},
    },
)
async def update_existing_article(
    article_id: str,
    request: ArticleUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ApiResponse[ArticleResponse]:
    """Update an article (partial update)."""
    updates = {
        "title": request.title,
        "subtitle": request.subtitle,
        "article_image": request.article_image,
        "article_type": request.article_type,
        "description": request.description,
        "media_url": request.media_url,
        "category_ref": str(request.category) if request.category else None,
        "author_ref": str(request.author) if request.author else None,
        "tags": request.tags,
    }
    if all(value is None for value in updates.values()):
        raise ValidationError("At least one field must be provided for update")

    logger.info(f"Updating article {article_id} for user {auth_user.user_id}")

    try:
        supabase_client = get_supabase_client()
        updated = await update_article(supabase_client, article_id, updates)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update article {article_id}: {e}", exc_info=True)
        raise InternalError("Failed to update article")

    if not updated:
        raise NotFoundError("Article not found")

    return ApiResponse[ArticleResponse](
        message="Article updated successfully",
        data=ArticleResponse.model_validate(updated),
    )
