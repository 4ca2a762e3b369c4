"""
Article persistence service.

Articles reference a category (category_ref) and an author (author_ref) by
UUID. Reads embed both records through PostgREST resource embedding.

Listing:
- Filters (all optional, combined with AND): category (code or UUID), tag,
  exact author name, article type
- Sorted by publish_date, newest first
- Paginated with page/limit: skip = (page - 1) * limit
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple, cast

from supabase import Client

from content_api.db.client import run_query
from content_api.errors import InternalError, NotFoundError
from content_api.schemas.articles import ARTICLE_TYPE_CODES
from content_api.services.author_service import get_author_by_id
from content_api.services.category_service import get_category_by_id
from content_api.utils.ids import is_valid_uuid

logger = logging.getLogger(__name__)

ARTICLES_TABLE = "articles"

ARTICLE_SELECT = "*, author:authors(*), category:categories(id, category_id, category_name)"

SUMMARY_SELECT = (
    "id, title, article_image, article_type, tags, publish_date, category_ref, author_ref, "
    "author:authors(id, author_id), category:categories(id, category_id)"
)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show `total` items, `limit` per page."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


def format_article_summary(article: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert an article row (with embedded author/category) into the list format.

    articleType is numeric: 1 = text, 2 = audio, anything else 3 (video).
    """
    category = article.get("category") or {}
    author = article.get("author") or {}

    return {
        "title": article.get("title", ""),
        "hero": article.get("article_image", ""),
        "category_id": category.get("category_id"),
        "category_object_id": category.get("id"),
        "author_id": author.get("author_id"),
        "author_object_id": author.get("id"),
        "article_object_id": str(article.get("id")),
        "article_type": ARTICLE_TYPE_CODES.get(article.get("article_type", ""), 3),
        "tags": article.get("tags") or [],
    }


async def list_articles(
    supabase_client: Client,
    page: int = 1,
    limit: int = 10,
    category_id: Optional[str] = None,
    tag: Optional[str] = None,
    author_name: Optional[str] = None,
    article_type: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Fetch one page of articles matching the filters.

    Args:
        supabase_client: Store client
        page: 1-based page number
        limit: Page size
        category_id: Category code ('cat-...') or UUID
        tag: Articles whose tags contain this value
        author_name: Exact author name
        article_type: 'text', 'audio' or 'video'

    Returns:
        Tuple of (articles on this page, total matching articles)
    """
    logger.debug(
        f"Listing articles (page={page}, limit={limit}, category={category_id}, "
        f"tag={tag}, author_name={author_name}, type={article_type})"
    )

    query = supabase_client.table(ARTICLES_TABLE).select(SUMMARY_SELECT, count="exact")

    if category_id:
        category = await get_category_by_id(supabase_client, category_id)
        if not category:
            return [], 0
        query = query.eq("category_ref", category["id"])

    if tag:
        query = query.contains("tags", [tag])

    if author_name:
        authors = await run_query(
            supabase_client.table("authors")
            .select("id")
            .eq("author_name", author_name)
        )
        author_ids = [row["id"] for row in (authors.data or [])]
        if not author_ids:
            return [], 0
        query = query.in_("author_ref", author_ids)

    if article_type:
        query = query.eq("article_type", article_type)

    skip = (page - 1) * limit
    result = await run_query(
        query.order("publish_date", desc=True)
        .range(skip, skip + limit - 1)
    )

    articles = cast(List[Dict[str, Any]], result.data or [])
    total = result.count if result.count is not None else len(articles)

    logger.info(f"Fetched {len(articles)} of {total} articles (page={page})")
    return articles, total


async def get_article_by_id(
    supabase_client: Client,
    article_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch one article with its author and category embedded.

    Returns:
        The article record, or None if not found or the id is not a UUID
    """
    if not is_valid_uuid(article_id):
        return None

    result = await run_query(
        supabase_client.table(ARTICLES_TABLE)
        .select(ARTICLE_SELECT)
        .eq("id", article_id)
        .limit(1)
    )

    if not result.data:
        return None

    return cast(Dict[str, Any], result.data[0])


async def _ensure_references(
    supabase_client: Client,
    category_ref: Optional[str],
    author_ref: Optional[str],
) -> None:
    if category_ref is not None and not await get_category_by_id(supabase_client, category_ref):
        raise NotFoundError("Category not found")
    if author_ref is not None and not await get_author_by_id(supabase_client, author_ref):
        raise NotFoundError("Author not found")


async def create_article(
    supabase_client: Client,
    title: str,
    article_image: str,
    description: str,
    category_ref: str,
    author_ref: str,
    subtitle: Optional[str] = None,
    article_type: str = "text",
    media_url: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Create an article after checking its category and author exist.

    Returns:
        The created article with author and category embedded

    Raises:
        NotFoundError: If the category or author does not exist
        InternalError: If the store returns no record
    """
    await _ensure_references(supabase_client, category_ref, author_ref)

    article_data: Dict[str, Any] = {
        "title": title,
        "subtitle": subtitle,
        "article_image": article_image,
        "article_type": article_type,
        "description": description,
        "media_url": media_url,
        "category_ref": category_ref,
        "author_ref": author_ref,
        "tags": tags or [],
    }

    logger.info(f"Creating article: category={category_ref}, author={author_ref}, type={article_type}")

    result = await run_query(supabase_client.table(ARTICLES_TABLE).insert(article_data))

    if not result.data:
        raise InternalError("Failed to create article: no data returned")

    created = cast(Dict[str, Any], result.data[0])
    return await get_article_by_id(supabase_client, str(created["id"])) or created


async def update_article(
    supabase_client: Client,
    article_id: str,
    updates: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Update an article (partial update).

    Args:
        supabase_client: Store client
        article_id: Article UUID
        updates: Column -> new value; None values are ignored

    Returns:
        Updated article with author and category embedded, or None if not found

    Raises:
        NotFoundError: If a new category or author reference does not exist
    """
    if not is_valid_uuid(article_id):
        return None

    update_data = {key: value for key, value in updates.items() if value is not None}

    if not update_data:
        return await get_article_by_id(supabase_client, article_id)

    await _ensure_references(
        supabase_client,
        update_data.get("category_ref"),
        update_data.get("author_ref"),
    )

    logger.info(f"Updating article {article_id}: fields={sorted(update_data)}")

    result = await run_query(
        supabase_client.table(ARTICLES_TABLE)
        .update(update_data)
        .eq("id", article_id)
    )

    if not result.data:
        logger.warning(f"Update of article {article_id} returned no rows")
        return None

    return await get_article_by_id(supabase_client, article_id) or cast(Dict[str, Any], result.data[0])
