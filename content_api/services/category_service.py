"""
Category persistence service.

RULES:
1. Category names are unique (store constraint); a duplicate name is a conflict
2. Ids starting with 'cat-' are public category codes (category_id column)
3. Any other id must be a UUID (id column); anything else is simply not found
"""

import logging
from typing import Any, Dict, List, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from content_api.db.client import run_query
from content_api.errors import UNIQUE_VIOLATION, ConflictError, InternalError
from content_api.utils.ids import CATEGORY_CODE_PREFIX, is_valid_uuid, new_category_code

logger = logging.getLogger(__name__)

CATEGORIES_TABLE = "categories"
CATEGORY_COLUMNS = "id, category_id, category_name"


def resolve_lookup_column(category_id: str) -> Optional[str]:
    """
    Pick the column a category id refers to.

    Returns:
        'category_id' for 'cat-' codes, 'id' for UUIDs, None otherwise
    """
    if category_id.startswith(CATEGORY_CODE_PREFIX):
        return "category_id"
    if is_valid_uuid(category_id):
        return "id"
    return None


async def get_all_categories(supabase_client: Client) -> List[Dict[str, Any]]:
    """Fetch all categories ordered by name."""
    result = await run_query(
        supabase_client.table(CATEGORIES_TABLE)
        .select(CATEGORY_COLUMNS)
        .order("category_name")
    )

    categories = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(categories)} categories")

    return categories


async def get_category_by_id(
    supabase_client: Client,
    category_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single category by UUID or 'cat-' code.

    Returns:
        The category record, or None if not found or the id is not valid
    """
    column = resolve_lookup_column(category_id)
    if column is None:
        logger.debug(f"Category id {category_id!r} is neither a code nor a UUID")
        return None

    result = await run_query(
        supabase_client.table(CATEGORIES_TABLE)
        .select(CATEGORY_COLUMNS)
        .eq(column, category_id)
        .limit(1)
    )

    if not result.data:
        return None

    return cast(Dict[str, Any], result.data[0])


async def create_category(
    supabase_client: Client,
    category_name: str
) -> Dict[str, Any]:
    """
    Create a category with a generated public code.

    Raises:
        ConflictError: If the name (or generated code) is already taken
        InternalError: If the store returns no record
    """
    category_data = {
        "category_id": new_category_code(),
        "category_name": category_name,
    }

    logger.info(f"Creating category {category_data['category_id']}")

    try:
        result = await run_query(supabase_client.table(CATEGORIES_TABLE).insert(category_data))
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            logger.warning("Category create rejected: name already in use")
            raise ConflictError("Category name already in use")
        raise

    if not result.data:
        raise InternalError("Failed to create category: no data returned")

    return cast(Dict[str, Any], result.data[0])


async def update_category(
    supabase_client: Client,
    category_id: str,
    category_name: str
) -> Optional[Dict[str, Any]]:
    """
    Rename a category.

    Returns:
        Updated category record, or None if not found

    Raises:
        ConflictError: If another category already has this name
    """
    column = resolve_lookup_column(category_id)
    if column is None:
        return None

    logger.info(f"Updating category {column}={category_id}")

    try:
        result = await run_query(
            supabase_client.table(CATEGORIES_TABLE)
            .update({"category_name": category_name})
            .eq(column, category_id)
        )
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            logger.warning(f"Category {category_id} rename rejected: name already in use")
            raise ConflictError("Category name already in use")
        raise

    if not result.data:
        logger.warning(f"Update of category {category_id} returned no rows")
        return None

    return cast(Dict[str, Any], result.data[0])
