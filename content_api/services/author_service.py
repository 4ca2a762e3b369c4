"""
Author persistence service.

Authors are looked up either by UUID primary key or by their short public
code (author_id). Whichever the caller passes, the right column is chosen.
"""

import logging
from typing import Any, Dict, List, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from content_api.db.client import run_query
from content_api.errors import UNIQUE_VIOLATION, ConflictError, InternalError
from content_api.utils.ids import is_valid_uuid, new_author_code

logger = logging.getLogger(__name__)

AUTHORS_TABLE = "authors"


def _lookup_column(author_id: str) -> str:
    return "id" if is_valid_uuid(author_id) else "author_id"


async def get_all_authors(supabase_client: Client) -> List[Dict[str, Any]]:
    """
    Fetch all authors ordered by name.

    Returns:
        List of author records
    """
    result = await run_query(
        supabase_client.table(AUTHORS_TABLE)
        .select("*")
        .order("author_name")
    )

    authors = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(authors)} authors")

    return authors


async def get_author_by_id(
    supabase_client: Client,
    author_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single author.

    Args:
        supabase_client: Store client
        author_id: Author UUID or public author code

    Returns:
        The author record, or None if not found
    """
    column = _lookup_column(author_id)
    logger.debug(f"Fetching author by {column}={author_id}")

    result = await run_query(
        supabase_client.table(AUTHORS_TABLE)
        .select("*")
        .eq(column, author_id)
        .limit(1)
    )

    if not result.data:
        return None

    return cast(Dict[str, Any], result.data[0])


async def create_author(
    supabase_client: Client,
    author_name: str,
    author_image: str = "",
    description: str = "",
) -> Dict[str, Any]:
    """
    Create an author with a freshly generated public code.

    Raises:
        ConflictError: If the generated code collides with an existing one
        InternalError: If the store returns no record
    """
    author_data = {
        "author_id": new_author_code(),
        "author_name": author_name,
        "author_image": author_image,
        "description": description,
    }

    logger.info(f"Creating author {author_data['author_id']}")

    try:
        result = await run_query(supabase_client.table(AUTHORS_TABLE).insert(author_data))
    except APIError as e:
        if e.code == UNIQUE_VIOLATION:
            raise ConflictError("Author already exists")
        raise

    if not result.data:
        raise InternalError("Failed to create author: no data returned")

    return cast(Dict[str, Any], result.data[0])


async def update_author(
    supabase_client: Client,
    author_id: str,
    author_name: Optional[str] = None,
    author_image: Optional[str] = None,
    description: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Update an author (partial update).

    Args:
        supabase_client: Store client
        author_id: Author UUID or public author code
        author_name: New display name (optional)
        author_image: New avatar URL (optional)
        description: New biography (optional)

    Returns:
        Updated author record, or None if not found
    """
    update_data: Dict[str, Any] = {}
    if author_name is not None:
        update_data["author_name"] = author_name
    if author_image is not None:
        update_data["author_image"] = author_image
    if description is not None:
        update_data["description"] = description

    if not update_data:
        return await get_author_by_id(supabase_client, author_id)

    column = _lookup_column(author_id)
    logger.info(f"Updating author {column}={author_id}: fields={sorted(update_data)}")

    result = await run_query(
        supabase_client.table(AUTHORS_TABLE)
        .update(update_data)
        .eq(column, author_id)
    )

    if not result.data:
        logger.warning(f"Update of author {author_id} returned no rows")
        return None

    return cast(Dict[str, Any], result.data[0])
