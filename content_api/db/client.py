"""
Supabase client factory.

The application talks to a single store project with one server-side key.
Authorization is handled by the API's own JWTs (content_api.auth), not by
row-level security, so one client is shared by all requests. supabase-py's
HTTP client is safe for concurrent use. Its queries are blocking, so services
run them through run_query() to keep the event loop free.

Tables:
- users       (id, name, email UNIQUE, password, created_at)
- authors     (id, author_id UNIQUE, author_name, author_image, description, ...)
- categories  (id, category_id UNIQUE, category_name UNIQUE, ...)
- articles    (id, title, ..., category_ref -> categories.id, author_ref -> authors.id)
"""

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from supabase import Client, create_client

from content_api.config import settings

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase_client() -> Client:
    """
    Get or create the shared Supabase client.

    Returns:
        A Supabase client configured from SUPABASE_URL and SUPABASE_KEY.

    Raises:
        ValueError: If SUPABASE_URL is not configured
    """
    global _client

    if _client is None:
        if not settings.SUPABASE_URL:
            raise ValueError(
                "SUPABASE_URL is not configured. Cannot connect to the document store."
            )

        _client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY
        )
        logger.info("Supabase client created")

    return _client


async def run_query(query: Any) -> Any:
    """
    Execute a PostgREST query builder in the thread pool.

    Args:
        query: A built query (e.g. client.table("authors").select("*").eq(...))

    Returns:
        The APIResponse from query.execute()

    Raises:
        postgrest.exceptions.APIError: Propagated unchanged from the store
    """
    return await run_in_threadpool(query.execute)
