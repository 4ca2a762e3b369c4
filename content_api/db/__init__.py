"""
Database access layer for the Content Publishing API.

Includes:
- Supabase client initialization (one shared client per process)

Services in content_api.services receive the client as an argument and never
create it themselves.
"""

from .client import get_supabase_client, run_query

__all__ = ["get_supabase_client", "run_query"]
