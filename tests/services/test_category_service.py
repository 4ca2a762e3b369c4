"""
Tests for the category and author services.

Tests cover:
- Lookup column selection for 'cat-' codes, UUIDs and anything else
- Generated public codes on create
- Unique-name conflicts on create and rename
"""

import asyncio
import re
import time

import pytest
from unittest.mock import MagicMock
from postgrest.exceptions import APIError

from content_api.errors import ConflictError
from content_api.services.author_service import create_author, get_author_by_id, update_author
from content_api.services.category_service import (
    create_category,
    get_category_by_id,
    resolve_lookup_column,
    update_category,
)

CATEGORY_UUID = "7a1d3b52-9c4e-4e6a-8f0b-1c2d3e4f5a6b"
AUTHOR_UUID = "0d6f2a4c-3c1b-4f8e-a5b7-2f6c9e1d4a10"


class TestResolveLookupColumn:
    """Tests for resolve_lookup_column."""

    @pytest.mark.parametrize(
        "category_id,expected",
        [
            ("cat-1767261600000-42", "category_id"),
            (CATEGORY_UUID, "id"),
            ("food", None),
            ("", None),
        ],
    )
    def test_column(self, category_id, expected):
        assert resolve_lookup_column(category_id) == expected


class TestGetCategory:
    """Tests for get_category_by_id."""

    @pytest.mark.asyncio
    async def test_lookup_by_code(self, supabase_client):
        row = {"id": CATEGORY_UUID, "category_id": "cat-1-1", "category_name": "Food"}
        supabase_client.table().select().eq().limit().execute.return_value = MagicMock(data=[row])

        result = await get_category_by_id(supabase_client, "cat-1-1")

        assert result == row
        supabase_client.table().select().eq.assert_called_with("category_id", "cat-1-1")

    @pytest.mark.asyncio
    async def test_invalid_id_does_not_query(self, supabase_client):
        result = await get_category_by_id(supabase_client, "food")

        assert result is None
        supabase_client.table.assert_not_called()


class TestCreateCategory:
    """Tests for create_category."""

    @pytest.mark.asyncio
    async def test_create_generates_code(self, supabase_client):
        supabase_client.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[{"id": CATEGORY_UUID, "category_id": "cat-1-1", "category_name": "Food"}]
        )

        await create_category(supabase_client, "Food")

        inserted = supabase_client.table.return_value.insert.call_args[0][0]
        assert inserted["category_name"] == "Food"
        assert re.fullmatch(r"cat-\d+-\d{1,3}", inserted["category_id"])

    @pytest.mark.asyncio
    async def test_create_duplicate_name(self, supabase_client):
        supabase_client.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value violates unique constraint"}
        )

        with pytest.raises(ConflictError) as exc_info:
            await create_category(supabase_client, "Food")

        assert exc_info.value.message == "Category name already in use"


class TestUpdateCategory:
    """Tests for update_category."""

    @pytest.mark.asyncio
    async def test_rename_duplicate(self, supabase_client):
        (
            supabase_client.table.return_value
            .update.return_value
            .eq.return_value
            .execute.side_effect
        ) = APIError({"code": "23505", "message": "duplicate key"})

        with pytest.raises(ConflictError):
            await update_category(supabase_client, CATEGORY_UUID, "Food")

    @pytest.mark.asyncio
    async def test_rename_invalid_id(self, supabase_client):
        assert await update_category(supabase_client, "food", "Food") is None
        supabase_client.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_rename_missing(self, supabase_client):
        (
            supabase_client.table.return_value
            .update.return_value
            .eq.return_value
            .execute.return_value
        ) = MagicMock(data=[])

        assert await update_category(supabase_client, "cat-0-0", "Food") is None


class TestAuthorService:
    """Tests for author lookups and writes."""

    @pytest.mark.asyncio
    async def test_lookup_by_uuid_uses_primary_key(self, supabase_client):
        supabase_client.table().select().eq().limit().execute.return_value = MagicMock(data=[])

        await get_author_by_id(supabase_client, AUTHOR_UUID)

        supabase_client.table().select().eq.assert_called_with("id", AUTHOR_UUID)

    @pytest.mark.asyncio
    async def test_lookup_by_code_uses_author_id(self, supabase_client):
        supabase_client.table().select().eq().limit().execute.return_value = MagicMock(data=[])

        await get_author_by_id(supabase_client, "k3j9x0ab")

        supabase_client.table().select().eq.assert_called_with("author_id", "k3j9x0ab")

    @pytest.mark.asyncio
    async def test_create_generates_base36_code(self, supabase_client):
        supabase_client.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[{"id": AUTHOR_UUID, "author_id": "k3j9x0ab", "author_name": "Jane"}]
        )

        await create_author(supabase_client, "Jane")

        inserted = supabase_client.table.return_value.insert.call_args[0][0]
        assert re.fullmatch(r"[0-9a-z]{8}", inserted["author_id"])
        assert inserted["author_name"] == "Jane"

    @pytest.mark.asyncio
    async def test_update_only_sends_provided_fields(self, supabase_client):
        (
            supabase_client.table.return_value
            .update.return_value
            .eq.return_value
            .execute.return_value
        ) = MagicMock(data=[{"id": AUTHOR_UUID, "description": "New bio"}])

        result = await update_author(supabase_client, AUTHOR_UUID, description="New bio")

        assert result["description"] == "New bio"
        supabase_client.table.return_value.update.assert_called_once_with({"description": "New bio"})


class TestStoreCallsDoNotBlock:
    """Store queries run off the event loop, so concurrent requests overlap."""

    @pytest.mark.asyncio
    async def test_concurrent_lookups_overlap(self, supabase_client):
        def slow_execute():
            time.sleep(0.5)
            return MagicMock(data=[])

        supabase_client.table().select().eq().limit().execute.side_effect = slow_execute

        started = time.perf_counter()
        await asyncio.gather(
            get_author_by_id(supabase_client, AUTHOR_UUID),
            get_author_by_id(supabase_client, "k3j9x0ab"),
        )
        elapsed = time.perf_counter() - started

        assert elapsed < 0.9
