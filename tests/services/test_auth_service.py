"""
Tests for the registration and login service.

Tests cover:
- register_user stores a bcrypt digest and returns a token plus public profile
- Duplicate emails are rejected before and during insert
- login_user gives the same error for unknown email and wrong password
"""

import pytest
from unittest.mock import MagicMock
from postgrest.exceptions import APIError

from content_api.auth.passwords import hash_password, verify_password
from content_api.errors import ConflictError, InvalidCredentialsError
from content_api.services.auth_service import login_user, public_user, register_user

ROUNDS = 4
USER_ID = "5b0c1f8e-8a0e-4a8e-9d59-0f3f7f0c2a11"


def _set_lookup(supabase_client, rows):
    (
        supabase_client.table.return_value
        .select.return_value
        .eq.return_value
        .limit.return_value
        .execute.return_value
    ) = MagicMock(data=rows)


@pytest.fixture
def stored_user():
    return {
        "id": USER_ID,
        "name": "Alice",
        "email": "a@x.com",
        "password": hash_password("abcdef", rounds=ROUNDS),
    }


class TestPublicUser:
    """Tests for public_user."""

    def test_strips_digest(self, stored_user):
        assert public_user(stored_user) == {"id": USER_ID, "email": "a@x.com", "name": "Alice"}


class TestRegisterUser:
    """Tests for register_user."""

    @pytest.mark.asyncio
    async def test_register_success(self, supabase_client, token_service, stored_user):
        _set_lookup(supabase_client, [])
        supabase_client.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[stored_user]
        )

        token, user = await register_user(
            supabase_client=supabase_client,
            token_service=token_service,
            name="Alice",
            email="A@X.com",
            password="abcdef",
            rounds=ROUNDS,
        )

        assert token_service.verify(token).sub == USER_ID
        assert user == {"id": USER_ID, "email": "a@x.com", "name": "Alice"}

        supabase_client.table.assert_any_call("users")
        inserted = supabase_client.table.return_value.insert.call_args[0][0]
        assert inserted["email"] == "a@x.com"
        assert inserted["name"] == "Alice"
        assert verify_password("abcdef", inserted["password"])

    @pytest.mark.asyncio
    async def test_register_existing_email(self, supabase_client, token_service, stored_user):
        _set_lookup(supabase_client, [stored_user])

        with pytest.raises(ConflictError) as exc_info:
            await register_user(
                supabase_client=supabase_client,
                token_service=token_service,
                name="Alice",
                email="a@x.com",
                password="abcdef",
                rounds=ROUNDS,
            )

        assert exc_info.value.message == "Email already in use"
        supabase_client.table.return_value.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_concurrent_duplicate(self, supabase_client, token_service):
        _set_lookup(supabase_client, [])
        supabase_client.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "23505", "message": "duplicate key value violates unique constraint"}
        )

        with pytest.raises(ConflictError):
            await register_user(
                supabase_client=supabase_client,
                token_service=token_service,
                name="Alice",
                email="a@x.com",
                password="abcdef",
                rounds=ROUNDS,
            )

    @pytest.mark.asyncio
    async def test_register_other_store_error_propagates(self, supabase_client, token_service):
        _set_lookup(supabase_client, [])
        supabase_client.table.return_value.insert.return_value.execute.side_effect = APIError(
            {"code": "42P01", "message": "relation does not exist"}
        )

        with pytest.raises(APIError):
            await register_user(
                supabase_client=supabase_client,
                token_service=token_service,
                name="Alice",
                email="a@x.com",
                password="abcdef",
                rounds=ROUNDS,
            )


class TestLoginUser:
    """Tests for login_user."""

    @pytest.mark.asyncio
    async def test_login_success(self, supabase_client, token_service, stored_user):
        _set_lookup(supabase_client, [stored_user])

        token, user = await login_user(
            supabase_client=supabase_client,
            token_service=token_service,
            email="a@x.com",
            password="abcdef",
            rounds=ROUNDS,
        )

        claims = token_service.verify(token)
        assert claims.sub == USER_ID
        assert claims.email == "a@x.com"
        assert "password" not in user

    @pytest.mark.asyncio
    async def test_login_email_is_case_insensitive(self, supabase_client, token_service, stored_user):
        _set_lookup(supabase_client, [stored_user])

        await login_user(
            supabase_client=supabase_client,
            token_service=token_service,
            email="A@X.COM",
            password="abcdef",
            rounds=ROUNDS,
        )

        eq_call = supabase_client.table.return_value.select.return_value.eq.call_args
        assert eq_call[0] == ("email", "a@x.com")

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, supabase_client, token_service, stored_user):
        _set_lookup(supabase_client, [stored_user])

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await login_user(
                supabase_client=supabase_client,
                token_service=token_service,
                email="a@x.com",
                password="wrongpw",
                rounds=ROUNDS,
            )

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, supabase_client, token_service):
        _set_lookup(supabase_client, [])

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await login_user(
                supabase_client=supabase_client,
                token_service=token_service,
                email="nobody@x.com",
                password="abcdef",
                rounds=ROUNDS,
            )

        assert exc_info.value.message == "Invalid credentials"
