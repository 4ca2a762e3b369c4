"""
Registration and login service.

Register: check email uniqueness -> hash password -> insert user -> issue token
Login:    look up email -> verify password -> issue token

RULES:
1. The password digest never leaves this module (public_user() strips it)
2. Unknown email and wrong password produce the SAME InvalidCredentialsError
3. bcrypt runs in the thread pool so it does not block the event loop
"""

import logging
from typing import Any, Dict, Optional, Tuple, cast

from fastapi.concurrency import run_in_threadpool
from postgrest.exceptions import APIError
from supabase import Client

from content_api.auth.passwords import (
    DEFAULT_ROUNDS,
    dummy_digest,
    hash_password,
    verify_password,
)
from content_api.auth.tokens import TokenService
from content_api.db.client import run_query
from content_api.errors import (
    UNIQUE_VIOLATION,
    ConflictError,
    InternalError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


def public_user(user: Dict[str, Any]) -> Dict[str, str]:
    """Profile fields that are safe to return to the client."""
    return {
        "id": str(user.get("id")),
        "email": str(user.get("email", "")),
        "name": str(user.get("name", "")),
    }


async def find_user_by_email(
    supabase_client: Client,
    email: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch a user record (including the password digest) by email.

    Returns:
        The user dict, or None if no user has this email
    """
    result = await run_query(
        supabase_client.table(USERS_TABLE)
        .select("*")
        .eq("email", email)
        .limit(1)
    )

    if not result.data:
        return None

    return cast(Dict[str, Any], result.data[0])


async def register_user(
    supabase_client: Client,
    token_service: TokenService,
    name: str,
    email: str,
    password: str,
    rounds: int = DEFAULT_ROUNDS,
) -> Tuple[str, Dict[str, str]]:
    """
    Create a user account and sign them in.

    Args:
        supabase_client: Store client
        token_service: Signs the session token
        name: Display name (already validated)
        email: Login email (already validated)
        password: Plaintext password (already validated)
        rounds: bcrypt work factor

    Returns:
        Tuple of (token, public_user)

    Raises:
        ConflictError: If the email is already registered
        InternalError: If the store returns no record
    """
    email = email.lower()

    existing = await find_user_by_email(supabase_client, email)
    if existing:
        logger.warning("Registration rejected: email already in use")
        raise ConflictError("Email already in use")

    digest = await run_in_threadpool(hash_password, password, rounds)

    try:
        result = await run_query(
            supabase_client.table(USERS_TABLE)
            .insert({"name": name, "email": email, "password": digest})
        )
    except APIError as e:
        # Another request registered the same email between lookup and insert
        if e.code == UNIQUE_VIOLATION:
            logger.warning("Registration rejected: email already in use (unique violation)")
            raise ConflictError("Email already in use")
        raise

    if not result.data:
        raise InternalError("Failed to create user: no data returned")

    user = cast(Dict[str, Any], result.data[0])
    token = token_service.issue(str(user["id"]), email=user.get("email"))

    logger.info(f"User registered: id={user['id']}")
    return token, public_user(user)


async def login_user(
    supabase_client: Client,
    token_service: TokenService,
    email: str,
    password: str,
    rounds: int = DEFAULT_ROUNDS,
) -> Tuple[str, Dict[str, str]]:
    """
    Check credentials and issue a token.

    Returns:
        Tuple of (token, public_user)

    Raises:
        InvalidCredentialsError: Unknown email or wrong password (same error)
    """
    email = email.lower()

    user = await find_user_by_email(supabase_client, email)

    if user is None:
        # Spend the same bcrypt time as a real check
        await run_in_threadpool(verify_password, password, dummy_digest(rounds))
        logger.info("Login failed: invalid credentials")
        raise InvalidCredentialsError()

    matches = await run_in_threadpool(verify_password, password, str(user.get("password") or ""))
    if not matches:
        logger.info(f"Login failed: invalid credentials for user_id={user.get('id')}")
        raise InvalidCredentialsError()

    token = token_service.issue(str(user["id"]), email=user.get("email"))

    logger.info(f"User logged in: id={user['id']}")
    return token, public_user(user)
