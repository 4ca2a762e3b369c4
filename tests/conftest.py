"""
Pytest configuration for Content API tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-service-key")
os.environ["JWT_SECRET"] = "test-jwt-secret-0123456789abcdef-0123456789"
# Lowest bcrypt cost keeps the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")

TEST_JWT_SECRET = os.environ["JWT_SECRET"]


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for testing services.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def token_service():
    """TokenService signed with the test secret."""
    from content_api.auth.tokens import TokenService

    return TokenService(secret=TEST_JWT_SECRET)
