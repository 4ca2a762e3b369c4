"""
Tests for author CRUD endpoints.

Tests cover:
- Listing and fetching authors (public)
- Creating and updating authors (token required)
- Validation and not-found cases
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch
from content_api.main import app
from content_api.auth.dependencies import get_authenticated_user, AuthenticatedUser

client = TestClient(app)

AUTHOR_UUID = "0d6f2a4c-3c1b-4f8e-a5b7-2f6c9e1d4a10"


async def mock_get_authenticated_user_dependency():
    """Mock dependency that returns test AuthenticatedUser."""
    return AuthenticatedUser(
        user_id="test-user-id",
        email="editor@x.com",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_auth():
    """Override get_authenticated_user dependency."""
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_get_supabase_client():
    """Mock get_supabase_client to return a fake client."""
    with patch("content_api.routes.authors.get_supabase_client") as mock:
        mock.return_value = MagicMock()
        yield mock


@pytest.fixture
def mock_author():
    """Mock author data."""
    return {
        "id": AUTHOR_UUID,
        "author_id": "k3j9x0ab",
        "author_name": "Jane Doe",
        "author_image": "https://cdn.example.com/jane.png",
        "description": "Writes about food",
        "created_at": "2026-01-01T10:00:00Z",
        "updated_at": "2026-01-01T10:00:00Z"
    }


class TestListAuthors:
    """Tests for GET /api/authors"""

    @patch("content_api.routes.authors.get_all_authors")
    def test_list_authors(self, mock_get_all, mock_get_supabase_client, mock_author):
        mock_get_all.return_value = [mock_author]

        response = client.get("/api/authors")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == 1
        assert data["data"]["authors"][0]["authorId"] == "k3j9x0ab"
        assert data["data"]["authors"][0]["authorName"] == "Jane Doe"

    @patch("content_api.routes.authors.get_all_authors")
    def test_list_authors_empty(self, mock_get_all, mock_get_supabase_client):
        mock_get_all.return_value = []

        response = client.get("/api/authors")

        assert response.status_code == 200
        assert response.json()["data"]["authors"] == []


class TestGetAuthor:
    """Tests for GET /api/authors/{author_id}"""

    @patch("content_api.routes.authors.get_author_by_id")
    def test_get_author_by_code(self, mock_get, mock_get_supabase_client, mock_author):
        mock_get.return_value = mock_author

        response = client.get("/api/authors/k3j9x0ab")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == AUTHOR_UUID
        assert mock_get.call_args[0][1] == "k3j9x0ab"

    @patch("content_api.routes.authors.get_author_by_id")
    def test_get_author_not_found(self, mock_get, mock_get_supabase_client):
        mock_get.return_value = None

        response = client.get("/api/authors/missing1")

        assert response.status_code == 404
        assert response.json() == {
            "status": 0,
            "message": "Author not found",
            "error": "not_found",
        }


class TestCreateAuthor:
    """Tests for POST /api/authors"""

    @patch("content_api.routes.authors.create_author")
    def test_create_author_success(self, mock_create, mock_auth, mock_get_supabase_client, mock_author):
        mock_create.return_value = mock_author

        response = client.post(
            "/api/authors",
            json={"authorName": "  Jane Doe  ", "description": "Writes about food"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Author created successfully"
        assert data["data"]["authorId"] == "k3j9x0ab"
        assert mock_create.call_args.kwargs["author_name"] == "Jane Doe"

    @patch("content_api.routes.authors.create_author")
    def test_create_author_requires_token(self, mock_create):
        response = client.post("/api/authors", json={"authorName": "Jane Doe"})

        assert response.status_code == 401
        assert response.json()["message"] == "No token provided"
        mock_create.assert_not_called()

    @patch("content_api.routes.authors.create_author")
    def test_create_author_missing_name(self, mock_create, mock_auth, mock_get_supabase_client):
        response = client.post("/api/authors", json={"description": "No name"})

        assert response.status_code == 400
        assert response.json()["message"] == '"authorName" is required'
        mock_create.assert_not_called()


class TestUpdateAuthor:
    """Tests for PUT /api/authors/{author_id}"""

    @patch("content_api.routes.authors.update_author")
    def test_update_author_success(self, mock_update, mock_auth, mock_get_supabase_client, mock_author):
        mock_update.return_value = {**mock_author, "author_name": "Jane Smith"}

        response = client.put(f"/api/authors/{AUTHOR_UUID}", json={"authorName": "Jane Smith"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Author updated successfully"
        assert data["data"]["authorName"] == "Jane Smith"

    @patch("content_api.routes.authors.update_author")
    def test_update_author_no_fields(self, mock_update, mock_auth, mock_get_supabase_client):
        response = client.put(f"/api/authors/{AUTHOR_UUID}", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "At least one field must be provided for update"
        mock_update.assert_not_called()

    @patch("content_api.routes.authors.update_author")
    def test_update_author_not_found(self, mock_update, mock_auth, mock_get_supabase_client):
        mock_update.return_value = None

        response = client.put("/api/authors/missing1", json={"description": "x"})

        assert response.status_code == 404
        assert response.json()["message"] == "Author not found"
