"""
Pydantic models for category endpoints.

Categories are labels attached to articles. Each has a UUID primary key and
a public code of the form 'cat-<epoch-ms>-<n>'. Category names are unique.
"""

from typing import Annotated, List

from pydantic import Field, StringConstraints

from content_api.schemas.common import CamelModel

CategoryName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class CategoryResponse(CamelModel):
    """
    Response model for a single category.

    Fields:
        id: UUID of the category
        category_id: Public category code ('cat-...')
        category_name: Display name
    """
    id: str = Field(..., description="Category UUID")
    category_id: str = Field(..., description="Public category code")
    category_name: str = Field(..., description="Category display name")


class CategoryListData(CamelModel):
    """Payload of GET /api/categories."""
    categories: List[CategoryResponse]


class CategoryCreateRequest(CamelModel):
    """Request model for creating a category."""
    category_name: CategoryName = Field(..., description="Category display name")


class CategoryUpdateRequest(CamelModel):
    """Request model for renaming a category."""
    category_name: CategoryName = Field(..., description="New category display name")
