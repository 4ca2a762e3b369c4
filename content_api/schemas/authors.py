"""
Pydantic models for author endpoints.

Authors have two identifiers:
- id: the store's UUID primary key
- author_id: a short public code generated on creation (e.g. 'k3j9x0ab')
Both are accepted wherever an author is looked up by path parameter.
"""

from typing import Annotated, List, Optional

from pydantic import Field, StringConstraints

from content_api.schemas.common import CamelModel

AuthorName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class AuthorResponse(CamelModel):
    """Response model for a single author."""
    id: str = Field(..., description="Author UUID")
    author_id: str = Field(..., description="Short public author code")
    author_name: str = Field(..., description="Display name")
    author_image: str = Field("", description="Avatar URL")
    description: str = Field("", description="Short biography")
    created_at: Optional[str] = Field(None, description="Creation timestamp (ISO-8601)")
    updated_at: Optional[str] = Field(None, description="Last update timestamp (ISO-8601)")


class AuthorListData(CamelModel):
    """Payload of GET /api/authors."""
    authors: List[AuthorResponse]


class AuthorCreateRequest(CamelModel):
    """Request model for creating an author."""
    author_name: AuthorName = Field(..., description="Display name")
    author_image: str = Field("", description="Avatar URL")
    description: str = Field("", description="Short biography")


class AuthorUpdateRequest(CamelModel):
    """
    Request model for updating an author.

    All fields are optional - only provided fields will be updated.
    At least one field must be provided.
    """
    author_name: Optional[AuthorName] = Field(None, description="New display name")
    author_image: Optional[str] = Field(None, description="New avatar URL")
    description: Optional[str] = Field(None, description="New biography")
