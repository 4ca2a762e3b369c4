"""
Pydantic models for article endpoints.

Articles reference one category and one author by UUID (category_ref,
author_ref in the store; category/author in request bodies). Single-article
responses embed the referenced author and category.

The list endpoint returns a compact summary per article where articleType is
numeric: 1 = text, 2 = audio, 3 = video.
"""

from typing import List, Literal, Optional
from uuid import UUID

from pydantic import Field, field_validator

from content_api.schemas.authors import AuthorResponse
from content_api.schemas.categories import CategoryResponse
from content_api.schemas.common import CamelModel

ArticleType = Literal["text", "audio", "video"]

ARTICLE_TYPE_CODES = {"text": 1, "audio": 2, "video": 3}


class ArticleResponse(CamelModel):
    """Response model for a single article with author and category embedded."""
    id: str = Field(..., description="Article UUID")
    title: str
    subtitle: Optional[str] = None
    article_image: str = Field(..., description="Hero image URL")
    article_type: ArticleType = "text"
    description: str
    media_url: Optional[str] = Field(None, description="Audio/video URL")
    category_ref: str = Field(..., description="Category UUID")
    author_ref: str = Field(..., description="Author UUID")
    tags: List[str] = Field(default_factory=list)
    publish_date: Optional[str] = Field(None, description="Publication timestamp (ISO-8601)")
    category: Optional[CategoryResponse] = None
    author: Optional[AuthorResponse] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def tags_default(cls, v):
        return v or []


class ArticleCreateRequest(CamelModel):
    """Request model for creating an article."""
    title: str = Field(..., min_length=1, max_length=300)
    subtitle: Optional[str] = Field(None, max_length=500)
    article_image: str = Field(..., min_length=1, description="Hero image URL")
    article_type: ArticleType = Field("text", description="text, audio or video")
    description: str = Field(..., min_length=1, description="Article body")
    media_url: Optional[str] = Field(None, description="Audio/video URL")
    category: UUID = Field(..., description="Category UUID")
    tags: List[str] = Field(default_factory=list)
    author: UUID = Field(..., description="Author UUID")


class ArticleUpdateRequest(CamelModel):
    """
    Request model for updating an article.

    All fields are optional - only provided fields will be updated.
    At least one field must be provided.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    subtitle: Optional[str] = Field(None, max_length=500)
    article_image: Optional[str] = Field(None, min_length=1)
    article_type: Optional[ArticleType] = None
    description: Optional[str] = Field(None, min_length=1)
    media_url: Optional[str] = None
    category: Optional[UUID] = None
    tags: Optional[List[str]] = None
    author: Optional[UUID] = None


class ArticleSummary(CamelModel):
    """One entry of GET /api/articles."""
    title: str
    hero: str = Field(..., description="Hero image URL")
    category_id: Optional[str] = Field(None, description="Public category code")
    category_object_id: Optional[str] = Field(None, description="Category UUID")
    author_id: Optional[str] = Field(None, description="Public author code")
    author_object_id: Optional[str] = Field(None, description="Author UUID")
    article_object_id: str = Field(..., description="Article UUID")
    article_type: int = Field(..., description="1 = text, 2 = audio, 3 = video")
    tags: List[str] = Field(default_factory=list)


class ArticleListData(CamelModel):
    """Payload of GET /api/articles."""
    articles: List[ArticleSummary]
    category_id: Optional[str] = None
    tag: Optional[str] = None
    author_name: Optional[str] = None
    page: int
    total_pages: int
