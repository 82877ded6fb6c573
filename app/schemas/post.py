"""Pydantic schemas for Post (news articles)."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

POST_STATUSES = {"draft", "published", "archived"}

TITLE_MAX_LENGTH = 300
SLUG_MAX_LENGTH = 200


class CategoryRef(BaseModel):
    """Nested category projection on a post row."""
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: Optional[str] = None
    slug: Optional[str] = None
    name_en: Optional[str] = None
    name_ne: Optional[str] = None


class AuthorRef(BaseModel):
    """Nested author projection on a post row."""
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class PostRecord(BaseModel):
    """
    Post row as returned by the query service, validated at the boundary.

    Only ``id`` is required: listing projections select a subset of columns.
    """
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    slug_en: Optional[str] = None
    slug_ne: Optional[str] = None
    title_en: Optional[str] = None
    title_ne: Optional[str] = None
    excerpt_en: Optional[str] = None
    excerpt_ne: Optional[str] = None
    content_en: Optional[str] = None
    content_ne: Optional[str] = None
    status: Optional[str] = None
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category_id: Optional[str] = None
    author_id: Optional[str] = None
    category: Optional[CategoryRef] = None
    author: Optional[AuthorRef] = None


class PostBase(BaseModel):
    """Fields editable from the admin post form."""
    title_en: str = Field(..., description="English title (required)")
    title_ne: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    slug_en: str = Field("", description="English slug; generated from title when empty")
    slug_ne: Optional[str] = Field(None, max_length=SLUG_MAX_LENGTH)
    excerpt_en: Optional[str] = None
    excerpt_ne: Optional[str] = None
    content_en: Optional[str] = None
    content_ne: Optional[str] = None
    status: str = "draft"
    featured_image: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in POST_STATUSES:
            raise ValueError(f"Status must be one of {sorted(POST_STATUSES)}")
        return v


class PostCreate(PostBase):
    """Schema for creating a post. The first category is the primary one."""
    category_ids: List[str] = Field(default_factory=list)


class PostUpdate(PostCreate):
    """Updates resend the whole form, like create."""
    pass


class PostResponse(BaseModel):
    """Admin view of a post row."""
    id: str
    slug_en: str
    slug_ne: Optional[str] = None
    title_en: str
    title_ne: Optional[str] = None
    excerpt_en: Optional[str] = None
    excerpt_ne: Optional[str] = None
    content_en: Optional[str] = None
    content_ne: Optional[str] = None
    status: str
    featured_image: Optional[str] = None
    published_at: Optional[datetime] = None
    category_id: Optional[str] = None
    author_id: Optional[str] = None
    category_ids: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    """Response for the admin post table."""
    posts: List[PostRecord]
    total: int
    has_more: bool = False


class DashboardStatsResponse(BaseModel):
    total_posts: int
    published_posts: int
    draft_posts: int
    recent_posts: List[PostRecord]
