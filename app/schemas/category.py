"""Pydantic schemas for Category."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    """Base schema for Category."""
    name_en: str = Field(..., min_length=1, max_length=100, description="English display name")
    name_ne: Optional[str] = Field(None, max_length=100, description="Nepali display name")
    slug: Optional[str] = Field(None, max_length=100, description="URL segment; generated from name_en when empty")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""
    pass


class CategoryUpdate(CategoryBase):
    """Schema for updating a category."""
    pass


class CategoryResponse(BaseModel):
    """Schema for Category response."""
    id: str
    slug: str
    name_en: str
    name_ne: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CategoryListResponse(BaseModel):
    """Response for listing categories."""
    categories: List[CategoryResponse]
    total: int
