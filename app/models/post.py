"""Post model for bilingual news articles."""

import uuid
from enum import Enum
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class PostStatus(str, Enum):
    """Editorial lifecycle of a post."""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Post(Base):
    """News article with English (canonical) and optional Nepali fields."""

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Bilingual content
    slug_en = Column(String(200), nullable=False, unique=True, index=True)
    slug_ne = Column(String(200), nullable=True, unique=True, index=True)
    title_en = Column(String(300), nullable=False)
    title_ne = Column(String(300), nullable=True)
    excerpt_en = Column(Text, nullable=True)
    excerpt_ne = Column(Text, nullable=True)
    content_en = Column(Text, nullable=True)
    content_ne = Column(Text, nullable=True)

    # Workflow
    status = Column(String(20), nullable=False, default=PostStatus.DRAFT.value, index=True)
    featured_image = Column(String(500), nullable=True)
    published_at = Column(TIMESTAMP, nullable=True, index=True)

    # Foreign Keys
    category_id = Column(
        String(36),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    author_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # Public listings: published posts, newest first
        Index('idx_post_status_published', 'status', 'published_at'),
        Index('idx_post_category_published', 'category_id', 'published_at'),
    )

    # Relationships
    category = relationship("Category", back_populates="posts")
    author = relationship("Profile", back_populates="posts")
    category_links = relationship(
        "PostCategory",
        cascade="all, delete-orphan"
    )
