"""Junction table for additional post ↔ category associations."""

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from ..database import Base


class PostCategory(Base):
    """Many-to-many link beyond a post's single primary category."""

    __tablename__ = "post_categories"

    post_id = Column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True
    )
    category_id = Column(
        String(36),
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True
    )

    created_at = Column(TIMESTAMP, server_default=func.now())
