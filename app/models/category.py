"""Category model for grouping news posts."""

import uuid

from sqlalchemy import Column, String, TIMESTAMP
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Category(Base):
    """Bilingual news category; the slug is the URL segment."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(100), nullable=False, unique=True, index=True)
    name_en = Column(String(100), nullable=False)
    name_ne = Column(String(100), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())

    # Relationships
    posts = relationship("Post", back_populates="category")
    post_links = relationship(
        "PostCategory",
        cascade="all, delete-orphan"
    )
