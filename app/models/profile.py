"""Profile model for authors and admin console users."""

from sqlalchemy import Column, String, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Profile(Base):
    """Author profile keyed by the authenticated user's id."""

    __tablename__ = "profiles"

    # Same value as auth_users.id
    id = Column(String(36), primary_key=True, index=True)

    full_name = Column(String(255), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    role = Column(String(20), nullable=False, default="user", index=True)

    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "role IN ('user', 'editor', 'admin')",
            name="check_profile_role"
        ),
    )

    # Relationships
    posts = relationship("Post", back_populates="author")
