"""Auth service tables: credentials and issued sessions."""

import uuid

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Credentials
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Auth-side profile (mirrors profiles.full_name / avatar_url)
    name = Column(String(255))
    avatar_url = Column(String(500))

    # Password reset
    reset_code_hash = Column(String(255))
    reset_code_expires_at = Column(TIMESTAMP)

    created_at = Column(TIMESTAMP, server_default=func.now())

    sessions = relationship(
        "AuthSession",
        back_populates="user",
        cascade="all, delete-orphan"
    )


class AuthSession(Base):
    """One row per issued access token (keyed by the token's jti)."""

    __tablename__ = "auth_sessions"

    id = Column(String(36), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("auth_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    revoked_at = Column(TIMESTAMP, nullable=True)

    user = relationship("AuthUser", back_populates="sessions")
