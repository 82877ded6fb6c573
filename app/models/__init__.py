"""
SQLAlchemy Models for Samachar
"""

from ..database import Base
from .auth_user import AuthUser, AuthSession
from .profile import Profile
from .category import Category
from .post import Post, PostStatus
from .post_category import PostCategory

# Export all models
__all__ = [
    "Base",
    "AuthUser",
    "AuthSession",
    "Profile",
    "Category",
    "Post",
    "PostStatus",
    "PostCategory",
]
