"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .profile import crud_profile
from .category import crud_category
from .post_category import crud_post_category
from .post import crud_post


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_profile",
    "crud_category",
    "crud_post_category",
    "crud_post",
]
