"""Services package for the Samachar backend."""

from .query_service import QueryService
from .auth_service import AuthService
from .storage import StorageService
from .pages import PageService

__all__ = [
    "QueryService",
    "AuthService",
    "StorageService",
    "PageService",
]
