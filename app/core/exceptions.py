"""Custom exceptions for the Samachar application."""

from typing import Dict

from fastapi import HTTPException, status

from app.schemas.query import BackendError


class CategoryNotFound(HTTPException):
    """Requested category path has no registry entry. Terminal for the page."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category not found: {path}" if path else "Category not found",
        )


class ArticleNotFound(HTTPException):
    """No published post matches the requested slug."""

    def __init__(self, slug: str = ""):
        self.slug = slug
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Article not found",
        )


class BackendQueryError(Exception):
    """
    The query service reported an error on a read path that has neither a
    fallback nor an empty state (e.g. the article detail page).

    Handled by the page-level error boundary in ``app.main``.
    """

    def __init__(self, error: BackendError, view: str = ""):
        self.error = error
        self.view = view
        super().__init__(error.message)


class AuthRequired(Exception):
    """Admin route reached without a valid session. Not an application error."""

    def __init__(self, detail: str = "Authentication required"):
        self.detail = detail
        super().__init__(detail)


class PostValidationError(HTTPException):
    """
    Admin post form failed validation before reaching the datastore.

    Status Code: 422 Unprocessable Entity

    Response Body:
        {
            "detail": {
                "message": "Validation failed",
                "errors": {"title_en": "English title is required"}
            }
        }
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Validation failed", "errors": errors},
        )


class BackendWriteError(HTTPException):
    """Admin mutation rejected by the datastore; surfaced, never retried."""

    def __init__(self, detail: str = "Could not save changes. Please try again.", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


__all__ = [
    "CategoryNotFound",
    "ArticleNotFound",
    "BackendQueryError",
    "AuthRequired",
    "PostValidationError",
    "BackendWriteError",
]
