"""FastAPI dependency injection functions for sessions, services and database access."""

import logging
from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.content.categories import CategoryRegistry
from app.content.mock_data import MockPostSet
from app.core.exceptions import AuthRequired
from app.database import SessionLocal
from app.schemas.auth import SessionUser
from app.services.auth_service import AuthService
from app.services.pages import PageService
from app.services.query_service import QueryService
from app.services.storage import StorageService

logger = logging.getLogger(__name__)

# Bearer token is optional: browsers send the session cookie instead
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_query_service(db: Session = Depends(get_db)) -> QueryService:
    return QueryService(db)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_storage_service() -> StorageService:
    return StorageService()


def get_category_registry(request: Request) -> CategoryRegistry:
    """Registry built once at startup (see ``app.main``)."""
    return request.app.state.category_registry


def get_fallback_posts(request: Request) -> MockPostSet:
    return request.app.state.fallback_posts


def get_page_service(
    queries: QueryService = Depends(get_query_service),
    registry: CategoryRegistry = Depends(get_category_registry),
    fallback_posts: MockPostSet = Depends(get_fallback_posts),
) -> PageService:
    return PageService(queries, registry, fallback_posts)


def get_session_token(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme_optional),
) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    return token or request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthService = Depends(get_auth_service),
) -> SessionUser:
    """
    Dependency for admin routes: the signed-in user.

    Raises:
        AuthRequired: no token, or the token's session is expired or revoked
    """
    result = auth.get_session(token)
    if result.data is None:
        if token:
            logger.info("[AUTH] Rejected expired or revoked session token")
        raise AuthRequired()
    return result.data["user"]


__all__ = [
    "oauth2_scheme_optional",
    "get_db",
    "get_query_service",
    "get_auth_service",
    "get_storage_service",
    "get_category_registry",
    "get_fallback_posts",
    "get_page_service",
    "get_session_token",
    "get_current_user",
]
