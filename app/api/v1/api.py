"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    admin_posts,
    admin_categories,
    dashboard,
    admin_profile,
    admin_security,
    upload,
)

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(admin_posts.router)
api_router.include_router(admin_categories.router)
api_router.include_router(dashboard.router)
api_router.include_router(admin_profile.router)
api_router.include_router(admin_security.router)
api_router.include_router(upload.router)

__all__ = ["api_router"]
