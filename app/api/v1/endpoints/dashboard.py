"""Admin dashboard statistics."""

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_query_service
from app.content.queries import (
    ADMIN_RECENT_LIMIT,
    PUBLISHED,
    ListingFilters,
    build_count_query,
    build_listing_query,
)
from app.core.exceptions import BackendQueryError
from app.schemas.auth import SessionUser
from app.schemas.post import DashboardStatsResponse, PostRecord
from app.services.query_service import QueryService

router = APIRouter(
    prefix="/admin/dashboard",
    tags=["Admin - Dashboard"],
)


@router.get("", response_model=DashboardStatsResponse, summary="Dashboard statistics")
async def dashboard_stats(
    queries: QueryService = Depends(get_query_service),
    current_user: SessionUser = Depends(get_current_user),
) -> DashboardStatsResponse:
    """Post totals and the five most recently created posts."""
    total = queries.execute(build_count_query())
    published = queries.execute(build_count_query(PUBLISHED))
    recent = queries.execute(build_listing_query(ListingFilters(
        status=None,
        include_drafts=True,
        limit=ADMIN_RECENT_LIMIT,
    )))
    for result in (total, published, recent):
        if not result.ok:
            raise BackendQueryError(result.error, view="dashboard")

    return DashboardStatsResponse(
        total_posts=total.count,
        published_posts=published.count,
        draft_posts=total.count - published.count,
        recent_posts=[PostRecord.model_validate(row) for row in recent.data],
    )
