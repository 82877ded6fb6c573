"""Admin profile endpoints for the signed-in user."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_auth_service, get_current_user, get_db
from app.crud import crud_profile
from app.schemas.auth import SessionUser
from app.schemas.profile import ProfileResponse, ProfileUpdate
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/profile",
    tags=["Admin - Profile"],
)


def _response(profile, email: str) -> ProfileResponse:
    response = ProfileResponse.model_validate(profile)
    response.email = email
    return response


@router.get("", response_model=ProfileResponse, summary="Get my profile")
async def read_profile(
    db: Session = Depends(get_db),
    current_user: SessionUser = Depends(get_current_user),
) -> ProfileResponse:
    """Profile of the signed-in user, created on first access if missing."""
    profile = crud_profile.ensure_profile(
        db,
        user_id=current_user.id,
        email=current_user.email,
        full_name=current_user.name,
    )
    return _response(profile, current_user.email)


@router.put("", response_model=ProfileResponse, summary="Update my profile")
async def update_profile(
    profile_in: ProfileUpdate,
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
    current_user: SessionUser = Depends(get_current_user),
) -> ProfileResponse:
    """
    Update display name and avatar.

    Both the profile row (shown as the author on articles) and the auth
    user are updated.
    """
    profile = crud_profile.ensure_profile(db, user_id=current_user.id, email=current_user.email)
    profile = crud_profile.update(db, db_obj=profile, obj_in={
        "full_name": profile_in.full_name,
        "avatar_url": profile_in.avatar_url,
    })

    result = auth.update_user(current_user.id, name=profile_in.full_name, avatar_url=profile_in.avatar_url)
    if not result.ok:
        logger.error(f"[PROFILE] Auth user update failed for {current_user.id}: {result.error.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error.message)

    return _response(profile, current_user.email)
