"""CRUD operations for Profile."""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.profile import Profile
from app.schemas.profile import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


def default_display_name(email: Optional[str]) -> str:
    """Local part of the email address, or "User"."""
    if email and "@" in email:
        return email.split("@", 1)[0] or "User"
    return "User"


class CRUDProfile(CRUDBase[Profile, ProfileCreate, ProfileUpdate]):
    """CRUD operations for Profile."""

    def ensure_profile(
        self,
        db: Session,
        *,
        user_id: str,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        commit: bool = True,
    ) -> Profile:
        """
        Return the user's profile, creating a basic one if it is missing.

        With ``commit=False`` the new row is only flushed so the caller can
        include it in a larger transaction.
        """
        profile = self.get(db, user_id)
        if profile:
            return profile

        logger.info(f"[PROFILE] Creating missing profile for user {user_id}")
        profile = Profile(
            id=user_id,
            full_name=full_name or default_display_name(email),
            avatar_url=None,
            role="user",
        )
        db.add(profile)
        if commit:
            try:
                db.commit()
                db.refresh(profile)
            except Exception:
                db.rollback()
                raise
        else:
            db.flush()
        return profile


# Singleton instance
crud_profile = CRUDProfile(Profile)
