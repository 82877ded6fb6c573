"""CRUD operations for Post."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.crud.post_category import crud_post_category
from app.crud.profile import crud_profile
from app.models.post import Post, PostStatus
from app.schemas.post import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def build_payload(self, post_in: PostCreate, *, author_id: str) -> Dict[str, Any]:
        """
        Map the admin form onto post columns.

        Blank Nepali fields become NULL (unique slug_ne must not collide on
        ""); the first selected category is the primary one.
        """
        return {
            "title_en": post_in.title_en.strip(),
            "slug_en": post_in.slug_en.strip(),
            "title_ne": _blank_to_none(post_in.title_ne),
            "slug_ne": _blank_to_none(post_in.slug_ne),
            "excerpt_en": post_in.excerpt_en,
            "excerpt_ne": _blank_to_none(post_in.excerpt_ne),
            "content_en": post_in.content_en,
            "content_ne": _blank_to_none(post_in.content_ne),
            "status": post_in.status,
            "featured_image": _blank_to_none(post_in.featured_image),
            "category_id": post_in.category_ids[0] if post_in.category_ids else None,
            "author_id": author_id,
        }

    def save_post(
        self,
        db: Session,
        *,
        post_in: PostCreate,
        author_id: str,
        author_email: Optional[str] = None,
        post_id: Optional[str] = None,
    ) -> Optional[Post]:
        """
        Create or update a post together with its category links.

        The author's profile is created when missing, the post row is written
        and the junction rows are replaced (delete then insert), all in one
        transaction. Returns None when ``post_id`` does not exist.
        """
        try:
            crud_profile.ensure_profile(db, user_id=author_id, email=author_email, commit=False)

            payload = self.build_payload(post_in, author_id=author_id)
            if post_id is None:
                post = Post(**payload)
                db.add(post)
            else:
                post = self.get(db, post_id)
                if post is None:
                    db.rollback()
                    return None
                for field, value in payload.items():
                    setattr(post, field, value)

            if post.status == PostStatus.PUBLISHED.value and post.published_at is None:
                post.published_at = datetime.utcnow()

            db.flush()
            crud_post_category.replace(db, post_id=post.id, category_ids=post_in.category_ids)
            db.commit()
            db.refresh(post)
        except Exception:
            db.rollback()
            raise

        logger.info(f"[POST] Saved post {post.id} (status={post.status}, categories={len(post_in.category_ids)})")
        return post


# Singleton instance
crud_post = CRUDPost(Post)
