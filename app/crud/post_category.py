"""CRUD operations for the post ↔ category junction."""

from typing import Iterable, List
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.post_category import PostCategory


class CRUDPostCategory:
    """Junction rows are replaced wholesale, never edited in place."""

    def get_category_ids(self, db: Session, *, post_id: str) -> List[str]:
        stmt = (
            select(PostCategory.category_id)
            .where(PostCategory.post_id == post_id)
            .order_by(PostCategory.created_at, PostCategory.category_id)
        )
        return list(db.scalars(stmt).all())

    def replace(self, db: Session, *, post_id: str, category_ids: Iterable[str]) -> None:
        """Delete existing links then insert the new ones. Does not commit."""
        db.execute(delete(PostCategory).where(PostCategory.post_id == post_id))
        seen = set()
        for category_id in category_ids:
            if category_id in seen:
                continue
            seen.add(category_id)
            db.add(PostCategory(post_id=post_id, category_id=category_id))


# Singleton instance
crud_post_category = CRUDPostCategory()
