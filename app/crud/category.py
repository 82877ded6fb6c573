"""CRUD operations for Category."""

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.utils.slug import slugify


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    def get_all(self, db: Session) -> List[Category]:
        """All categories, alphabetical by English name."""
        return self.get_ordered(db, order_by="name_en")

    def get_by_slug(self, db: Session, slug: str) -> Optional[Category]:
        stmt = select(Category).where(Category.slug == slug).limit(1)
        return db.scalars(stmt).first()

    def create_category(self, db: Session, *, category_in: CategoryCreate) -> Category:
        """Create a category; the slug defaults to the slugified English name."""
        slug = (category_in.slug or "").strip() or slugify(category_in.name_en)
        return self.create(db, obj_in={
            "name_en": category_in.name_en.strip(),
            "name_ne": (category_in.name_ne or "").strip() or None,
            "slug": slug,
        })

    def update_category(self, db: Session, *, db_obj: Category, category_in: CategoryUpdate) -> Category:
        slug = (category_in.slug or "").strip() or db_obj.slug
        return self.update(db, db_obj=db_obj, obj_in={
            "name_en": category_in.name_en.strip(),
            "name_ne": (category_in.name_ne or "").strip() or None,
            "slug": slug,
        })


# Singleton instance
crud_category = CRUDCategory(Category)
