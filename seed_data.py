"""
Seed categories from the category registry and an admin account.
Run: python seed_data.py admin@example.com StrongPass!234
"""

import sys

from app.content.categories import CategoryRegistry
from app.crud import crud_category, crud_profile
from app.database import Base, SessionLocal, engine
from app.schemas.category import CategoryCreate
from app.services.auth_service import AuthService


def seed_categories(db) -> int:
    """Insert one category per registry slug (last path segment) that is not there yet."""
    registry = CategoryRegistry.default()
    created = 0
    seen = set()
    for path in registry.paths():
        info = registry.get(path)
        if info.is_media or info.query_slug in seen:
            continue
        seen.add(info.query_slug)
        if crud_category.get_by_slug(db, info.query_slug):
            continue
        crud_category.create_category(db, category_in=CategoryCreate(
            name_en=info.name_en,
            name_ne=info.name_ne,
            slug=info.query_slug,
        ))
        created += 1
    return created


def seed_admin(db, email: str, password: str) -> None:
    result = AuthService(db).create_user(email, password)
    if not result.ok:
        print(f"   ⚠️  {result.error.message}, skipping admin creation")
        return
    admin = crud_profile.ensure_profile(db, user_id=result.data.id, email=email)
    crud_profile.update(db, db_obj=admin, obj_in={"role": "admin"})
    print(f"   ✅ Admin created: {email}")


def main() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        print("\n🌱 Seeding categories...")
        print(f"   ✅ {seed_categories(db)} categories created")
        if len(sys.argv) == 3:
            print("\n🌱 Seeding admin account...")
            seed_admin(db, sys.argv[1], sys.argv[2])
    finally:
        db.close()


if __name__ == "__main__":
    main()
