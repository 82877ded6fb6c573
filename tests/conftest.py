import os
import tempfile
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-samachar")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="samachar-storage-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_auth_service, get_db, get_storage_service
from app.database import Base
from app.main import app
from app.models import Category, Post
from app.schemas.query import QueryResult
from app.services.auth_service import AuthService
from app.services.storage import StorageService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_EMAIL = "editor@example.com"
ADMIN_PASSWORD = "StrongPass!234"


class StubQueries:
    """Query runner that records specs and answers from a queue of results."""

    def __init__(self, *results):
        self.results = list(results)
        self.specs = []

    def execute(self, spec):
        self.specs.append(spec)
        if self.results:
            return self.results.pop(0)
        return QueryResult.success([])


@pytest.fixture
def stub_queries():
    return StubQueries


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def outbox():
    return []


@pytest.fixture
def storage_root(tmp_path):
    return tmp_path / "storage"


@pytest.fixture
def client(db, outbox, storage_root):
    def override_get_db():
        yield db

    def record_email(**message):
        outbox.append(message)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_auth_service] = lambda: AuthService(db, mailer=record_email)
    app.dependency_overrides[get_storage_service] = lambda: StorageService(
        root=str(storage_root), public_url="http://testserver/storage"
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db):
    result = AuthService(db).create_user(ADMIN_EMAIL, ADMIN_PASSWORD)
    assert result.ok
    return result.data


@pytest.fixture
def auth_headers(client, admin_user):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    # Bearer header only; drop the cookie so tests choose how they authenticate
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def make_category(db):
    def _make(slug, name_en, name_ne=None):
        category = Category(slug=slug, name_en=name_en, name_ne=name_ne)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category
    return _make


@pytest.fixture
def make_post(db):
    counter = {"n": 0}

    def _make(slug_en, title_en="Title", category=None, status="published", age_hours=0, **fields):
        counter["n"] += 1
        published_at = datetime(2026, 1, 10, 12, 0) - timedelta(hours=age_hours)
        post = Post(
            slug_en=slug_en,
            title_en=title_en,
            status=status,
            category_id=category.id if category else None,
            published_at=published_at if status == "published" else None,
            created_at=published_at,
            **fields,
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        return post
    return _make
