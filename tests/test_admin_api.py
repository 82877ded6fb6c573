import re

from app.crud import crud_post_category
from app.models import AuthUser, Post, Profile

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


# ----- Auth guard -----

def test_admin_requires_session(client):
    assert client.get("/api/v1/admin/posts").status_code == 401


def test_browser_is_redirected_to_login(client):
    response = client.get(
        "/api/v1/admin/dashboard",
        headers={"Accept": "text/html,application/xhtml+xml"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_rejects_bad_password(client, admin_user):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert response.status_code == 401


def test_login_sets_cookie_and_logout_revokes(client, admin_user):
    response = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    token = response.json()["access_token"]
    assert response.json()["user"]["email"] == ADMIN_EMAIL
    assert client.get("/api/v1/auth/session").json()["email"] == ADMIN_EMAIL

    headers = {"Authorization": f"Bearer {token}"}
    assert client.post("/api/v1/auth/logout", headers=headers).status_code == 200
    client.cookies.clear()
    assert client.get("/api/v1/auth/session", headers=headers).status_code == 401


# ----- Posts -----

def _form(**overrides):
    form = {
        "title_en": "Schengen Visa Fees Rise",
        "slug_en": "",
        "title_ne": "",
        "slug_ne": "",
        "excerpt_en": "Fees go up in June.",
        "content_en": "<p>Details</p>",
        "status": "draft",
        "category_ids": [],
    }
    form.update(overrides)
    return form


def test_create_post_generates_slug_and_nulls_blank_nepali(client, db, auth_headers, admin_user):
    response = client.post("/api/v1/admin/posts", json=_form(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["slug_en"] == "schengen-visa-fees-rise"
    assert body["slug_ne"] is None
    assert body["title_ne"] is None
    assert body["author_id"] == admin_user.id
    assert body["published_at"] is None

    # Author profile is created on first save
    profile = db.get(Profile, admin_user.id)
    assert profile.full_name == "editor"
    assert profile.role == "user"

    # Blank Nepali slugs never collide
    second = client.post("/api/v1/admin/posts", json=_form(title_en="Another one"), headers=auth_headers)
    assert second.status_code == 201


def test_create_post_validation_errors(client, auth_headers):
    response = client.post("/api/v1/admin/posts", json=_form(title_en="  "), headers=auth_headers)
    assert response.status_code == 422
    errors = response.json()["detail"]["errors"]
    assert "title_en" in errors
    assert "slug_en" in errors

    too_long = client.post("/api/v1/admin/posts", json=_form(title_en="x" * 301), headers=auth_headers)
    assert too_long.status_code == 422
    assert "title_en" in too_long.json()["detail"]["errors"]


def test_duplicate_slug_is_rejected(client, auth_headers):
    client.post("/api/v1/admin/posts", json=_form(slug_en="same"), headers=auth_headers)
    response = client.post("/api/v1/admin/posts", json=_form(slug_en="same"), headers=auth_headers)
    assert response.status_code == 400


def test_categories_and_publish_stamp(client, db, auth_headers, make_category):
    nepal = make_category("nepal", "Nepal")
    world = make_category("world", "World")
    climate = make_category("climate", "Climate")

    created = client.post(
        "/api/v1/admin/posts",
        json=_form(status="published", category_ids=[world.id, nepal.id]),
        headers=auth_headers,
    ).json()
    assert created["category_id"] == world.id
    assert set(created["category_ids"]) == {world.id, nepal.id}
    assert created["published_at"] is not None

    updated = client.put(
        f"/api/v1/admin/posts/{created['id']}",
        json=_form(slug_en=created["slug_en"], status="published", category_ids=[climate.id]),
        headers=auth_headers,
    ).json()
    assert updated["category_id"] == climate.id
    assert crud_post_category.get_category_ids(db, post_id=created["id"]) == [climate.id]
    assert updated["published_at"] == created["published_at"]


def test_failed_update_keeps_old_category_links(client, db, auth_headers, make_category):
    nepal = make_category("nepal", "Nepal")
    first = client.post("/api/v1/admin/posts", json=_form(slug_en="first", category_ids=[nepal.id]), headers=auth_headers).json()
    client.post("/api/v1/admin/posts", json=_form(slug_en="taken"), headers=auth_headers)

    response = client.put(
        f"/api/v1/admin/posts/{first['id']}",
        json=_form(slug_en="taken", category_ids=[]),
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert crud_post_category.get_category_ids(db, post_id=first["id"]) == [nepal.id]


def test_update_missing_post_is_404(client, auth_headers):
    response = client.put("/api/v1/admin/posts/missing", json=_form(slug_en="x"), headers=auth_headers)
    assert response.status_code == 404


def test_list_filter_and_delete(client, db, auth_headers, make_post):
    make_post("live-1", age_hours=3)
    make_post("draft-1", status="draft", age_hours=1)
    make_post("live-2", age_hours=2)

    everything = client.get("/api/v1/admin/posts", headers=auth_headers).json()
    drafts = client.get("/api/v1/admin/posts", params={"status": "draft"}, headers=auth_headers).json()

    assert [p["slug_en"] for p in everything["posts"]] == ["draft-1", "live-2", "live-1"]
    assert everything["total"] == 3
    assert [p["slug_en"] for p in drafts["posts"]] == ["draft-1"]
    assert client.get("/api/v1/admin/posts", params={"status": "bogus"}, headers=auth_headers).status_code == 400

    post_id = drafts["posts"][0]["id"]
    assert client.delete(f"/api/v1/admin/posts/{post_id}", headers=auth_headers).status_code == 200
    assert db.get(Post, post_id) is None
    assert client.delete(f"/api/v1/admin/posts/{post_id}", headers=auth_headers).status_code == 404


def test_list_pages_past_the_first_hundred(client, auth_headers, make_post):
    for i in range(101):
        make_post(f"p-{i}", age_hours=i)

    first = client.get("/api/v1/admin/posts", headers=auth_headers).json()
    last = client.get("/api/v1/admin/posts", params={"skip": 100}, headers=auth_headers).json()
    window = client.get("/api/v1/admin/posts", params={"skip": 10, "limit": 5}, headers=auth_headers).json()

    assert len(first["posts"]) == 100
    assert first["total"] == 101
    assert first["has_more"]
    assert [p["slug_en"] for p in last["posts"]] == ["p-100"]
    assert not last["has_more"]
    assert [p["slug_en"] for p in window["posts"]] == ["p-10", "p-11", "p-12", "p-13", "p-14"]
    assert client.get("/api/v1/admin/posts", params={"limit": 101}, headers=auth_headers).status_code == 422


def test_dashboard(client, auth_headers, make_post):
    for i in range(4):
        make_post(f"pub-{i}", age_hours=i)
    for i in range(3):
        make_post(f"draft-{i}", status="draft", age_hours=10 + i)

    stats = client.get("/api/v1/admin/dashboard", headers=auth_headers).json()

    assert stats["total_posts"] == 7
    assert stats["published_posts"] == 4
    assert stats["draft_posts"] == 3
    assert [p["slug_en"] for p in stats["recent_posts"]] == ["pub-0", "pub-1", "pub-2", "pub-3", "draft-0"]


# ----- Categories -----

def test_category_crud(client, db, auth_headers, make_post):
    created = client.post(
        "/api/v1/admin/categories",
        json={"name_en": "Study Abroad", "name_ne": "विदेश अध्ययन"},
        headers=auth_headers,
    )
    assert created.status_code == 201
    category = created.json()
    assert category["slug"] == "study-abroad"

    duplicate = client.post("/api/v1/admin/categories", json={"name_en": "Study Abroad"}, headers=auth_headers)
    assert duplicate.status_code == 400

    client.post("/api/v1/admin/categories", json={"name_en": "Economy", "slug": "economy"}, headers=auth_headers)
    listing = client.get("/api/v1/admin/categories", headers=auth_headers).json()
    assert [c["name_en"] for c in listing["categories"]] == ["Economy", "Study Abroad"]

    renamed = client.put(
        f"/api/v1/admin/categories/{category['id']}",
        json={"name_en": "Study in Europe", "name_ne": ""},
        headers=auth_headers,
    ).json()
    assert renamed["slug"] == "study-abroad"
    assert renamed["name_ne"] is None

    post = db.get(Post, make_post("student-story").id)
    post.category_id = category["id"]
    db.commit()

    assert client.delete(f"/api/v1/admin/categories/{category['id']}", headers=auth_headers).status_code == 200
    db.refresh(post)
    assert post.category_id is None


# ----- Profile and security -----

def test_profile_self_heals_and_updates_auth_user(client, db, auth_headers, admin_user):
    profile = client.get("/api/v1/admin/profile", headers=auth_headers).json()
    assert profile["full_name"] == "editor"
    assert profile["email"] == ADMIN_EMAIL

    updated = client.put(
        "/api/v1/admin/profile",
        json={"full_name": "Sita Sharma", "avatar_url": "http://testserver/storage/images/a.png"},
        headers=auth_headers,
    ).json()
    assert updated["full_name"] == "Sita Sharma"
    assert db.get(AuthUser, admin_user.id).name == "Sita Sharma"


def test_change_password_flow(client, outbox, auth_headers):
    wrong = client.post(
        "/api/v1/admin/security/password/start",
        json={"current_password": "nope", "new_password": "NewPass!5678", "retype_password": "NewPass!5678"},
        headers=auth_headers,
    )
    assert wrong.status_code == 400
    assert outbox == []

    started = client.post(
        "/api/v1/admin/security/password/start",
        json={"current_password": ADMIN_PASSWORD, "new_password": "NewPass!5678", "retype_password": "NewPass!5678"},
        headers=auth_headers,
    )
    assert started.status_code == 200
    assert outbox[0]["to_email"] == ADMIN_EMAIL
    code = re.search(r"Verification code: (\d{6})", outbox[0]["text_content"]).group(1)

    bad_code = client.post(
        "/api/v1/admin/security/password/confirm",
        json={"code": "000000" if code != "000000" else "111111", "new_password": "NewPass!5678"},
        headers=auth_headers,
    )
    assert bad_code.status_code == 400

    confirmed = client.post(
        "/api/v1/admin/security/password/confirm",
        json={"code": code, "new_password": "NewPass!5678"},
        headers=auth_headers,
    )
    assert confirmed.status_code == 200

    client.cookies.clear()
    relogin = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": "NewPass!5678"})
    assert relogin.status_code == 200
