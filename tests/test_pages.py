import pytest

from app.content.categories import CategoryRegistry
from app.content.mock_data import MOCK_POSTS
from app.core.exceptions import ArticleNotFound, BackendQueryError
from app.schemas.page import ContentSource, ListingState
from app.schemas.query import QueryResult
from app.services.pages import PageService


def _pages(queries):
    return PageService(queries, CategoryRegistry.default(), MOCK_POSTS)


# ----- Page service -----

def test_subcategory_page_breadcrumb_and_empty_state(stub_queries):
    queries = stub_queries(QueryResult.success([]))

    page = _pages(queries).category("en", ["nepal", "politics"])

    assert page.state == ListingState.EMPTY
    assert page.message == "No articles found in Politics."
    assert " / ".join(c.label for c in page.breadcrumb) == "Home / Nepal / Politics"
    assert queries.specs[0].filter_value("categories.slug") == "politics"
    assert queries.specs[0].limit == 20


def test_category_error_state(stub_queries):
    page = _pages(stub_queries(QueryResult.failure("boom"))).category("ne", ["world"])
    assert page.state == ListingState.ERROR
    assert page.posts == []
    assert page.breadcrumb == []
    assert page.name == "विश्व"


def test_media_pages_do_not_query(stub_queries):
    queries = stub_queries()
    pages = _pages(queries)

    watch = pages.category("en", ["media", "watch"])
    index = pages.category("ne", ["media"])

    assert watch.coming_soon
    assert watch.coming_soon_message == "Video content will be available soon."
    assert not index.coming_soon
    assert [link.href for link in index.links] == ["/ne/media/watch", "/ne/media/listen"]
    assert queries.specs == []


def test_search_with_no_matches_is_empty_state(stub_queries):
    page = _pages(stub_queries(QueryResult.success([]))).search("en", "visa")
    assert page.state == ListingState.EMPTY
    assert page.message == 'No matches for "visa"'


def test_search_without_term_prompts(stub_queries):
    queries = stub_queries()
    page = _pages(queries).search("en", "  (),  ")
    assert page.state == ListingState.PROMPT
    assert queries.specs == []


def test_search_error_state(stub_queries):
    page = _pages(stub_queries(QueryResult.failure("down"))).search("ne", "visa")
    assert page.state == ListingState.ERROR
    assert page.message == "त्रुटि भयो"


def test_article_backend_error_raises(stub_queries):
    with pytest.raises(BackendQueryError):
        _pages(stub_queries(QueryResult.failure("down"))).article("en", "any")


def test_article_missing_raises_not_found(stub_queries):
    with pytest.raises(ArticleNotFound):
        _pages(stub_queries(QueryResult.success(None))).article("en", "any")


# ----- HTTP -----

def test_root_redirects_to_english(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/en"

    response = client.get("/news?page=2", follow_redirects=False)
    assert response.headers["location"] == "/en/news?page=2"


def test_homepage_live(client, make_category, make_post):
    nepal = make_category("nepal", "Nepal", "नेपाल")
    world = make_category("world", "World", "विश्व")
    for i in range(5):
        make_post(f"nepal-{i}", title_en=f"Nepal {i}", category=nepal, age_hours=i)
    for i in range(5):
        make_post(f"world-{i}", title_en=f"World {i}", category=world, age_hours=10 + i)

    body = client.get("/en").json()

    assert body["source"] == "live"
    assert body["featured"]["slug"] == "nepal-0"
    assert len(body["recent"]) == 6
    assert [c["slug"] for c in body["nepal"]] == ["nepal-0", "nepal-1", "nepal-2", "nepal-3"]
    assert [c["slug"] for c in body["world"]] == ["world-0", "world-1", "world-2", "world-3"]
    assert len(body["ticker"]["items"]) == 5


def test_homepage_empty_site_keeps_live_source(client):
    body = client.get("/ne").json()
    assert body["source"] == ContentSource.LIVE.value
    assert body["featured"] is None
    assert body["ticker"]["source"] == "fallback"


def test_unknown_language_and_category_are_404(client):
    assert client.get("/en/nepal/unknown").status_code == 404
    assert client.get("/en/news/does-not-exist").status_code == 404


def test_article_page(client, make_category, make_post):
    nepal = make_category("nepal", "Nepal", "नेपाल")
    source = make_post(
        "budget-2026",
        title_en="Budget 2026",
        title_ne="बजेट २०८२",
        slug_ne="budget-2026-ne",
        content_en="<p>" + "word " * 450 + "</p>",
        category=nepal,
        featured_image="https://cdn.example.com/budget.jpg",
    )
    make_post("same-cat", category=nepal, age_hours=1)
    make_post("other-1", age_hours=2)
    make_post("other-2", age_hours=3)

    body = client.get("/ne/news/budget-2026-ne").json()

    assert body["id"] == source.id
    assert body["title"] == "बजेट २०८२"
    assert body["read_time_minutes"] == 3
    assert body["category_name"] == "नेपाल"
    assert body["meta"]["images"] == ["https://cdn.example.com/budget.jpg"]
    assert body["related_title"] == "सम्बन्धित लेखहरू"
    assert [p["slug"] for p in body["related"]] == ["same-cat", "other-1", "other-2"]


def test_news_listing_and_legacy_category(client, make_category, make_post):
    tech = make_category("tech", "Tech")
    make_post("gadget", category=tech)
    make_post("general", age_hours=1)

    news = client.get("/en/news").json()
    legacy = client.get("/en/category/tech").json()
    unknown = client.get("/en/category/sports").json()

    assert [p["slug"] for p in news["posts"]] == ["gadget", "general"]
    assert [p["slug"] for p in legacy["posts"]] == ["gadget"]
    assert legacy["name"] == "tech"
    assert unknown["state"] == "empty"


def test_search_endpoint(client, make_post):
    make_post("schengen", title_en="Schengen visa changes")
    body = client.get("/en/search", params={"q": "schengen"}).json()
    assert body["state"] == "results"
    assert body["posts"][0]["url"] == "/en/news/schengen"


def test_sitemap(client, make_post):
    make_post("visa-news", slug_ne="visa-news-ne")
    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert "<loc>https://europe-visa-blog.com/en/nepal/politics</loc>" in response.text
    assert "<loc>https://europe-visa-blog.com/ne/media/listen</loc>" in response.text
    assert "<loc>https://europe-visa-blog.com/en/news/visa-news</loc>" in response.text
    assert "<loc>https://europe-visa-blog.com/ne/news/visa-news-ne</loc>" in response.text


def test_study_abroad_page(client, make_category, make_post):
    study = make_category("study-abroad", "Study Abroad", "विदेश अध्ययन")
    make_post("erasmus-grants", category=study)
    make_post("unrelated", age_hours=1)

    english = client.get("/en/study-abroad").json()
    nepali = client.get("/ne/study-abroad").json()

    assert [p["slug"] for p in english["posts"]] == ["erasmus-grants"]
    assert english["meta"]["title"] == "Study Abroad"
    assert english["meta"]["description"] == "Information about studying and scholarships in Europe."
    assert english["tagline"] == "Study and course portal for Europe"
    assert nepali["name"] == "विदेश अध्ययन"


def test_study_abroad_queries_its_category(stub_queries):
    queries = stub_queries(QueryResult.success([]))
    page = _pages(queries).study_abroad("en")
    assert page.state == ListingState.EMPTY
    assert queries.specs[0].filter_value("categories.slug") == "study-abroad"
    assert queries.specs[0].limit == 20


def test_top_level_watch_and_listen_are_coming_soon(client):
    watch = client.get("/en/watch").json()
    listen = client.get("/ne/listen").json()

    assert watch["coming_soon"]
    assert watch["title"] == "Watch"
    assert watch["coming_soon_message"] == "Video content will be available soon."
    assert listen["title"] == "सुन्नुहोस्"
    assert listen["coming_soon_message"] == "अडियो सामग्री छिट्टै उपलब्ध हुनेछ।"


def test_static_info_pages(client):
    about = client.get("/en/about")
    contact = client.get("/ne/contact")
    privacy = client.get("/en/privacy")

    assert about.status_code == 200
    assert about.json()["meta"]["title"] == "About Us"
    assert contact.json()["title"] == "हामीसँग कुरा गर्नुहोस्"
    assert privacy.json()["subtitle"] == "Your Privacy Matters to Us"
    assert client.get("/xx/about", follow_redirects=False).status_code == 307


def test_trailing_slash_serves_homepage(client):
    response = client.get("/en/", follow_redirects=False)
    assert response.status_code == 307
    assert response.headers["location"] == "/en"
    assert client.get("/ne/").json()["lang"] == "ne"
