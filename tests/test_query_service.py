from app.content.queries import (
    ListingFilters,
    build_count_query,
    build_homepage_query,
    build_listing_query,
    build_search_query,
    build_single_query,
)
from app.content.search import sanitize_search
from app.models import Profile
from app.schemas.query import QuerySpec
from app.services.query_service import QueryService


def test_listing_returns_published_posts_with_nested_category(db, make_category, make_post):
    nepal = make_category("nepal", "Nepal", "नेपाल")
    make_post("older", category=nepal, age_hours=5)
    make_post("newer", category=nepal, age_hours=1)
    make_post("draft-post", status="draft")

    result = QueryService(db).execute(build_listing_query())

    assert result.ok
    assert [row["slug_en"] for row in result.data] == ["newer", "older"]
    assert result.data[0]["category"] == {
        "id": nepal.id, "slug": "nepal", "name_en": "Nepal", "name_ne": "नेपाल",
    }


def test_category_filter_uses_joined_slug(db, make_category, make_post):
    politics = make_category("politics", "Politics")
    economy = make_category("economy", "Economy")
    make_post("vote", category=politics)
    make_post("budget", category=economy)
    make_post("loose")

    result = QueryService(db).execute(build_listing_query(ListingFilters(category_slug="politics")))

    assert [row["slug_en"] for row in result.data] == ["vote"]


def test_homepage_query_includes_author(db, make_post):
    db.add(Profile(id="author-1", full_name="Sita Sharma", role="editor"))
    db.commit()
    make_post("story", author_id="author-1")
    make_post("anonymous")

    rows = QueryService(db).execute(build_homepage_query()).data

    by_slug = {row["slug_en"]: row for row in rows}
    assert by_slug["story"]["author"] == {"full_name": "Sita Sharma"}
    assert by_slug["anonymous"]["author"] is None


def test_single_lookup_by_either_slug(db, make_post):
    make_post("visa-guide", slug_ne="visa-guide-ne", title_ne="भिसा गाइड")
    service = QueryService(db)

    by_en = service.execute(build_single_query("visa-guide"))
    by_ne = service.execute(build_single_query("visa-guide-ne"))
    missing = service.execute(build_single_query("nope"))

    assert by_en.data["title_ne"] == "भिसा गाइड"
    assert by_ne.data["slug_en"] == "visa-guide"
    assert missing.ok and missing.data is None


def test_single_lookup_hides_drafts(db, make_post):
    make_post("unpublished", status="draft")
    assert QueryService(db).execute(build_single_query("unpublished")).data is None


def test_search_treats_wildcards_literally(db, make_post):
    make_post("discount", title_en="100% guaranteed visa")
    make_post("thousand", title_en="1000 guaranteed jobs")

    result = QueryService(db).execute(build_search_query(sanitize_search("100%")))

    assert [row["slug_en"] for row in result.data] == ["discount"]


def test_search_matches_nepali_excerpt(db, make_post):
    make_post("nepali", excerpt_ne="जर्मनी भिसा समाचार")
    result = QueryService(db).execute(build_search_query(sanitize_search("भिसा")))
    assert [row["slug_en"] for row in result.data] == ["nepali"]


def test_count_query(db, make_post):
    make_post("a")
    make_post("b")
    make_post("c", status="draft")
    service = QueryService(db)
    assert service.execute(build_count_query()).count == 3
    assert service.execute(build_count_query("published")).count == 2


def test_errors_are_reported_not_raised(db, make_post):
    make_post("existing")
    service = QueryService(db)

    unknown_table = service.execute(QuerySpec(table="comments"))
    unknown_column = service.execute(QuerySpec(table="posts", columns=("nope",)))
    bad_expression = service.execute(QuerySpec(table="posts", or_filter="title_en.like"))

    assert unknown_table.error.code == "invalid_query"
    assert unknown_column.error.code == "invalid_query"
    assert bad_expression.error.code == "invalid_query"
    assert unknown_table.data is None


def test_maybe_single_rejects_multiple_rows(db, make_post):
    make_post("one")
    make_post("two")
    result = QueryService(db).execute(QuerySpec(table="posts", maybe_single=True))
    assert result.error.code == "multiple_rows"


def test_offset_skips_rows_before_limit(db, make_post):
    for i in range(5):
        make_post(f"post-{i}", age_hours=i)

    spec = build_listing_query(ListingFilters(include_drafts=True, status=None, limit=2, offset=3))
    result = QueryService(db).execute(spec)

    assert spec.offset == 3
    assert [row["slug_en"] for row in result.data] == ["post-3", "post-4"]
