import pytest

from app.content.related import select_related
from app.schemas.post import PostRecord
from app.schemas.query import FilterOp, QueryResult
from app.services.query_service import QueryService


def _rows(*ids):
    return [{"id": post_id, "title_en": post_id} for post_id in ids]


def test_same_category_then_backfill(stub_queries):
    source = PostRecord(id="src", category_id="cat-1")
    queries = stub_queries(
        QueryResult.success(_rows("src", "a", "b")),
        QueryResult.success(_rows("a", "c", "d")),
    )

    related = select_related(queries, source)

    assert [p.id for p in related] == ["a", "b", "c"]
    primary, backfill = queries.specs
    assert primary.filter_value("category_id") == "cat-1"
    assert primary.filter_value("id", FilterOp.NEQ) == "src"
    assert backfill.filter_value("id", FilterOp.NOT_IN) == ("a", "b", "src")
    assert backfill.limit == 1


def test_no_backfill_when_primary_is_full(stub_queries):
    queries = stub_queries(QueryResult.success(_rows("a", "b", "c")))
    related = select_related(queries, PostRecord(id="src", category_id="cat-1"))
    assert [p.id for p in related] == ["a", "b", "c"]
    assert len(queries.specs) == 1


def test_uncategorized_post_only_backfills(stub_queries):
    queries = stub_queries(QueryResult.success(_rows("x", "y")))
    related = select_related(queries, PostRecord(id="src"))
    assert [p.id for p in related] == ["x", "y"]
    assert len(queries.specs) == 1
    assert queries.specs[0].limit == 3


def test_failed_pass_contributes_nothing(stub_queries):
    queries = stub_queries(
        QueryResult.failure("connection reset"),
        QueryResult.success(_rows("src", "n1")),
    )
    related = select_related(queries, PostRecord(id="src", category_id="cat-1"))
    assert [p.id for p in related] == ["n1"]


def test_never_exceeds_desired_count(stub_queries):
    queries = stub_queries(QueryResult.success(_rows("a", "b", "c", "d", "e")))
    related = select_related(queries, PostRecord(id="src", category_id="cat-1"), desired_count=2)
    assert len(related) == 2
    assert select_related(queries, PostRecord(id="src"), desired_count=0) == []


@pytest.mark.parametrize("same_category", range(0, 5))
@pytest.mark.parametrize("other_posts", range(0, 5))
@pytest.mark.parametrize("desired_count", [1, 3])
def test_selection_over_live_datastore(db, make_category, make_post, same_category, other_posts, desired_count):
    visas = make_category("visas", "Visas")
    jobs = make_category("jobs", "Jobs")
    source = make_post("source", category=visas)
    for i in range(same_category):
        make_post(f"visa-{i}", category=visas, age_hours=i + 1)
    for i in range(other_posts):
        make_post(f"job-{i}", category=jobs if i % 2 else None, age_hours=i + 1)

    related = select_related(
        QueryService(db),
        PostRecord(id=source.id, category_id=visas.id),
        desired_count=desired_count,
    )

    ids = [p.id for p in related]
    assert source.id not in ids
    assert len(ids) == len(set(ids))
    assert len(ids) == min(desired_count, same_category + other_posts)
    primary = min(desired_count, same_category)
    assert all(p.category_id == visas.id for p in related[:primary])
