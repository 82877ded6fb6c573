from datetime import datetime, timezone

import pytest

from app.content.categories import CategoryRegistry
from app.content.fallback import FallbackPolicy, with_fallback
from app.content.mock_data import MOCK_POSTS
from app.schemas.page import ContentSource
from app.schemas.query import QueryResult
from app.services.pages import PageService, build_post_card

FIXED_NOW = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def _unused():
    raise AssertionError("fallback should not be evaluated")


def test_error_uses_fallback():
    effective = with_fallback(QueryResult.failure("timeout"), [{"id": "m"}], FallbackPolicy.ERROR_OR_NULL)
    assert effective.source == ContentSource.FALLBACK
    assert effective.used_fallback
    assert effective.data == [{"id": "m"}]
    assert effective.error.message == "timeout"


def test_null_uses_fallback():
    effective = with_fallback(QueryResult.success(None), lambda: [{"id": "m"}], FallbackPolicy.ERROR_OR_NULL)
    assert effective.source == ContentSource.FALLBACK
    assert effective.data == [{"id": "m"}]


def test_empty_success_depends_on_policy():
    empty = QueryResult.success([])
    assert with_fallback(empty, _unused, FallbackPolicy.ERROR_OR_NULL).source == ContentSource.LIVE
    assert with_fallback(empty, _unused, FallbackPolicy.ERROR_OR_NULL).data == []
    assert with_fallback(empty, lambda: [{"id": "m"}], FallbackPolicy.ERROR_NULL_OR_EMPTY).used_fallback


def test_live_data_is_passed_through():
    effective = with_fallback(QueryResult.success([{"id": "live"}]), _unused)
    assert effective.source == ContentSource.LIVE
    assert effective.data == [{"id": "live"}]


def test_mock_rows_are_fresh_copies():
    first = MOCK_POSTS.rows(now=FIXED_NOW)
    first[0]["title_en"] = "changed"
    first[0]["category"]["slug"] = "changed"
    second = MOCK_POSTS.rows(now=FIXED_NOW)
    assert second[0]["title_en"] != "changed"
    assert second[0]["category"]["slug"] == "study-abroad"
    assert second[1]["published_at"] == datetime(2026, 2, 28, 8, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("lang", ["en", "ne"])
def test_homepage_fallback_matches_fallback_cards(stub_queries, lang):
    queries = stub_queries(QueryResult.failure("backend down"), QueryResult.failure("backend down"))
    pages = PageService(queries, CategoryRegistry.default(), MOCK_POSTS, clock=lambda: FIXED_NOW)

    home = pages.home(lang)

    expected = [build_post_card(row, lang) for row in MOCK_POSTS.rows(now=FIXED_NOW)]
    assert home.source == ContentSource.FALLBACK
    assert home.featured == expected[0]
    assert home.recent == expected[1:7]
    assert home.nepal == []
    assert home.world == []
    assert home.ticker.source == ContentSource.FALLBACK
    assert home.ticker.items == expected


def test_ticker_falls_back_on_empty_but_homepage_does_not(stub_queries):
    queries = stub_queries(QueryResult.success([]), QueryResult.success([]))
    pages = PageService(queries, CategoryRegistry.default(), MOCK_POSTS, clock=lambda: FIXED_NOW)

    home = pages.home("en")

    assert home.source == ContentSource.LIVE
    assert home.featured is None
    assert home.ticker.source == ContentSource.FALLBACK
    assert len(home.ticker.items) == len(MOCK_POSTS)
