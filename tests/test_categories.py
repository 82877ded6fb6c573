import pytest

from app.content.categories import CategoryRegistry
from app.core.exceptions import CategoryNotFound


@pytest.fixture
def registry():
    return CategoryRegistry.default()


def test_registry_has_every_route(registry):
    assert len(registry) == 22
    assert "nepal/politics" in registry
    assert "media/listen" in registry


def test_resolve_subcategory(registry):
    info = registry.resolve(["nepal", "politics"])
    assert info.path == "nepal/politics"
    assert info.query_slug == "politics"
    assert info.parent_slug == "nepal"
    assert info.display_name("ne") == "राजनीति"


def test_resolve_is_exact_match(registry):
    with pytest.raises(CategoryNotFound):
        registry.resolve(["nepal", "unknown"])
    with pytest.raises(CategoryNotFound):
        registry.resolve(["nepal", "politics", "extra"])


def test_media_entries_are_flagged(registry):
    assert registry.resolve(["media"]).is_media
    assert registry.resolve(["media", "watch"]).is_media
    assert not registry.resolve(["world"]).is_media


def test_breadcrumb_for_subcategory(registry):
    crumbs = registry.breadcrumb(registry.resolve(["nepal", "politics"]), "en")
    assert [c.label for c in crumbs] == ["Home", "Nepal", "Politics"]
    assert [c.href for c in crumbs] == ["/en", "/en/nepal", None]

    crumbs_ne = registry.breadcrumb(registry.resolve(["world", "asia"]), "ne")
    assert [c.label for c in crumbs_ne] == ["गृहपृष्ठ", "विश्व", "एशिया"]


def test_no_breadcrumb_for_top_level(registry):
    assert registry.breadcrumb(registry.resolve(["economy"]), "en") == []


def test_registry_rejects_unknown_parent():
    from app.content.categories import CategoryInfo

    with pytest.raises(ValueError):
        CategoryRegistry([CategoryInfo("a/b", "B", "बी", parent_slug="a")])
