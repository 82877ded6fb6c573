"""Bilingual content resolution: locale fields, category routes, post queries."""

from .locale import resolve_field, normalize_lang, translate, format_date, estimate_read_time
from .categories import CategoryInfo, CategoryRegistry, BreadcrumbItem
from .queries import ListingFilters, build_listing_query, build_single_query, build_search_query
from .related import select_related
from .fallback import FallbackPolicy, EffectiveResult, with_fallback
from .mock_data import MOCK_POSTS, MockPostSet
from .search import sanitize_search

__all__ = [
    "resolve_field",
    "normalize_lang",
    "translate",
    "format_date",
    "estimate_read_time",
    "CategoryInfo",
    "CategoryRegistry",
    "BreadcrumbItem",
    "ListingFilters",
    "build_listing_query",
    "build_single_query",
    "build_search_query",
    "select_related",
    "FallbackPolicy",
    "EffectiveResult",
    "with_fallback",
    "MOCK_POSTS",
    "MockPostSet",
    "sanitize_search",
]
