"""Builders for the post queries issued by page handlers.

Public listings are always bounded and always restricted to published posts;
only admin callers may ask for drafts.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from app.schemas.query import FilterOp, Ordering, QuerySpec, RelationProjection

POSTS_TABLE = "posts"
CATEGORIES_TABLE = "categories"

LISTING_LIMIT = 20
HOMEPAGE_LIMIT = 10
SECTION_TEASER_LIMIT = 4
TICKER_LIMIT = 5
SEARCH_LIMIT = 20
RELATED_LIMIT = 3
ADMIN_RECENT_LIMIT = 5
MAX_LISTING_LIMIT = 100
SITEMAP_LIMIT = 5000

PUBLISHED = "published"

POST_CARD_COLUMNS = (
    "id",
    "slug_en", "slug_ne",
    "title_en", "title_ne",
    "excerpt_en", "excerpt_ne",
    "featured_image",
    "published_at",
    "category_id",
)

CATEGORY_PROJECTION = RelationProjection.parse("category:categories(id,slug,name_en,name_ne)")
AUTHOR_PROJECTION = RelationProjection.parse("author:profiles(full_name)")

SEARCH_FIELDS = ("title_en", "title_ne", "excerpt_en", "excerpt_ne")

# Characters with structural meaning in the OR filter grammar
_DSL_RESERVED = re.compile(r"[,()]")


@dataclass(frozen=True)
class ListingFilters:
    status: Optional[str] = PUBLISHED
    category_slug: Optional[str] = None
    limit: int = LISTING_LIMIT
    offset: int = 0
    include_drafts: bool = False
    with_author: bool = False


def _bounded(limit: int) -> int:
    return max(1, min(int(limit), MAX_LISTING_LIMIT))


def build_listing_query(filters: ListingFilters = ListingFilters()) -> QuerySpec:
    """
    Compose a post listing query.

    Public listings (``include_drafts=False``) always filter on
    ``status=published`` whatever ``filters.status`` says, and are ordered by
    ``published_at`` descending. Admin listings order by ``created_at`` and
    only filter on status when one is given. The category filter applies to
    the joined category's slug.
    """
    relations = (CATEGORY_PROJECTION, AUTHOR_PROJECTION) if filters.with_author else (CATEGORY_PROJECTION,)

    if filters.include_drafts:
        spec = QuerySpec(
            table=POSTS_TABLE,
            columns=POST_CARD_COLUMNS + ("status", "created_at", "updated_at"),
            relations=relations,
            order=Ordering(column="created_at", descending=True),
            limit=_bounded(filters.limit),
            offset=max(0, int(filters.offset)),
        )
        if filters.status:
            spec = spec.where("status", FilterOp.EQ, filters.status)
    else:
        spec = QuerySpec(
            table=POSTS_TABLE,
            columns=POST_CARD_COLUMNS,
            relations=relations,
            filters=(),
            order=Ordering(column="published_at", descending=True),
            limit=_bounded(filters.limit),
        ).where("status", FilterOp.EQ, PUBLISHED)

    if filters.category_slug:
        spec = spec.where(f"{CATEGORIES_TABLE}.slug", FilterOp.EQ, filters.category_slug)
    return spec


def build_homepage_query() -> QuerySpec:
    return build_listing_query(ListingFilters(limit=HOMEPAGE_LIMIT, with_author=True))


def build_ticker_query() -> QuerySpec:
    return build_listing_query(ListingFilters(limit=TICKER_LIMIT))


def build_single_query(slug_or_id: str, by: str = "slug", include_drafts: bool = False) -> QuerySpec:
    """
    Look up one post, at most one row.

    ``by="slug"`` matches either language's slug; public lookups also
    require ``status=published``. ``by="id"`` is for the admin editor.
    """
    spec = QuerySpec(
        table=POSTS_TABLE,
        columns=("*",),
        relations=(CATEGORY_PROJECTION, AUTHOR_PROJECTION),
        maybe_single=True,
    )
    if by == "id":
        spec = spec.where("id", FilterOp.EQ, slug_or_id)
    elif by == "slug":
        # Slugs never contain the OR-list delimiters
        value = _DSL_RESERVED.sub("", slug_or_id or "")
        spec = spec.model_copy(update={"or_filter": f"slug_en.eq.{value},slug_ne.eq.{value}"})
    else:
        raise ValueError(f"Unknown lookup key: {by}")

    if not include_drafts:
        spec = spec.where("status", FilterOp.EQ, PUBLISHED)
    return spec


def build_search_query(sanitized_query: str, limit: int = SEARCH_LIMIT) -> QuerySpec:
    """OR/ILIKE over both languages' title and excerpt. Input must be sanitized."""
    pattern = f"%{sanitized_query}%"
    expression = ",".join(f"{field}.ilike.{pattern}" for field in SEARCH_FIELDS)
    return QuerySpec(
        table=POSTS_TABLE,
        columns=POST_CARD_COLUMNS,
        relations=(CATEGORY_PROJECTION, AUTHOR_PROJECTION),
        or_filter=expression,
        order=Ordering(column="published_at", descending=True),
        limit=_bounded(limit),
    ).where("status", FilterOp.EQ, PUBLISHED)


def build_same_category_query(category_id: str, exclude_id: str, limit: int) -> QuerySpec:
    """Primary related-posts pass."""
    return (
        QuerySpec(
            table=POSTS_TABLE,
            columns=POST_CARD_COLUMNS,
            relations=(CATEGORY_PROJECTION, AUTHOR_PROJECTION),
            order=Ordering(column="published_at", descending=True),
            limit=_bounded(limit),
        )
        .where("category_id", FilterOp.EQ, category_id)
        .where("status", FilterOp.EQ, PUBLISHED)
        .where("id", FilterOp.NEQ, exclude_id)
    )


def build_recent_excluding_query(exclude_ids: Iterable[str], limit: int) -> QuerySpec:
    """Backfill related-posts pass."""
    return (
        QuerySpec(
            table=POSTS_TABLE,
            columns=POST_CARD_COLUMNS,
            relations=(CATEGORY_PROJECTION, AUTHOR_PROJECTION),
            order=Ordering(column="published_at", descending=True),
            limit=_bounded(limit),
        )
        .where("status", FilterOp.EQ, PUBLISHED)
        .where("id", FilterOp.NOT_IN, tuple(exclude_ids))
    )


def build_sitemap_query() -> QuerySpec:
    """Slugs of the newest published posts, up to SITEMAP_LIMIT."""
    return QuerySpec(
        table=POSTS_TABLE,
        columns=("slug_en", "slug_ne", "updated_at"),
        order=Ordering(column="published_at", descending=True),
        limit=SITEMAP_LIMIT,
    ).where("status", FilterOp.EQ, PUBLISHED)


def build_count_query(status: Optional[str] = None) -> QuerySpec:
    spec = QuerySpec(table=POSTS_TABLE, count_only=True)
    if status:
        spec = spec.where("status", FilterOp.EQ, status)
    return spec
