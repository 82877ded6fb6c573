"""Related-article selection for the article detail page."""

import logging
from typing import List, Protocol

from app.content.queries import (
    RELATED_LIMIT,
    build_recent_excluding_query,
    build_same_category_query,
)
from app.schemas.post import PostRecord
from app.schemas.query import QueryResult, QuerySpec

logger = logging.getLogger(__name__)


class QueryRunner(Protocol):
    def execute(self, spec: QuerySpec) -> QueryResult: ...


def _records(result: QueryResult, stage: str) -> List[PostRecord]:
    if not result.ok:
        logger.warning(f"[RELATED] {stage} pass failed: {result.error.message}")
        return []
    return [PostRecord.model_validate(row) for row in (result.data or [])]


def select_related(
    queries: QueryRunner,
    source_post: PostRecord,
    desired_count: int = RELATED_LIMIT,
) -> List[PostRecord]:
    """
    Pick up to ``desired_count`` published posts related to ``source_post``.

    Same-category posts come first; if there are too few, the newest other
    posts fill the remaining slots. The backfill pass runs after the primary
    pass because it excludes what the primary pass selected. The result never
    contains the source post or a duplicate id, and may be shorter than
    ``desired_count`` on small sites.
    """
    if desired_count <= 0:
        return []

    selected: List[PostRecord] = []
    seen = {source_post.id}

    def take(records: List[PostRecord]) -> None:
        for record in records:
            if len(selected) >= desired_count:
                return
            if record.id in seen:
                continue
            seen.add(record.id)
            selected.append(record)

    if source_post.category_id:
        primary = queries.execute(
            build_same_category_query(source_post.category_id, source_post.id, desired_count)
        )
        take(_records(primary, "same-category"))

    missing = desired_count - len(selected)
    if missing > 0:
        backfill = queries.execute(build_recent_excluding_query(sorted(seen), missing))
        take(_records(backfill, "backfill"))

    return selected
