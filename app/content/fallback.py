"""Fallback selection between live query results and static content."""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Union

from pydantic import BaseModel

from app.schemas.page import ContentSource
from app.schemas.query import BackendError, QueryResult

logger = logging.getLogger(__name__)


class FallbackPolicy(str, Enum):
    """When a successful-but-thin result still counts as unavailable."""
    # Homepage: a failed query or a null result set
    ERROR_OR_NULL = "error_or_null"
    # News ticker: as above, and also an empty result set
    ERROR_NULL_OR_EMPTY = "error_null_or_empty"


class EffectiveResult(BaseModel):
    data: List[Any]
    source: ContentSource
    error: Optional[BackendError] = None

    @property
    def used_fallback(self) -> bool:
        return self.source == ContentSource.FALLBACK


def needs_fallback(result: QueryResult, policy: FallbackPolicy) -> bool:
    if result.error is not None or result.data is None:
        return True
    if policy == FallbackPolicy.ERROR_NULL_OR_EMPTY:
        return len(result.data) == 0
    return False


def with_fallback(
    live_result: QueryResult,
    static_fallback: Union[List[Any], Callable[[], List[Any]]],
    policy: FallbackPolicy = FallbackPolicy.ERROR_OR_NULL,
    view: str = "view",
) -> EffectiveResult:
    """
    Choose between ``live_result`` and ``static_fallback``.

    ``static_fallback`` may be a list or a zero-argument callable; it is only
    evaluated when substitution happens. Nothing is cached.
    """
    if not needs_fallback(live_result, policy):
        return EffectiveResult(data=list(live_result.data), source=ContentSource.LIVE)

    reason = live_result.error.message if live_result.error else "No data"
    logger.warning(f"[{view.upper()}] Fetch failed or no data, using fallback content. Error: {reason}")
    data = static_fallback() if callable(static_fallback) else static_fallback
    return EffectiveResult(data=list(data), source=ContentSource.FALLBACK, error=live_result.error)
