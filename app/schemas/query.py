"""Query contract shared by the query builders and the backend query service.

A ``QuerySpec`` describes one read against the datastore (table, projection,
predicates, ordering, limit, offset); the service answers with a ``QueryResult``
holding either ``data`` or an ``error``, never both.
"""

import re
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


_RELATION_RE = re.compile(r"^\s*(\w+)\s*:\s*(\w+)\s*\(([^)]*)\)\s*$")


class FilterOp(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    NOT_IN = "not_in"
    ILIKE = "ilike"


class Filter(BaseModel):
    """Single predicate. ``column`` may be ``<table>.<column>`` for a joined relation."""
    model_config = ConfigDict(frozen=True)

    column: str
    op: FilterOp
    value: Any = None


class RelationProjection(BaseModel):
    """Nested projection such as ``category:categories(slug,name_en,name_ne)``."""
    model_config = ConfigDict(frozen=True)

    alias: str
    table: str
    columns: Tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> "RelationProjection":
        match = _RELATION_RE.match(text)
        if not match:
            raise ValueError(f"Invalid relation projection: {text!r}")
        alias, table, columns = match.groups()
        cols = tuple(c.strip() for c in columns.split(",") if c.strip())
        return cls(alias=alias, table=table, columns=cols or ("*",))

    def render(self) -> str:
        return f"{self.alias}:{self.table}({','.join(self.columns)})"


class Ordering(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: str
    descending: bool = True


class QuerySpec(BaseModel):
    """Declarative read request understood by ``QueryService.execute``."""
    model_config = ConfigDict(frozen=True)

    table: str
    columns: Tuple[str, ...] = ("*",)
    relations: Tuple[RelationProjection, ...] = ()
    filters: Tuple[Filter, ...] = ()
    # Filter-expression DSL: "col.op.value,col.op.value" joined with OR
    or_filter: Optional[str] = None
    order: Optional[Ordering] = None
    limit: Optional[int] = None
    offset: int = 0
    maybe_single: bool = False
    count_only: bool = False

    def where(self, column: str, op: FilterOp, value: Any = None) -> "QuerySpec":
        """Return a copy with one more predicate."""
        return self.model_copy(
            update={"filters": self.filters + (Filter(column=column, op=op, value=value),)}
        )

    def filter_value(self, column: str, op: FilterOp = FilterOp.EQ) -> Any:
        for item in self.filters:
            if item.column == column and item.op == op:
                return item.value
        return None

    def select_clause(self) -> str:
        parts: List[str] = list(self.columns) + [r.render() for r in self.relations]
        return ",".join(parts)


class BackendError(BaseModel):
    message: str
    code: Optional[str] = None
    details: Optional[str] = None


class QueryResult(BaseModel):
    """``{data, error}`` pair returned by the backend query service."""

    data: Any = None
    error: Optional[BackendError] = None
    count: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any, count: Optional[int] = None) -> "QueryResult":
        return cls(data=data, count=count)

    @classmethod
    def failure(cls, message: str, code: Optional[str] = None, details: Optional[str] = None) -> "QueryResult":
        return cls(error=BackendError(message=message, code=code, details=details))
