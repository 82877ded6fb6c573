"""Backend query service: runs ``QuerySpec`` reads against the datastore.

Errors are reported in ``QueryResult.error`` instead of being raised, so
callers can decide between fallback content, an empty state or an error
state.
"""

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import ColumnElement, func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.models import Category, Post, PostCategory, Profile
from app.schemas.query import FilterOp, QueryResult, QuerySpec

logger = logging.getLogger(__name__)


TABLES = {
    "posts": Post,
    "categories": Category,
    "profiles": Profile,
    "post_categories": PostCategory,
}

# (parent table, related table) -> relationship attribute on the parent model
RELATIONSHIPS = {
    ("posts", "categories"): "category",
    ("posts", "profiles"): "author",
}

OR_OPERATORS = {"eq", "neq", "ilike"}

LIKE_ESCAPE = "\\"


class QueryContractError(ValueError):
    """Spec refers to an unknown table, column, relation or operator."""


class QueryService:
    """Executes declarative reads with the request's SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    # ----- Public API -----
    def execute(self, spec: QuerySpec) -> QueryResult:
        try:
            model = self._model(spec.table)
            stmt = select(model)
            joined: Dict[str, Any] = {}

            for item in spec.filters:
                column, stmt = self._filter_column(spec.table, model, item.column, stmt, joined)
                stmt = stmt.where(self._predicate(column, item.op, item.value))

            if spec.or_filter:
                stmt = stmt.where(or_(*self._parse_or_filter(model, spec.or_filter)))

            if spec.count_only:
                count = self.db.scalar(select(func.count()).select_from(stmt.subquery()))
                return QueryResult.success([], count=count or 0)

            for relation in spec.relations:
                attr = self._relationship(spec.table, relation.table)
                stmt = stmt.options(selectinload(getattr(model, attr)))

            if spec.order:
                column = self._column(model, spec.order.column)
                stmt = stmt.order_by(column.desc() if spec.order.descending else column.asc())

            if spec.maybe_single:
                stmt = stmt.limit(2)
            else:
                if spec.offset:
                    stmt = stmt.offset(spec.offset)
                if spec.limit is not None:
                    stmt = stmt.limit(spec.limit)

            rows = list(self.db.scalars(stmt).unique().all())
            data = [self._serialize(spec, row) for row in rows]
        except QueryContractError as e:
            logger.error(f"[QUERY] Invalid query on '{spec.table}': {e}")
            return QueryResult.failure(str(e), code="invalid_query")
        except SQLAlchemyError as e:
            logger.error(f"[QUERY] Query on '{spec.table}' failed: {e}")
            return QueryResult.failure("Database query failed", code="database_error", details=str(e.__class__.__name__))

        if spec.maybe_single:
            if len(data) > 1:
                return QueryResult.failure("Multiple rows returned for a single-row query", code="multiple_rows")
            return QueryResult.success(data[0] if data else None)
        return QueryResult.success(data)

    # ----- Resolution helpers -----
    def _model(self, table: str):
        model = TABLES.get(table)
        if model is None:
            raise QueryContractError(f"Unknown table '{table}'")
        return model

    def _relationship(self, table: str, related_table: str) -> str:
        attr = RELATIONSHIPS.get((table, related_table))
        if attr is None:
            raise QueryContractError(f"No relation from '{table}' to '{related_table}'")
        return attr

    @staticmethod
    def _column(model, name: str):
        column = model.__table__.columns.get(name)
        if column is None:
            raise QueryContractError(f"Unknown column '{name}' on '{model.__tablename__}'")
        return column

    def _filter_column(self, table: str, model, name: str, stmt, joined: Dict[str, Any]) -> Tuple[Any, Any]:
        """Resolve ``col`` or ``related_table.col``, inner-joining the relation once."""
        if "." not in name:
            return self._column(model, name), stmt
        related_table, column_name = name.split(".", 1)
        related_model = self._model(related_table)
        if related_table not in joined:
            attr = self._relationship(table, related_table)
            stmt = stmt.join(getattr(model, attr))
            joined[related_table] = related_model
        return self._column(related_model, column_name), stmt

    @staticmethod
    def _predicate(column, op: FilterOp, value: Any) -> ColumnElement:
        if op == FilterOp.EQ:
            return column == value
        if op == FilterOp.NEQ:
            return column != value
        if op == FilterOp.NOT_IN:
            values = list(value or ())
            # NOT IN () would exclude nothing anyway
            return column.not_in(values) if values else true()
        if op == FilterOp.ILIKE:
            return column.ilike(value, escape=LIKE_ESCAPE)
        raise QueryContractError(f"Unsupported operator '{op}'")

    def _parse_or_filter(self, model, expression: str) -> List[ColumnElement]:
        """
        Parse ``col.op.value,col.op.value``.

        Values end at the next comma; callers strip commas and parentheses
        from user input before building the expression.
        """
        predicates = []
        for term in expression.split(","):
            parts = term.split(".", 2)
            if len(parts) != 3:
                raise QueryContractError(f"Malformed filter term '{term}'")
            column_name, op, value = parts
            if op not in OR_OPERATORS:
                raise QueryContractError(f"Unsupported operator '{op}' in filter expression")
            column = self._column(model, column_name)
            predicates.append(self._predicate(column, FilterOp(op), value))
        if not predicates:
            raise QueryContractError("Empty filter expression")
        return predicates

    # ----- Serialization -----
    def _project(self, spec_columns, model, row) -> Dict[str, Any]:
        names = [c.name for c in model.__table__.columns] if "*" in spec_columns else list(spec_columns)
        projected = {}
        for name in names:
            self._column(model, name)
            projected[name] = getattr(row, name)
        return projected

    def _serialize(self, spec: QuerySpec, row) -> Dict[str, Any]:
        model = type(row)
        data = self._project(spec.columns, model, row)
        for relation in spec.relations:
            related = getattr(row, self._relationship(spec.table, relation.table))
            data[relation.alias] = (
                self._project(relation.columns, type(related), related) if related is not None else None
            )
        return data
