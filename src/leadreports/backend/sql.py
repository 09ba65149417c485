"""SQLAlchemy-backed row backend.

Answers range queries against the tables declared in db.schema with
the same contract as the hosted store: rows ordered by primary key,
inclusive end index, at most max_rows per request.
"""

from __future__ import annotations

import logging

from sqlalchemy import Column, Engine, MetaData, Table, select
from sqlalchemy.exc import SQLAlchemyError

from leadreports.backend.base import (
    MAX_ROWS_PER_REQUEST,
    BackendBase,
    BackendError,
    check_filter,
    parse_select,
)
from leadreports.db.schema import Base
from leadreports.models.domain import Row, RowFilter

logger = logging.getLogger(__name__)


def _filter_clause(column: Column, row_filter: RowFilter):
    """Translate a RowFilter into a SQL expression on column."""
    if row_filter.is_not_null:
        return column.is_not(None)

    op = row_filter.operator
    value = row_filter.value
    if op == "eq":
        return column == value
    if op == "neq":
        return column != value
    if op == "gt":
        return column > value
    if op == "gte":
        return column >= value
    if op == "lt":
        return column < value
    if op == "lte":
        return column <= value
    if op == "like":
        return column.like(value)
    if op == "ilike":
        return column.ilike(value)
    if op == "is":
        return column.is_(value)
    if op == "in":
        return column.in_(list(value))
    raise BackendError(f"Unsupported filter operator: {op!r}")


class SqlBackend(BackendBase):
    """Backend reading the declared tables through a SQLAlchemy engine."""

    def __init__(
        self,
        engine: Engine,
        metadata: MetaData | None = None,
        max_rows: int = MAX_ROWS_PER_REQUEST,
    ):
        """Initialize SQL backend.

        Args:
            engine: Engine bound to the database holding the tables.
            metadata: Table definitions. Defaults to the leadreports schema.
            max_rows: Per-request row cap.
        """
        self.engine = engine
        self.metadata = metadata if metadata is not None else Base.metadata
        self.max_rows = max_rows

    def _table(self, name: str) -> Table:
        table = self.metadata.tables.get(name)
        if table is None:
            raise BackendError(f"Unknown table: {name}")
        return table

    def _columns(self, table: Table, fields: str) -> list[Column]:
        names = parse_select(fields)
        if names is None:
            return list(table.columns)

        columns = []
        for name in names:
            if name not in table.c:
                raise BackendError(f"Unknown column {name!r} in table {table.name}")
            columns.append(table.c[name])
        return columns

    def select_range(
        self,
        table: str,
        fields: str,
        start: int,
        end: int,
        row_filter: RowFilter | None = None,
    ) -> list[Row]:
        if start < 0 or end < start:
            raise BackendError(f"Invalid range: {start}-{end}")

        tbl = self._table(table)
        stmt = select(*self._columns(tbl, fields))

        if row_filter is not None:
            check_filter(row_filter)
            if row_filter.column not in tbl.c:
                raise BackendError(
                    f"Unknown column {row_filter.column!r} in table {tbl.name}"
                )
            stmt = stmt.where(_filter_clause(tbl.c[row_filter.column], row_filter))

        limit = min(end - start + 1, self.max_rows)
        stmt = stmt.order_by(*tbl.primary_key.columns).offset(start).limit(limit)

        try:
            with self.engine.connect() as conn:
                result = conn.execute(stmt)
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as e:
            logger.debug(f"Query on {table} failed: {e}")
            raise BackendError(f"Query on {table} failed: {e}") from e
