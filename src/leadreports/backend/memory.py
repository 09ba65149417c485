"""In-memory backend for demo/testing.

Holds tables as lists of dict rows and answers range queries the way
the hosted store does: backend order, inclusive end index, and a hard
cap of max_rows per request.
"""

from __future__ import annotations

import operator
import re
from typing import Any, Callable

from leadreports.backend.base import (
    MAX_ROWS_PER_REQUEST,
    BackendBase,
    BackendError,
    check_filter,
    parse_select,
)
from leadreports.models.domain import Row, RowFilter


def _like_to_regex(pattern: str, ignore_case: bool) -> re.Pattern[str]:
    """Translate a SQL LIKE pattern (% and _ wildcards) to a regex."""
    parts = []
    for ch in pattern:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile("".join(parts), flags | re.DOTALL)


def _compare(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    # SQL comparisons against NULL never match
    def matcher(actual: Any, expected: Any) -> bool:
        if actual is None or expected is None:
            return False
        try:
            return op(actual, expected)
        except TypeError as e:
            raise BackendError(f"Cannot compare {actual!r} with {expected!r}") from e

    return matcher


def _like(ignore_case: bool) -> Callable[[Any, Any], bool]:
    def matcher(actual: Any, expected: Any) -> bool:
        if actual is None:
            return False
        return _like_to_regex(str(expected), ignore_case).fullmatch(str(actual)) is not None

    return matcher


_MATCHERS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": _compare(operator.eq),
    "neq": _compare(operator.ne),
    "gt": _compare(operator.gt),
    "gte": _compare(operator.ge),
    "lt": _compare(operator.lt),
    "lte": _compare(operator.le),
    "like": _like(ignore_case=False),
    "ilike": _like(ignore_case=True),
    "is": lambda actual, expected: actual is expected or actual == expected,
    "in": lambda actual, expected: actual is not None and actual in expected,
}


def _matches(row: Row, row_filter: RowFilter) -> bool:
    actual = row.get(row_filter.column)
    if row_filter.is_not_null:
        return actual is not None
    return _MATCHERS[row_filter.operator](actual, row_filter.value)


class InMemoryBackend(BackendBase):
    """Backend over a dict of table name -> list of rows.

    Rows are schemaless: selecting a column a row lacks yields None,
    matching a nullable column in the hosted store.
    """

    def __init__(
        self,
        tables: dict[str, list[Row]] | None = None,
        max_rows: int = MAX_ROWS_PER_REQUEST,
    ):
        """Initialize in-memory backend.

        Args:
            tables: Initial table contents. Rows are copied.
            max_rows: Per-request row cap.
        """
        self.tables: dict[str, list[Row]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.max_rows = max_rows

    def insert(self, table: str, rows: list[Row]) -> None:
        """Append rows to a table, creating it if needed."""
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)

    def select_range(
        self,
        table: str,
        fields: str,
        start: int,
        end: int,
        row_filter: RowFilter | None = None,
    ) -> list[Row]:
        if table not in self.tables:
            raise BackendError(f"Unknown table: {table}")
        if start < 0 or end < start:
            raise BackendError(f"Invalid range: {start}-{end}")

        columns = parse_select(fields)
        rows = self.tables[table]

        if row_filter is not None:
            check_filter(row_filter)
            rows = [row for row in rows if _matches(row, row_filter)]

        limit = min(end - start + 1, self.max_rows)
        window = rows[start : start + limit]

        if columns is None:
            return [dict(row) for row in window]
        return [{column: row.get(column) for column in columns} for row in window]
