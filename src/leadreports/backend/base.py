"""Base backend interface.

A backend is the narrow data-access collaborator for the hosted
relational store: `select_range(table, fields, start, end, filter) -> rows`.
It returns at most `max_rows` rows per call, which is why callers
go through the paginated fetcher.

Backends must NOT:
- Loop over pages (that is the fetcher's job)
- Aggregate or shape report output
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from leadreports.models.domain import Row, RowFilter

# Hard cap the hosted backend applies to every request
MAX_ROWS_PER_REQUEST = 1000

SUPPORTED_OPERATORS = frozenset(
    {"eq", "neq", "gt", "gte", "lt", "lte", "like", "ilike", "is", "in"}
)


class BackendError(Exception):
    """Raised for any transport or query failure in a backend."""


def parse_select(fields: str) -> list[str] | None:
    """Parse a field-selection string into column names.

    Columns are comma-separated and may be double-quoted, which allows
    names containing spaces.

    Args:
        fields: Selection such as 'name, "whatsapp cloud ad source url"'.

    Returns:
        Column names in order, or None for "*" (all columns).

    Raises:
        BackendError: If the selection is empty or malformed.
    """
    fields = fields.strip()
    if fields == "*":
        return None

    columns: list[str] = []
    for part in fields.split(","):
        name = part.strip()
        if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
            name = name[1:-1]
        if not name or '"' in name:
            raise BackendError(f"Invalid field selection: {fields!r}")
        columns.append(name)
    return columns


def check_filter(row_filter: RowFilter) -> None:
    """Validate a filter before it reaches the query layer.

    Raises:
        BackendError: If the operator is not supported.
    """
    if row_filter.is_not_null:
        return
    if row_filter.operator not in SUPPORTED_OPERATORS:
        raise BackendError(f"Unsupported filter operator: {row_filter.operator!r}")
    if row_filter.operator == "in" and not isinstance(row_filter.value, (list, tuple)):
        raise BackendError("Operator 'in' expects a list value")


class BackendBase(ABC):
    """Abstract base class for row backends."""

    max_rows: int = MAX_ROWS_PER_REQUEST

    @abstractmethod
    def select_range(
        self,
        table: str,
        fields: str,
        start: int,
        end: int,
        row_filter: RowFilter | None = None,
    ) -> list[Row]:
        """Select rows in the inclusive index window [start, end].

        Args:
            table: Collection name.
            fields: Field-selection string ("*" for all columns).
            start: Zero-based offset of the first row.
            end: Inclusive index of the last row.
            row_filter: Optional single-column filter.

        Returns:
            Rows in backend order, never more than max_rows.

        Raises:
            BackendError: On unknown table/column, bad filter or transport failure.
        """
        pass
