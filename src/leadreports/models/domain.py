"""Domain models for leadreports.

Pure Python dataclasses for values passed between the backend,
the paginated fetcher and the report loader. Rows themselves stay
untyped mappings since their shape depends on the field selection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# A record from a remote collection. Shape follows the field selection.
Row = dict[str, Any]


# ============================================================================
# Query Domain
# ============================================================================

NOT_OPERATOR = "not"


@dataclass(frozen=True)
class RowFilter:
    """Single-column filter applied to every page of a fetch.

    Operator "not" with a None value is the "not null" shorthand;
    every other operator is passed to the backend as-is.
    """

    column: str
    operator: str
    value: Any = None

    @classmethod
    def not_null(cls, column: str) -> RowFilter:
        """Build a filter keeping rows where column is not null."""
        return cls(column=column, operator=NOT_OPERATOR, value=None)

    @property
    def is_not_null(self) -> bool:
        return self.operator == NOT_OPERATOR and self.value is None


@dataclass
class FetchResult:
    """Accumulated rows of a paginated fetch.

    complete is False when the loop stopped on a backend error or on
    the page bound, so callers can tell a small dataset from a
    truncated one.
    """

    table: str
    rows: list[Row] = field(default_factory=list)
    pages: int = 0
    complete: bool = True
    error: str | None = None


# ============================================================================
# Session Domain
# ============================================================================


@dataclass(frozen=True)
class SessionUser:
    """Authenticated user with the role resolved from user_roles."""

    user_id: str
    role: str
    email: str | None = None
