"""Helpers shared by the report aggregations."""

from __future__ import annotations

import math
from typing import Any


def percentage(part: int, total: int) -> int:
    """Whole-number percentage of part in total, rounding halves up.

    A total of zero (or less) yields 0 rather than a division error.
    """
    if total <= 0:
        return 0
    return math.floor(part / total * 100 + 0.5)


def tag_list(value: Any) -> list[str]:
    """Normalize a row's tags value to a list of tag names.

    The hosted store returns tags as an array; older rows hold a
    comma-separated string. Missing or empty values mean no tags.
    """
    if not value:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, (list, tuple)):
        return [str(t) for t in value if t is not None and str(t) != ""]
    return []


def has_tag(value: Any, tag: str) -> bool:
    """Exact membership of tag in a tag value (list or comma string)."""
    return tag in tag_list(value)
