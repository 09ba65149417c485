"""Tag effectiveness aggregation."""

from __future__ import annotations

from leadreports.aggregation.common import has_tag, percentage, tag_list
from leadreports.models.domain import Row
from leadreports.models.types import TagEffectivenessRow


def compute_tag_effectiveness(
    rows: list[Row],
    tag_names: list[str],
    total_leads: int,
) -> list[TagEffectivenessRow]:
    """Count rows carrying each report tag.

    Percentages are relative to total_leads, the grand total of the
    agent performance report, not to len(rows).

    Args:
        rows: Rows carrying tags.
        tag_names: Report tags, in display order.
        total_leads: Denominator shared with the agent report.

    Returns:
        One TagEffectivenessRow per tag name.
    """
    result = []
    for tag_name in tag_names:
        count = sum(1 for row in rows if has_tag(row.get("tags"), tag_name))
        result.append(
            TagEffectivenessRow(
                tag=tag_name,
                leads=count,
                percentage=percentage(count, total_leads),
            )
        )
    return result


def unique_tags(rows: list[Row]) -> list[str]:
    """Distinct tag names across rows in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for tag in tag_list(row.get("tags")):
            seen.setdefault(tag, None)
    return list(seen)
