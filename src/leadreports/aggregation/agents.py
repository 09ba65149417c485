"""Agent performance aggregation.

Groups assigned leads by agent display name and counts how many are
tagged with the public and private markers. Pure functions only;
rows come from the paginated fetcher.
"""

from __future__ import annotations

from dataclasses import dataclass

from leadreports.aggregation.common import has_tag, percentage
from leadreports.config import DEFAULT_PRIVATE_TAG, DEFAULT_PUBLIC_TAG
from leadreports.directory import convert_email_to_name
from leadreports.models.domain import Row
from leadreports.models.types import AgentPerformanceRow, PieSlice


@dataclass
class AgentCounts:
    """Running counters for one agent."""

    total: int = 0
    publico: int = 0
    privado: int = 0


def compute_agent_performance(
    rows: list[Row],
    email_to_name: dict[str, str],
    public_tag: str = DEFAULT_PUBLIC_TAG,
    private_tag: str = DEFAULT_PRIVATE_TAG,
) -> list[AgentPerformanceRow]:
    """Compute per-agent lead counts and public/private shares.

    Rows without an assigned_user are skipped. Agents appear in the
    order they are first seen.

    Args:
        rows: Rows carrying assigned_user and tags.
        email_to_name: Agent directory mapping.
        public_tag: Tag marking a public-sector lead.
        private_tag: Tag marking a private-sector lead.

    Returns:
        One AgentPerformanceRow per agent.
    """
    stats: dict[str, AgentCounts] = {}

    for row in rows:
        name = convert_email_to_name(row.get("assigned_user"), email_to_name)
        if not name:
            continue

        counts = stats.setdefault(name, AgentCounts())
        counts.total += 1

        tags = row.get("tags")
        if has_tag(tags, public_tag):
            counts.publico += 1
        if has_tag(tags, private_tag):
            counts.privado += 1

    return [
        AgentPerformanceRow(
            agent=agent,
            leads=c.total,
            publico=c.publico,
            privado=c.privado,
            publico_porcentaje=percentage(c.publico, c.total),
            privado_porcentaje=percentage(c.privado, c.total),
        )
        for agent, c in stats.items()
    ]


def total_leads(table: list[AgentPerformanceRow]) -> int:
    """Sum of lead counts across the agent table."""
    return sum(row.leads for row in table)


def build_pie_chart(table: list[AgentPerformanceRow]) -> list[PieSlice]:
    """Build the two-slice public vs private chart from the agent table."""
    total = total_leads(table)
    publico = sum(row.publico for row in table)
    privado = sum(row.privado for row in table)

    return [
        PieSlice(label="Público", value=publico, percentage=percentage(publico, total)),
        PieSlice(label="Privado", value=privado, percentage=percentage(privado, total)),
    ]


def unique_agent_names(rows: list[Row], email_to_name: dict[str, str]) -> list[str]:
    """Distinct agent display names in first-seen order."""
    names: dict[str, None] = {}
    for row in rows:
        name = convert_email_to_name(row.get("assigned_user"), email_to_name)
        if name:
            names.setdefault(name, None)
    return list(names)
