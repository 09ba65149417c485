"""Report page loader.

Runs the whole pipeline for one page load:
1. Fan out the four collaborators (agent rows, tag rows, report tag
   names, agent directory) on a thread pool and wait for all of them
2. Derive agent performance, pie chart and tag effectiveness
3. Fetch every lead of the channel table and classify its source
4. Assemble the ReportPage

Any exception is caught once here and replaced by empty_report().
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from leadreports.aggregation.agents import (
    build_pie_chart,
    compute_agent_performance,
    total_leads,
    unique_agent_names,
)
from leadreports.aggregation.sources import classify_lead_sources
from leadreports.aggregation.tags import compute_tag_effectiveness, unique_tags
from leadreports.backend.base import BackendBase
from leadreports.config import CHANNEL_TABLES, DEFAULT_CHANNEL, Settings, table_for_channel
from leadreports.directory import get_email_to_name_mapping
from leadreports.models.domain import SessionUser
from leadreports.models.types import (
    ChannelTarget,
    LeadSourceReport,
    ReportPage,
    UserInfo,
)
from leadreports.pagination.fetcher import (
    get_all_agent_data,
    get_all_leads,
    get_all_tags_data,
    get_report_tag_names,
)

logger = logging.getLogger(__name__)

# Illustrative targets per digital channel, not backed by data
DIGITAL_CHANNEL_TARGETS = [
    ChannelTarget(canal="Facebook Ads", meta=150, ventas=120, envios=135, cumplimiento=80),
    ChannelTarget(canal="Email", meta=200, ventas=180, envios=195, cumplimiento=90),
    ChannelTarget(canal="SMS", meta=100, ventas=85, envios=95, cumplimiento=85),
    ChannelTarget(canal="WhatsApp", meta=80, ventas=75, envios=78, cumplimiento=94),
    ChannelTarget(canal="LinkedIn", meta=60, ventas=45, envios=50, cumplimiento=75),
    ChannelTarget(canal="Google Ads", meta=120, ventas=110, envios=115, cumplimiento=92),
]


def _user_info(user: SessionUser) -> UserInfo:
    return UserInfo(id=user.user_id, email=user.email)


def empty_report(user: SessionUser) -> ReportPage:
    """Safe all-empty page returned when the pipeline fails."""
    return ReportPage(
        user=_user_info(user),
        role=user.role,
        canal=DEFAULT_CHANNEL,
        data_table=CHANNEL_TABLES[DEFAULT_CHANNEL],
        unique_agents=[],
        unique_tags=[],
        report_tag_names=[],
        agent_performance_table=[],
        pie_chart_data=[],
        tag_effectiveness=[],
        lead_sources=LeadSourceReport(),
        digital_channels_data=[],
        data_complete=False,
    )


def build_report(
    backend: BackendBase,
    user: SessionUser,
    canal: str,
    settings: Settings,
) -> ReportPage:
    """Fetch and aggregate the report for a channel.

    Exceptions propagate; load_report() is the error boundary.
    """
    data_table = table_for_channel(canal)
    logger.info(f"Loading reports for channel {canal} from {data_table}")

    paging = {"page_size": settings.page_size, "max_pages": settings.max_pages}

    with ThreadPoolExecutor(max_workers=settings.fetch_workers) as executor:
        agents_future = executor.submit(get_all_agent_data, backend, data_table, **paging)
        tags_future = executor.submit(get_all_tags_data, backend, data_table, **paging)
        report_tags_future = executor.submit(get_report_tag_names, backend, **paging)
        mapping_future = executor.submit(get_email_to_name_mapping, backend, **paging)

        agents = agents_future.result()
        tags = tags_future.result()
        report_tags = report_tags_future.result()
        email_to_name, directory = mapping_future.result()

    report_tag_names = [
        str(row["tag_name"])
        for row in report_tags.rows
        if row.get("tag_name") not in (None, "")
    ]
    logger.info(
        f"Fetched {len(agents.rows)} agent rows, {len(tags.rows)} tag rows, "
        f"{len(report_tag_names)} report tags"
    )

    agent_table = compute_agent_performance(
        agents.rows,
        email_to_name,
        public_tag=settings.public_tag,
        private_tag=settings.private_tag,
    )
    pie_chart = build_pie_chart(agent_table)
    tag_effectiveness = compute_tag_effectiveness(
        tags.rows, report_tag_names, total_leads(agent_table)
    )
    logger.info(f"Agent report: {len(agent_table)} agents, chart {pie_chart}")

    leads = get_all_leads(backend, data_table, **paging)
    lead_sources = classify_lead_sources(leads.rows)
    logger.info(f"Lead source summary: {lead_sources.summary}")

    complete = all(
        r.complete for r in (agents, tags, report_tags, directory, leads)
    )
    if not complete:
        logger.warning(f"Report for {data_table} built from incomplete data")

    return ReportPage(
        user=_user_info(user),
        role=user.role,
        canal=canal,
        data_table=data_table,
        unique_agents=unique_agent_names(agents.rows, email_to_name),
        unique_tags=unique_tags(tags.rows),
        report_tag_names=report_tag_names,
        agent_performance_table=agent_table,
        pie_chart_data=pie_chart,
        tag_effectiveness=tag_effectiveness,
        lead_sources=lead_sources,
        digital_channels_data=list(DIGITAL_CHANNEL_TARGETS),
        data_complete=complete,
    )


def load_report(
    backend: BackendBase,
    user: SessionUser,
    canal: str | None = None,
    settings: Settings | None = None,
) -> ReportPage:
    """Load the report page, degrading to an empty page on any error.

    Args:
        backend: Backend to read from.
        user: Resolved session user.
        canal: Channel selector; defaults to "pymes".
        settings: Settings; defaults to Settings().

    Returns:
        ReportPage, empty when the pipeline raised.
    """
    if settings is None:
        settings = Settings()

    try:
        return build_report(backend, user, canal or DEFAULT_CHANNEL, settings)
    except Exception:
        logger.exception("Error loading reports")
        return empty_report(user)
