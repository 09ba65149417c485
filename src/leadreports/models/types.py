"""Pydantic models for the leadreports API.

Fields are snake_case in Python and serialized with camelCase aliases,
which is what the rendering layer reads.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

LeadSource = Literal["Facebook Ads", "Indeterminado"]


class CamelModel(BaseModel):
    """Base model serializing with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )


class UserInfo(CamelModel):
    """Identity passed through to the page."""

    id: str
    email: str | None = None


class AgentPerformanceRow(CamelModel):
    """Lead counts for one agent."""

    agent: str
    leads: int
    publico: int
    privado: int
    publico_porcentaje: int
    privado_porcentaje: int


class PieSlice(CamelModel):
    """One slice of the public/private chart."""

    label: str
    value: int
    percentage: int


class TagEffectivenessRow(CamelModel):
    """Leads carrying a report tag."""

    tag: str
    leads: int
    percentage: int


class LeadSourceSummary(CamelModel):
    """Counts of attributed and unattributed leads."""

    total_leads: int = 0
    facebook_leads_count: int = 0
    other_leads_count: int = 0


class LeadDetail(CamelModel):
    """A lead with its classified source."""

    name: str | None
    phone_number: str | None
    created_at: datetime | str | None
    source: LeadSource


class LeadSourceReport(CamelModel):
    """Source classification of every lead in a channel table."""

    summary: LeadSourceSummary = LeadSourceSummary()
    leads: list[LeadDetail] = []


class ChannelTarget(CamelModel):
    """Target vs actual figures for a digital channel."""

    canal: str
    meta: int
    ventas: int
    envios: int
    cumplimiento: int


class ReportPage(CamelModel):
    """Everything the report page renders."""

    user: UserInfo
    role: str
    canal: str
    data_table: str
    unique_agents: list[str]
    unique_tags: list[str]
    report_tag_names: list[str]
    agent_performance_table: list[AgentPerformanceRow]
    pie_chart_data: list[PieSlice]
    tag_effectiveness: list[TagEffectivenessRow]
    lead_sources: LeadSourceReport
    digital_channels_data: list[ChannelTarget]
    data_complete: bool
