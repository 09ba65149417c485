"""Lead source classification.

A lead is attributed to Facebook Ads when either WhatsApp Cloud ad
source field is set; everything else is "Indeterminado".
"""

from __future__ import annotations

from typing import Any

from leadreports.models.domain import Row
from leadreports.models.types import LeadDetail, LeadSourceReport, LeadSourceSummary

AD_SOURCE_URL_FIELD = "whatsapp cloud ad source url"
AD_SOURCE_ID_FIELD = "whatsapp cloud ad source id"

ATTRIBUTED = "Facebook Ads"
UNATTRIBUTED = "Indeterminado"


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def is_attributed(row: Row) -> bool:
    """Check whether a lead carries ad attribution."""
    return _is_set(row.get(AD_SOURCE_URL_FIELD)) or _is_set(row.get(AD_SOURCE_ID_FIELD))


def classify_lead_sources(rows: list[Row]) -> LeadSourceReport:
    """Classify every lead and count both classes.

    Args:
        rows: Leads with name, phone_number, created_at and both
            attribution fields.

    Returns:
        LeadSourceReport with per-lead detail in input order.
    """
    leads: list[LeadDetail] = []
    attributed = 0
    unattributed = 0

    for row in rows:
        if is_attributed(row):
            source = ATTRIBUTED
            attributed += 1
        else:
            source = UNATTRIBUTED
            unattributed += 1

        leads.append(
            LeadDetail(
                name=row.get("name"),
                phone_number=row.get("phone_number"),
                created_at=row.get("created_at"),
                source=source,
            )
        )

    summary = LeadSourceSummary(
        total_leads=attributed + unattributed,
        facebook_leads_count=attributed,
        other_leads_count=unattributed,
    )
    return LeadSourceReport(summary=summary, leads=leads)
