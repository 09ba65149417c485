"""Tests for report aggregations.

All aggregations are pure functions over fetched rows.
"""

import pytest

from leadreports.aggregation.agents import (
    build_pie_chart,
    compute_agent_performance,
    total_leads,
    unique_agent_names,
)
from leadreports.aggregation.common import has_tag, percentage, tag_list
from leadreports.aggregation.sources import classify_lead_sources, is_attributed
from leadreports.aggregation.tags import compute_tag_effectiveness, unique_tags

MAPPING = {"a@x.com": "Agent A", "b@x.com": "Agent B"}


class TestPercentage:
    """Test percentage rounding."""

    def test_zero_total_is_zero(self):
        assert percentage(0, 0) == 0
        assert percentage(5, 0) == 0

    @pytest.mark.parametrize(
        "part,total,expected",
        [(1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (4, 4, 100)],
    )
    def test_rounds_half_up(self, part, total, expected):
        assert percentage(part, total) == expected


class TestTagList:
    """Test tag normalization."""

    def test_list_passes_through(self):
        assert tag_list(["Gobierno", "Privado"]) == ["Gobierno", "Privado"]

    def test_comma_separated_string(self):
        assert tag_list("Gobierno, Cotización") == ["Gobierno", "Cotización"]

    @pytest.mark.parametrize("value", [None, "", [], 42])
    def test_empty_values(self, value):
        assert tag_list(value) == []

    def test_membership_is_exact(self):
        """A tag that merely contains the marker does not match."""
        assert has_tag(["Gobierno Federal"], "Gobierno") is False
        assert has_tag(["Gobierno Federal", "Gobierno"], "Gobierno") is True


class TestAgentPerformance:
    """Test per-agent grouping."""

    def test_public_private_split(self):
        """One public and one private lead give 50% each."""
        rows = [
            {"assigned_user": "a@x.com", "tags": ["Gobierno"]},
            {"assigned_user": "a@x.com", "tags": ["Privado"]},
        ]

        table = compute_agent_performance(rows, {"a@x.com": "Agent A"})

        assert len(table) == 1
        assert table[0].model_dump(by_alias=True) == {
            "agent": "Agent A",
            "leads": 2,
            "publico": 1,
            "privado": 1,
            "publicoPorcentaje": 50,
            "privadoPorcentaje": 50,
        }

    def test_skips_unassigned_rows(self):
        rows = [
            {"assigned_user": None, "tags": ["Gobierno"]},
            {"assigned_user": "", "tags": ["Gobierno"]},
            {"tags": ["Gobierno"]},
            {"assigned_user": "b@x.com", "tags": None},
        ]

        table = compute_agent_performance(rows, MAPPING)

        assert [(r.agent, r.leads, r.publico) for r in table] == [("Agent B", 1, 0)]
        assert table[0].publico_porcentaje == 0

    def test_groups_in_first_seen_order(self):
        rows = [
            {"assigned_user": "b@x.com", "tags": []},
            {"assigned_user": "a@x.com", "tags": []},
            {"assigned_user": "B@X.com", "tags": []},
        ]

        table = compute_agent_performance(rows, MAPPING)

        assert [(r.agent, r.leads) for r in table] == [("Agent B", 2), ("Agent A", 1)]

    def test_unmapped_email_groups_by_email(self):
        rows = [{"assigned_user": "new@x.com", "tags": ["Privado"]}]

        table = compute_agent_performance(rows, MAPPING)

        assert table[0].agent == "new@x.com"
        assert table[0].privado_porcentaje == 100

    def test_custom_markers(self):
        rows = [{"assigned_user": "a@x.com", "tags": ["Gov"]}]

        table = compute_agent_performance(rows, MAPPING, public_tag="Gov", private_tag="Biz")

        assert table[0].publico == 1

    def test_empty_rows(self):
        assert compute_agent_performance([], MAPPING) == []

    def test_idempotent(self):
        """Re-running on the same rows gives identical output."""
        rows = [
            {"assigned_user": "a@x.com", "tags": ["Gobierno"]},
            {"assigned_user": "b@x.com", "tags": ["Privado", "Gobierno"]},
            {"assigned_user": "a@x.com", "tags": "Privado"},
        ]

        first = [r.model_dump_json() for r in compute_agent_performance(rows, MAPPING)]
        second = [r.model_dump_json() for r in compute_agent_performance(rows, MAPPING)]

        assert first == second


class TestPieChart:
    """Test the public/private chart."""

    def test_slices_from_table(self):
        rows = [
            {"assigned_user": "a@x.com", "tags": ["Gobierno"]},
            {"assigned_user": "a@x.com", "tags": ["Gobierno"]},
            {"assigned_user": "b@x.com", "tags": ["Privado"]},
            {"assigned_user": "b@x.com", "tags": []},
        ]
        table = compute_agent_performance(rows, MAPPING)

        chart = build_pie_chart(table)

        assert total_leads(table) == 4
        assert [(s.label, s.value, s.percentage) for s in chart] == [
            ("Público", 2, 50),
            ("Privado", 1, 25),
        ]

    def test_empty_table_is_zeroed(self):
        chart = build_pie_chart([])
        assert [(s.value, s.percentage) for s in chart] == [(0, 0), (0, 0)]


class TestUniqueAgents:
    def test_distinct_names(self):
        rows = [
            {"assigned_user": "a@x.com"},
            {"assigned_user": None},
            {"assigned_user": "b@x.com"},
            {"assigned_user": "a@x.com"},
        ]
        assert unique_agent_names(rows, MAPPING) == ["Agent A", "Agent B"]


class TestTagEffectiveness:
    """Test per-tag counts."""

    def test_uses_cross_report_denominator(self):
        """Percentages are relative to total_leads, not to len(rows)."""
        rows = [
            {"tags": ["Cotización"]},
            {"tags": ["Cotización", "Gobierno"]},
            {"tags": None},
        ]

        result = compute_tag_effectiveness(rows, ["Cotización", "Gobierno"], total_leads=8)

        assert [(r.tag, r.leads, r.percentage) for r in result] == [
            ("Cotización", 2, 25),
            ("Gobierno", 1, 13),
        ]

    def test_zero_total_leads(self):
        result = compute_tag_effectiveness([{"tags": ["A"]}], ["A"], total_leads=0)
        assert result[0].leads == 1
        assert result[0].percentage == 0

    def test_keeps_tag_order_and_unknown_tags(self):
        result = compute_tag_effectiveness([], ["Z", "A"], total_leads=3)
        assert [(r.tag, r.leads) for r in result] == [("Z", 0), ("A", 0)]

    def test_unique_tags_flattened(self):
        rows = [{"tags": ["B", "A"]}, {"tags": "A, C"}, {"tags": None}]
        assert unique_tags(rows) == ["B", "A", "C"]


class TestLeadSources:
    """Test lead source classification."""

    def test_attributed_and_unattributed(self):
        rows = [
            {
                "name": "Lead 1",
                "phone_number": "111",
                "created_at": "2025-01-01",
                "whatsapp cloud ad source url": "https://fb.me/ad/1",
                "whatsapp cloud ad source id": None,
            },
            {
                "name": "Lead 2",
                "phone_number": "222",
                "created_at": "2025-01-02",
                "whatsapp cloud ad source url": "",
                "whatsapp cloud ad source id": "",
            },
        ]

        report = classify_lead_sources(rows)

        assert [lead.source for lead in report.leads] == ["Facebook Ads", "Indeterminado"]
        assert report.summary.total_leads == 2
        assert report.summary.facebook_leads_count == 1
        assert report.summary.other_leads_count == 1

    def test_id_alone_attributes(self):
        assert is_attributed({"whatsapp cloud ad source id": "123"}) is True

    def test_missing_fields_unattributed(self):
        assert is_attributed({"name": "x"}) is False

    def test_detail_fields_copied(self):
        report = classify_lead_sources(
            [{"name": "Lead 1", "phone_number": "111", "created_at": "2025-01-01"}]
        )
        detail = report.leads[0].model_dump(by_alias=True)
        assert detail == {
            "name": "Lead 1",
            "phoneNumber": "111",
            "createdAt": "2025-01-01",
            "source": "Indeterminado",
        }

    def test_numeric_detail_fields_become_text(self):
        report = classify_lead_sources([{"name": 12, "phone_number": 5551234}])

        assert (report.leads[0].name, report.leads[0].phone_number) == ("12", "5551234")

    def test_empty(self):
        report = classify_lead_sources([])
        assert report.leads == []
        assert report.summary.total_leads == 0

    def test_idempotent(self):
        rows = [{"name": "a", "whatsapp cloud ad source url": "u"}, {"name": "b"}]
        assert (
            classify_lead_sources(rows).model_dump_json()
            == classify_lead_sources(rows).model_dump_json()
        )
