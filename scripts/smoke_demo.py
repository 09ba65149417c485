#!/usr/bin/env python3
"""Smoke test for the demo database.

Loads the pymes report from the seeded demo database and checks that
pagination reached every lead and the aggregates agree.

Usage:
    python scripts/seed_demo.py
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from leadreports.auth import resolve_user  # noqa: E402
from leadreports.backend.sql import SqlBackend  # noqa: E402
from leadreports.config import Settings  # noqa: E402
from leadreports.db.schema import PymesLead  # noqa: E402
from leadreports.db.session import get_db_session, get_engine  # noqa: E402
from leadreports.models.types import ReportPage  # noqa: E402
from leadreports.reports.loader import load_report  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_USER_ID = "demo-user"


def check_database_exists() -> bool:
    """Check that demo database exists."""
    if not DEMO_DB_PATH.exists():
        print(f"FAIL: Demo database not found: {DEMO_DB_PATH}")
        return False
    print(f"OK: Database exists: {DEMO_DB_PATH}")
    return True


def check_all_leads_fetched(report: ReportPage) -> bool:
    """Check that the source report covers every stored lead."""
    with get_db_session(DEMO_DB_PATH) as session:
        stored = session.query(PymesLead).count()

    fetched = report.lead_sources.summary.total_leads
    if fetched != stored:
        print(f"FAIL: Fetched {fetched} leads, database holds {stored}")
        return False
    print(f"OK: All {stored} leads fetched across pages")
    return True


def check_aggregates_consistent(report: ReportPage) -> bool:
    """Check that chart and table totals agree."""
    ok = True
    table_publico = sum(row.publico for row in report.agent_performance_table)
    chart_publico = next(
        (s.value for s in report.pie_chart_data if s.label == "Público"), None
    )
    if table_publico != chart_publico:
        print(f"FAIL: Table público {table_publico} != chart {chart_publico}")
        ok = False
    else:
        print(f"OK: Público total {table_publico} matches chart")

    summary = report.lead_sources.summary
    if summary.facebook_leads_count + summary.other_leads_count != summary.total_leads:
        print("FAIL: Source summary counts do not add up")
        ok = False
    else:
        print(
            f"OK: {summary.facebook_leads_count} Facebook Ads, "
            f"{summary.other_leads_count} Indeterminado"
        )

    if not report.data_complete:
        print("FAIL: Report flagged as incomplete")
        ok = False
    return ok


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Lead Reports Demo Smoke Test")
    print("=" * 60)

    if not check_database_exists():
        return 1

    backend = SqlBackend(get_engine(DEMO_DB_PATH))
    settings = Settings(db_path=DEMO_DB_PATH)

    user = resolve_user(backend, DEMO_USER_ID)
    print(f"OK: Resolved {user.user_id} with role {user.role}")

    report = load_report(backend, user, "pymes", settings)

    checks = [check_all_leads_fetched(report), check_aggregates_consistent(report)]

    print()
    print("=" * 60)
    print(f"Checks passed: {sum(checks)}/{len(checks)}")
    return 0 if all(checks) else 1


if __name__ == "__main__":
    sys.exit(main())
