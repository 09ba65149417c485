#!/usr/bin/env python3
"""Seed the demo database with leads for both channels.

Creates more than one backend page of pymes leads so the demo report
exercises pagination.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Seeds the agent directory, report tags and a demo user role
3. Seeds pymes and digital channel leads with deterministic tags
"""

from __future__ import annotations

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from leadreports.db.schema import (  # noqa: E402
    AgentDirectoryEntry,
    DigitalLead,
    PymesLead,
    ReportTag,
    UserRole,
)
from leadreports.db.session import get_db_session, init_db  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_USER_ID = "demo-user"

DEMO_AGENTS = {
    "ana.ruiz@example.com": "Ana Ruiz",
    "luis.mora@example.com": "Luis Mora",
    "carla.diaz@example.com": "Carla Díaz",
}
DEMO_REPORT_TAGS = ["Gobierno", "Privado", "Cotización", "Venta cerrada"]

# Leads per channel; pymes spans three backend pages
DEMO_LEAD_COUNTS = {PymesLead: 2350, DigitalLead: 420}
DEMO_SEED = 42


def build_leads(model, count: int, rng: random.Random) -> list:
    """Build deterministic demo leads for a channel table."""
    agents = list(DEMO_AGENTS) + [None]
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    leads = []

    for i in range(count):
        tags = [rng.choice(["Gobierno", "Privado"])]
        if rng.random() < 0.3:
            tags.append(rng.choice(DEMO_REPORT_TAGS[2:]))

        attributed = rng.random() < 0.4
        leads.append(
            model(
                name=f"Lead {i + 1}",
                phone_number=f"+52155{i:06d}",
                assigned_user=rng.choice(agents),
                source="whatsapp",
                tags=tags,
                ad_source_url=f"https://fb.me/ad/{i}" if attributed else None,
                ad_source_id=None,
                created_at=start + timedelta(hours=i),
            )
        )
    return leads


def seed_database() -> None:
    """Seed the demo database, skipping if already seeded."""
    init_db(DEMO_DB_PATH)
    rng = random.Random(DEMO_SEED)

    with get_db_session(DEMO_DB_PATH) as session:
        existing = session.query(UserRole).filter(UserRole.user_id == DEMO_USER_ID).first()
        if existing:
            print(f"Demo database already seeded: {DEMO_DB_PATH}")
            return

        print("Creating user role...")
        session.add(UserRole(user_id=DEMO_USER_ID, role="admin"))

        print("Creating agent directory...")
        for email, name in DEMO_AGENTS.items():
            session.add(AgentDirectoryEntry(email=email, name=name))

        print("Creating report tags...")
        for tag in DEMO_REPORT_TAGS:
            session.add(ReportTag(tag_name=tag))

        for model, count in DEMO_LEAD_COUNTS.items():
            print(f"Creating {count} leads in {model.__tablename__}...")
            session.add_all(build_leads(model, count, rng))

    print(f"Seeded: {DEMO_DB_PATH}")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Lead Reports Demo Seeder")
    print("=" * 60)

    seed_database()

    print()
    print("Demo seeded. Run: python scripts/smoke_demo.py")
    return 0


if __name__ == "__main__":
    sys.exit(main())
