"""Shared pytest fixtures for leadreports tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from leadreports.backend.memory import InMemoryBackend
from leadreports.db.schema import Base


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def report_tables():
    """Minimal tables for a full report load."""
    return {
        "pymes_data": [
            {
                "assigned_user": "a@x.com",
                "tags": ["Gobierno"],
                "name": "Lead 1",
                "phone_number": "111",
                "created_at": "2025-01-01T00:00:00",
                "whatsapp cloud ad source url": "https://fb.me/ad/1",
                "whatsapp cloud ad source id": None,
            },
            {
                "assigned_user": "a@x.com",
                "tags": ["Privado", "Cotización"],
                "name": "Lead 2",
                "phone_number": "222",
                "created_at": "2025-01-02T00:00:00",
                "whatsapp cloud ad source url": "",
                "whatsapp cloud ad source id": None,
            },
            {
                "assigned_user": None,
                "tags": [],
                "name": "Lead 3",
                "phone_number": "333",
                "created_at": "2025-01-03T00:00:00",
            },
        ],
        "canales_digitales_data": [
            {"assigned_user": "b@x.com", "tags": ["Privado"], "name": "Digital 1"},
        ],
        "report_tags_collection": [{"tag_name": "Cotización"}, {"tag_name": "Gobierno"}],
        "agent_directory": [
            {"email": "a@x.com", "name": "Agent A"},
            {"email": "b@x.com", "name": "Agent B"},
        ],
        "user_roles": [
            {"user_id": "user-1", "role": "admin"},
            {"user_id": "user-2", "role": None},
        ],
    }


@pytest.fixture
def memory_backend(report_tables):
    """In-memory backend seeded with report_tables."""
    return InMemoryBackend(report_tables)
