"""Database schema for leadreports.

Mirrors the hosted collections the reports read. Both channel tables
share the lead columns; attribution columns keep their
spaced names so field selections match the hosted store.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class LeadColumnsMixin:
    """Columns shared by every channel lead table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    assigned_user: Mapped[str | None] = mapped_column(String(256), nullable=True)
    source: Mapped[str | None] = mapped_column(String(64), nullable=True)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True)
    ad_source_url: Mapped[str | None] = mapped_column(
        "whatsapp cloud ad source url", String(512), nullable=True
    )
    ad_source_id: Mapped[str | None] = mapped_column(
        "whatsapp cloud ad source id", String(128), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )


class PymesLead(LeadColumnsMixin, Base):
    """Leads of the pymes channel."""

    __tablename__ = "pymes_data"


class DigitalLead(LeadColumnsMixin, Base):
    """Leads of the digital channels."""

    __tablename__ = "canales_digitales_data"


class ReportTag(Base):
    """Tag names tracked by the tag effectiveness report."""

    __tablename__ = "report_tags_collection"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tag_name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)


class AgentDirectoryEntry(Base):
    """Display name for an agent email."""

    __tablename__ = "agent_directory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)


class UserRole(Base):
    """Role granted to an authenticated user."""

    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
