"""Database engine and session management.

Provides cached engines for the SQLite store behind SqlBackend, with
thread-safety settings for the loader's concurrent fetches.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from leadreports.db.schema import Base

# Default database path
DEFAULT_DB_PATH = Path("data/leadreports.db")

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}


def get_engine(db_path: Path | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by resolved db_path. Subsequent calls with the
    same path return the cached engine.

    Uses the default connection pool with check_same_thread=False so each
    fan-out thread of a report load checks out its own SQLite connection.

    Args:
        db_path: Path to SQLite database file. Defaults to data/leadreports.db.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if db_path is None:
        db_path = DEFAULT_DB_PATH

    db_path = Path(db_path)
    cache_key = str(db_path.resolve())

    if cache_key in _engine_cache:
        return _engine_cache[cache_key]

    # Create parent directories only when creating a new engine
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    _engine_cache[cache_key] = engine

    return engine


@contextmanager
def get_db_session(db_path: Path | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Args:
        db_path: Path to SQLite database file.

    Yields:
        SQLAlchemy Session instance.
    """
    session = sessionmaker(bind=get_engine(db_path))()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(db_path: Path | None = None) -> Engine:
    """Initialize database schema.

    Args:
        db_path: Path to SQLite database file.

    Returns:
        The engine the schema was created on.
    """
    engine = get_engine(db_path)
    Base.metadata.create_all(engine)
    return engine
