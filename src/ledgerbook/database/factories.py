"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerbook.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerbook.domain.errors import ValidationError

DEFAULT_BUSY_TIMEOUT = 5.0


def _busy_timeout_from_env() -> float:
    raw = os.environ.get("LEDGERBOOK_BUSY_TIMEOUT")
    if raw is None or not raw.strip():
        return DEFAULT_BUSY_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f"LEDGERBOOK_BUSY_TIMEOUT must be a number of seconds, got '{raw}'")


def create_sqlite_database(
    database_path: Optional[str] = None, busy_timeout: Optional[float] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERBOOK_DB_PATH
            environment variable, then defaults to ~/.ledgerbook/ledgerbook.db
        busy_timeout: Seconds to wait for a locked database before failing. If None,
            checks LEDGERBOOK_BUSY_TIMEOUT, then defaults to 5 seconds

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("LEDGERBOOK_DB_PATH")

    if database_path is None:
        # Default to ~/.ledgerbook/ledgerbook.db
        home = Path.home()
        db_dir = home / ".ledgerbook"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerbook.db")

    if busy_timeout is None:
        busy_timeout = _busy_timeout_from_env()

    database_url = f"sqlite:///{database_path}"
    database = SQLAlchemyDatabase(database_url, busy_timeout=busy_timeout)
    database.database_path = database_path
    return database


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database instance from a URL or a SQLite path.

    Settings are resolved in this order: database_url, database_path,
    LEDGERBOOK_DB_PATH, LEDGERBOOK_DATABASE_URL, then the default SQLite file.
    The CLI fills database_path from --db-path or LEDGERBOOK_DB_PATH, so both
    entry points agree.

    Args:
        database_url: SQLAlchemy URL
        database_path: SQLite path

    Returns:
        SQLAlchemyDatabase instance
    """
    if database_path is None:
        database_path = os.environ.get("LEDGERBOOK_DB_PATH") or None
    if database_url is None and database_path is None:
        database_url = os.environ.get("LEDGERBOOK_DATABASE_URL") or None

    if database_url is None:
        return create_sqlite_database(database_path=database_path)

    busy_timeout = _busy_timeout_from_env() if database_url.startswith("sqlite") else None
    return SQLAlchemyDatabase(database_url, busy_timeout=busy_timeout)
