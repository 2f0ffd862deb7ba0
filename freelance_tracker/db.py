"""SQLAlchemy database setup for Freelance Tracker."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import Engine, String, TypeDecorator, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from freelance_tracker.utils import from_iso, to_iso

if TYPE_CHECKING:
    import sqlite3

    from sqlalchemy.engine import Dialect

#: The application directory name.
APP_DIR_NAME: Final[str] = "Freelance Tracker"
#: The default database name.
DEFAULT_DB_NAME: Final[str] = "freelance.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class ISODateTime(TypeDecorator):
    """
    Datetime column stored as ISO-8601 text.
    """

    impl = String
    cache_ok = True

    def process_bind_param(
        self, value: datetime | None, dialect: Dialect
    ) -> str | None:
        return to_iso(value)

    def process_result_value(
        self, value: str | None, dialect: Dialect
    ) -> datetime | None:
        return from_iso(value)


def get_app_db_path() -> Path:
    """
    Get the path to the application data file.

    - On Windows, the database is created in the user's
        ``AppData/Local/Freelance Tracker/data`` directory.
    - On macOS, the database is created in the user's
        ``~/Library/Application Support/Freelance Tracker/data`` directory.
    - On Linux, the database is created in the user's
        ``~/.config/Freelance Tracker/data`` directory.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the database file

    """
    if sys.platform not in ["win32", "darwin", "linux"]:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    if sys.platform == "win32":
        db_dir = Path.home() / "AppData" / "Local" / APP_DIR_NAME / "data"
    elif sys.platform == "darwin":
        db_dir = Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "data"
    else:
        db_dir = Path.home() / ".config" / APP_DIR_NAME / "data"
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_app_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(
        dbapi_conn: sqlite3.Connection | Any, _connection_record: Any
    ) -> None:
        """Set SQLite pragmas on connection."""
        cursor = cast("sqlite3.Cursor", dbapi_conn.cursor())
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_schema(engine: Engine) -> None:
    """
    Create the ``projects`` and ``time_entries`` tables if they are missing.

    Args:
        engine: SQLAlchemy engine

    """
    # Import the models so their tables are registered on the metadata
    import freelance_tracker.models  # noqa: F401, PLC0415

    Base.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Build the session factory shared by the entity stores.

    Objects are not expired on commit so that entities returned by a store
    stay readable after their session has been closed.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Session factory bound to ``engine``

    """
    return sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )
