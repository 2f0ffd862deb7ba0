"""Shared pytest fixtures and test helpers for Freelance Tracker tests."""

import os
from datetime import date

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from freelance_tracker.db import (
    create_engine_with_path,
    create_session_factory,
    init_schema,
)
from freelance_tracker.models.project import Project
from freelance_tracker.models.time_entry import TimeEntry
from freelance_tracker.services import (
    PDFReportExporter,
    ProjectService,
    ProjectStore,
    TimeEntryStore,
)


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for testing PySide6 widgets."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def engine(tmp_path):
    """Create a temporary database with the schema in place."""
    engine = create_engine_with_path(tmp_path / "freelance.db")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the temporary database."""
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    """Create a session on the temporary database."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def project_store(session_factory):
    return ProjectStore(session_factory)


@pytest.fixture
def time_entry_store(session_factory):
    return TimeEntryStore(session_factory)


@pytest.fixture
def project_service(project_store, time_entry_store):
    return ProjectService(project_store, time_entry_store)


@pytest.fixture
def exporter(project_service):
    return PDFReportExporter(project_service)


@pytest.fixture
def settings(tmp_path):
    """Settings stored in a temporary INI file."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


# Test helper functions (not fixtures, but available for import)


def make_project(  # noqa: PLR0913
    name="Test Project",
    client="Acme",
    hourly_rate=50.0,
    hours_worked=0.0,
    status=Project.ACTIVE,
    start_date=None,
    end_date=None,
    description=None,
):
    """
    Helper to build an unsaved project with defaults.

    Returns:
        New Project instance, not added to any session
    """
    return Project(
        name=name,
        client=client,
        hourly_rate=hourly_rate,
        hours_worked=hours_worked,
        status=status,
        start_date=start_date or date(2024, 1, 1),
        end_date=end_date,
        description=description,
    )


def create_test_project(session, name="Test Project", **kwargs):
    """
    Helper to create a project with defaults.

    Args:
        session: SQLAlchemy session
        name: Project name

    Returns:
        Created Project instance
    """
    kwargs.setdefault("client", "Acme")
    kwargs.setdefault("hourly_rate", 50.0)
    return Project.create(session=session, name=name, **kwargs)


def create_test_time_entry(session, project_id, hours=1.0, **kwargs):
    """
    Helper to create a time entry with defaults.

    Args:
        session: SQLAlchemy session
        project_id: Project ID
        hours: Hours worked

    Returns:
        Created TimeEntry instance
    """
    return TimeEntry.create(
        session=session, project_id=project_id, hours=hours, **kwargs
    )
