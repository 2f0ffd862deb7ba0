from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from freelance_tracker import __version__
from freelance_tracker.config import get_currency, get_db_path
from freelance_tracker.db import (
    create_engine_with_path,
    create_session_factory,
    init_schema,
)
from freelance_tracker.services import (
    PDFReportExporter,
    ProjectService,
    ProjectStore,
    TimeEntryStore,
)

from .main_window import MainWindow

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

#: Application name, shown in the menu bar and window titles
APP_NAME: Final[str] = "Freelance Tracker"


def build_services(
    db_path: Path, currency: str
) -> tuple[ProjectService, PDFReportExporter]:
    """
    Build the services the application runs on.

    The engine is created once here and shared by the stores; nothing else
    in the application creates its own.

    Args:
        db_path: Path to the database file
        currency: Currency symbol for the report

    Returns:
        The project service and the report exporter

    """
    engine = create_engine_with_path(db_path)
    init_schema(engine)
    session_factory = create_session_factory(engine)
    project_service = ProjectService(
        ProjectStore(session_factory), TimeEntryStore(session_factory)
    )
    exporter = PDFReportExporter(project_service, currency=currency)
    logger.info("Using data file %s", db_path)
    return project_service, exporter


def create_application() -> tuple[QApplication, MainWindow]:
    """
    Create the application and show its main window.
    """
    QCoreApplication.setOrganizationName(APP_NAME)
    QCoreApplication.setApplicationName(APP_NAME)

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(__version__)
    # Set display name for macOS menu bar
    QGuiApplication.setApplicationDisplayName(APP_NAME)

    project_service, exporter = build_services(get_db_path(), get_currency())

    window = MainWindow(project_service, exporter)
    window.show()
    return app, window
