"""Main application window."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Final

from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from freelance_tracker.config import get_last_directory, set_last_directory
from freelance_tracker.exc import DoesNotExist, StorageError
from freelance_tracker.services import metrics
from freelance_tracker.ui.dashboard import DashboardPanel
from freelance_tracker.ui.dialogs import (
    ProjectFormDialog,
    SettingsDialog,
    TimeEntriesDialog,
)
from freelance_tracker.ui.menus import MainMenu
from freelance_tracker.ui.project_table import ProjectTable

if TYPE_CHECKING:
    from freelance_tracker.models.project import Project
    from freelance_tracker.services import PDFReportExporter, ProjectService

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window: the dashboard on top, the project table below
    it, and a row of buttons for the project actions.

    Args:
        project_service: Service the window reads and writes projects through
        exporter: PDF report exporter

    """

    #: Main window geometry
    MAIN_WINDOW_GEOMETRY: Final[tuple[int, int, int, int]] = (100, 100, 1200, 750)

    def __init__(
        self, project_service: ProjectService, exporter: PDFReportExporter
    ) -> None:
        super().__init__()
        #: Project service
        self.project_service = project_service
        #: PDF report exporter
        self.exporter = exporter
        #: Main window actions
        self.action_service = MainWindowActions(self)

        # Build the main window
        self.build()
        self.refresh()

    def _setup_main_window(self) -> None:
        """
        Set up the main window.
        """
        self.setWindowTitle("Freelance Tracker")
        # Set window icon from application icon
        app = QApplication.instance()
        if isinstance(app, QApplication) and not app.windowIcon().isNull():
            self.setWindowIcon(app.windowIcon())
        self.setGeometry(*self.MAIN_WINDOW_GEOMETRY)

        central_widget = QWidget()
        central_layout = QVBoxLayout(central_widget)

        # Top: dashboard
        self.dashboard = DashboardPanel(central_widget)
        central_layout.addWidget(self.dashboard)

        # Middle: project table
        self.project_table = ProjectTable(central_widget)
        self.project_table.doubleClicked.connect(self.action_service.edit_project)
        central_layout.addWidget(self.project_table, stretch=1)

        # Bottom: buttons
        central_layout.addLayout(self._build_button_row())

        self.setCentralWidget(central_widget)
        self.show_message("Ready")

    def _build_button_row(self) -> QHBoxLayout:
        """
        Build the row of action buttons under the project table.

        Returns:
            The button layout

        """
        button_layout = QHBoxLayout()
        buttons = [
            ("New Project", self.action_service.new_project),
            ("Edit", self.action_service.edit_project),
            ("Delete", self.action_service.delete_project),
            ("Time Entries", self.action_service.show_time_entries),
            ("Export PDF", self.action_service.export_report_pdf),
            ("Refresh", self.refresh),
        ]
        for text, slot in buttons:
            button = QPushButton(text)
            button.clicked.connect(slot)
            button_layout.addWidget(button)
        button_layout.addStretch()
        return button_layout

    def _setup_main_menu(self) -> None:
        """Set up the main menu."""
        menu = MainMenu(self)
        menu.build()

    def build(self) -> None:
        """
        Build the main window.

        - Setup the main window.
        - Setup the main menu.

        """
        self._setup_main_window()
        self._setup_main_menu()

    def refresh(self) -> None:
        """
        Reload the project table and the dashboard from storage.
        """
        service = self.project_service
        currency = self.exporter.currency
        self.project_table.currency = currency
        self.dashboard.currency = currency
        try:
            projects = service.get_all_projects()
            statistics = service.get_project_statistics()
            profitability = service.calculate_overall_profitability()
            workload = service.get_workload_by_week()
            warnings = metrics.check_for_overwork(workload)
        except StorageError as e:
            self.show_error(f"Failed to load projects:\n{e!s}", title="Load Error")
            return
        self.project_table.load_projects(projects)
        self.dashboard.update_statistics(statistics, profitability)
        self.dashboard.update_workload(workload, warnings)

    def set_currency(self, currency: str) -> None:
        """
        Use ``currency`` for amounts in the window and in the report.

        Args:
            currency: Currency symbol

        """
        self.exporter.currency = currency
        self.refresh()

    def selected_project(self) -> Project | None:
        """
        Get the project selected in the project table.

        Returns:
            The selected project, or None if no project is selected or it
            no longer exists

        """
        project_id = self.project_table.selected_project_id()
        if project_id is None:
            return None
        return self.project_service.get_project_by_id(project_id)

    def show_message(self, message: str, duration: int = 2000) -> None:
        """
        Show a message in the status bar.

        Args:
            message: Message to show

        Keyword Args:
            duration: Duration of the message in milliseconds (default: 2000)

        """
        self.statusBar().showMessage(message, duration)

    def show_warning(self, message: str, title: str = "Warning") -> None:
        """
        Show a warning message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Warning")

        """
        QMessageBox.warning(self, title, message)

    def show_error(self, message: str, title: str = "Error") -> None:
        """
        Show an error message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Error")

        """
        QMessageBox.critical(self, title, message)

    def show_information(self, message: str, title: str = "Information") -> None:
        """
        Show an information message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Information")

        """
        QMessageBox.information(self, title, message)

    def show_settings_dialog(self) -> None:
        """
        Show settings dialog.
        """
        dialog = SettingsDialog(self)
        dialog.execute()


class MainWindowActions:
    """
    Main window actions.  We separate the work from the UI to make the code more
    readable and maintainable.

    Args:
        main_window: Main window instance

    """

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize main window actions.
        """
        self.main_window = main_window

    @property
    def project_service(self) -> ProjectService:
        """Get the project service from the main window."""
        return self.main_window.project_service

    def _require_selected_project(self, action: str) -> Project | None:
        """
        Get the selected project, warning the user if there is none.

        Args:
            action: What the user was trying to do, e.g. "edit"

        Returns:
            The selected project, or None

        """
        try:
            project = self.main_window.selected_project()
        except StorageError as e:
            self.main_window.show_error(
                f"Failed to load project:\n{e!s}", title="Load Error"
            )
            return None
        if project is None:
            self.main_window.show_warning(f"Please select a project to {action}.")
        return project

    def new_project(self) -> None:
        """
        Open the project form for a new project.
        """
        ProjectFormDialog(self.main_window).execute()

    def edit_project(self) -> None:
        """
        Open the project form for the selected project.
        """
        project = self._require_selected_project("edit")
        if project is None:
            return
        ProjectFormDialog(self.main_window, project=project).execute()

    def delete_project(self) -> None:
        """
        Delete the selected project, and its time entries, after confirmation.
        """
        project = self._require_selected_project("delete")
        if project is None:
            return
        reply = QMessageBox.question(
            self.main_window,
            "Confirm Deletion",
            f'Are you sure you want to delete project "{project.name}"?\n\n'
            "Its time entries will be deleted too. This cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            self.project_service.delete_project(project.id)
        except DoesNotExist:
            self.main_window.show_warning("The project was already deleted.")
        except StorageError as e:
            self.main_window.show_error(
                f"Failed to delete project:\n{e!s}", title="Delete Error"
            )
            return
        self.main_window.refresh()
        self.main_window.show_message(f'Project deleted: "{project.name}"')

    def show_time_entries(self) -> None:
        """
        Open the time log of the selected project.
        """
        project = self._require_selected_project("show time entries for")
        if project is None:
            return
        TimeEntriesDialog(self.main_window, project).execute()

    def export_report_pdf(self) -> None:
        """
        Export the report to a PDF file chosen by the user.
        """
        file_path, _ = QFileDialog.getSaveFileName(
            self.main_window,
            "Export Report",
            str(Path(get_last_directory()) / "freelance_report.pdf"),
            "PDF Documents (*.pdf);;All Files (*)",
        )

        # If the user cancels the dialog, do nothing.
        if not file_path:
            return

        # Ensure .pdf extension
        if not file_path.lower().endswith(".pdf"):
            file_path += ".pdf"
        output_path = Path(file_path)

        try:
            export_success = self.main_window.exporter.export(output_path)
        except StorageError as e:
            self.main_window.show_error(
                f"Export failed: the projects could not be read.\n{e!s}",
                title="Export Error",
            )
            return

        if export_success:
            set_last_directory(output_path.parent)
            self.main_window.show_information(
                f"Report exported successfully to:\n{file_path}",
                title="Export Successful",
            )
            self.main_window.show_message("Export completed", duration=3000)
        else:
            self.main_window.show_warning(
                "Failed to export the report. Check the log for details.",
                title="Export Failed",
            )
