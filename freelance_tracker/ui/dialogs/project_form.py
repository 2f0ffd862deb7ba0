from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QTextEdit,
    QVBoxLayout,
)

from freelance_tracker.exc import DoesNotExist, StorageError, ValidationError
from freelance_tracker.models.project import Project
from freelance_tracker.utils import status_label
from freelance_tracker.validation import ProjectInput, validate_project_input

if TYPE_CHECKING:
    from freelance_tracker.ui.main_window import MainWindow


def to_qdate(value: date) -> QDate:
    """Convert a :class:`datetime.date` to a :class:`QDate`."""
    return QDate(value.year, value.month, value.day)


class ProjectFormDialog:
    """
    Project form.  This gets opened by "New Project..." with no project, or by
    "Edit Project..." with the project to edit.

    The project being edited is handed in explicitly; when the dialog is
    accepted the project is created or updated through the project service
    and the main window is refreshed.

    Args:
        main_window: Main window instance

    Keyword Args:
        project: Project to edit, or None to create a new one

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 500
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 450

    def __init__(self, main_window: MainWindow, project: Project | None = None) -> None:
        """
        Initialize project form dialog.
        """
        self.main_window = main_window
        #: The project being edited, or None for a new project
        self.project = project
        #: The project that was saved, once the dialog has been accepted
        self.saved_project: Project | None = None

    @property
    def is_new(self) -> bool:
        """True if the dialog creates a new project."""
        return self.project is None

    def build(self) -> None:
        """
        Build the project form dialog.
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("New Project" if self.is_new else "Edit Project")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)
        form = QFormLayout()

        self.name_edit = QLineEdit(self.dialog)
        self.name_edit.setPlaceholderText("Enter project name...")
        form.addRow("Project name:", self.name_edit)

        self.client_edit = QLineEdit(self.dialog)
        self.client_edit.setPlaceholderText("Enter client name...")
        form.addRow("Client:", self.client_edit)

        self.rate_edit = QLineEdit(self.dialog)
        self.rate_edit.setPlaceholderText("e.g. 50")
        form.addRow("Hourly rate:", self.rate_edit)

        self.hours_edit = QLineEdit(self.dialog)
        self.hours_edit.setText("0")
        form.addRow("Hours worked:", self.hours_edit)

        self.status_combo = QComboBox(self.dialog)
        for status in Project.STATUSES:
            self.status_combo.addItem(status_label(status), status)
        form.addRow("Status:", self.status_combo)

        self.start_date_edit = QDateEdit(self.dialog)
        self.start_date_edit.setCalendarPopup(True)
        self.start_date_edit.setDate(to_qdate(date.today()))
        form.addRow("Start date:", self.start_date_edit)

        end_date_layout = QHBoxLayout()
        self.end_date_check = QCheckBox("Set", self.dialog)
        self.end_date_edit = QDateEdit(self.dialog)
        self.end_date_edit.setCalendarPopup(True)
        self.end_date_edit.setDate(to_qdate(date.today()))
        self.end_date_edit.setEnabled(False)
        self.end_date_check.toggled.connect(self.end_date_edit.setEnabled)
        end_date_layout.addWidget(self.end_date_check)
        end_date_layout.addWidget(self.end_date_edit, stretch=1)
        form.addRow("End date:", end_date_layout)

        self.description_edit = QTextEdit(self.dialog)
        form.addRow("Description:", self.description_edit)

        self.layout.addLayout(form)
        self._add_button_box()

        if self.project is not None:
            self.populate(self.project)

    def _add_button_box(self) -> None:
        """
        Add the button box to the dialog.  The button box will be used to accept
        or cancel the dialog.
        """
        self.button_box = QDialogButtonBox(self.dialog)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Save)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save_project)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def populate(self, project: Project) -> None:
        """
        Fill the form with the fields of ``project``.

        Args:
            project: Project to show

        """
        self.name_edit.setText(project.name)
        self.client_edit.setText(project.client)
        self.rate_edit.setText(f"{project.hourly_rate:g}")
        self.hours_edit.setText(f"{project.hours_worked:g}")
        index = self.status_combo.findData(project.status)
        if index < 0:
            # Keep statuses we don't know about selectable
            self.status_combo.addItem(status_label(project.status), project.status)
            index = self.status_combo.count() - 1
        self.status_combo.setCurrentIndex(index)
        if project.start_date:
            self.start_date_edit.setDate(to_qdate(project.start_date))
        self.end_date_check.setChecked(project.end_date is not None)
        if project.end_date:
            self.end_date_edit.setDate(to_qdate(project.end_date))
        self.description_edit.setPlainText(project.description or "")

    def collect_input(self) -> ProjectInput:
        """
        Read and validate the form.

        Returns:
            The validated form values

        Raises:
            ValidationError: the form has invalid fields

        """
        end_date = (
            self.end_date_edit.date().toPython()
            if self.end_date_check.isChecked()
            else None
        )
        return validate_project_input(
            name=self.name_edit.text(),
            client=self.client_edit.text(),
            rate=self.rate_edit.text(),
            hours=self.hours_edit.text(),
            status=self.status_combo.currentData(),
            start_date=self.start_date_edit.date().toPython(),
            end_date=end_date,
            description=self.description_edit.toPlainText(),
        )

    def save_project(self) -> None:
        """
        Validate the form and create or update the project.

        - If the form is invalid, list the problems and keep the dialog open.
        - If saving fails, show the error and keep the dialog open.
        - Otherwise close the dialog and refresh the main window.
        """
        try:
            values = self.collect_input()
        except ValidationError as e:
            self.main_window.show_error(str(e), title="Validation Errors")
            return

        service = self.main_window.project_service
        try:
            if self.project is None:
                project = service.create_project(values.apply_to(Project()))
            else:
                project = values.apply_to(self.project)
                service.update_project(project)
        except DoesNotExist:
            self.main_window.show_error(
                "This project no longer exists. It may have been deleted.",
                title="Save Error",
            )
            return
        except StorageError as e:
            self.main_window.show_error(
                f"Failed to save project:\n{e!s}", title="Save Error"
            )
            return

        self.saved_project = project
        self.dialog.accept()
        self.main_window.refresh()
        self.main_window.show_message(f'Project saved: "{project.name}"')

    def execute(self) -> Project | None:
        """
        Execute the project form dialog.

        Returns:
            The saved project, or None if the dialog was cancelled

        """
        self.build()
        self.dialog.exec()
        return self.saved_project
