from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QDateTime, Qt
from PySide6.QtWidgets import (
    QDateTimeEdit,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from freelance_tracker.exc import DoesNotExist, StorageError
from freelance_tracker.utils import format_hours

if TYPE_CHECKING:
    from freelance_tracker.models.project import Project
    from freelance_tracker.models.time_entry import TimeEntry
    from freelance_tracker.ui.main_window import MainWindow


class TimeEntriesDialog:
    """
    Time log of a project.  This gets opened by "Time Entries..." for the
    selected project.

    Lists the project's time entries and lets the user log new ones or delete
    old ones.  The total of the log is shown next to the project's hours
    worked; logging time does not change the hours worked, which is what the
    revenue and workload figures use.

    Args:
        main_window: Main window instance
        project: The project whose time log is shown

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 700
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 500
    #: Time format used in the entries table
    TIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M"

    def __init__(self, main_window: MainWindow, project: Project) -> None:
        """
        Initialize time entries dialog.
        """
        self.main_window = main_window
        self.project = project

    def build(self) -> None:
        """
        Build the time entries dialog.
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle(f"Time Entries - {self.project.name}")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)

        self.summary_label = QLabel(self.dialog)
        self.layout.addWidget(self.summary_label)

        self.entry_table = QTableWidget(self.dialog)
        self.entry_table.setColumnCount(4)
        self.entry_table.setHorizontalHeaderLabels(
            ["Start", "End", "Hours", "Description"]
        )
        self.entry_table.setSelectionBehavior(
            QTableWidget.SelectionBehavior.SelectRows
        )
        self.entry_table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.entry_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        header = self.entry_table.horizontalHeader()
        header.setSectionResizeMode(3, QHeaderView.ResizeMode.Stretch)
        self.layout.addWidget(self.entry_table)

        self._add_entry_form()
        self._add_button_box()
        self.load_entries()

    def _add_entry_form(self) -> None:
        """
        Add the form used to log a new time entry.
        """
        box = QGroupBox("Log time", self.dialog)
        form = QFormLayout(box)
        now = QDateTime.currentDateTime()

        self.start_edit = QDateTimeEdit(now.addSecs(-3600), box)
        self.start_edit.setCalendarPopup(True)
        self.end_edit = QDateTimeEdit(now, box)
        self.end_edit.setCalendarPopup(True)
        self.start_edit.dateTimeChanged.connect(self._update_hours_from_times)
        self.end_edit.dateTimeChanged.connect(self._update_hours_from_times)
        times_layout = QHBoxLayout()
        times_layout.addWidget(self.start_edit)
        times_layout.addWidget(QLabel("to"))
        times_layout.addWidget(self.end_edit)
        form.addRow("Time:", times_layout)

        self.hours_spin = QDoubleSpinBox(box)
        self.hours_spin.setDecimals(2)
        self.hours_spin.setRange(0.0, 24.0)
        self.hours_spin.setSingleStep(0.25)
        self.hours_spin.setValue(1.0)
        form.addRow("Hours:", self.hours_spin)

        self.description_edit = QLineEdit(box)
        self.description_edit.setPlaceholderText("What did you work on?")
        form.addRow("Description:", self.description_edit)

        add_button = QPushButton("Log Entry", box)
        add_button.clicked.connect(self.log_entry)
        form.addRow(add_button)
        self.layout.addWidget(box)

    def _add_button_box(self) -> None:
        """
        Add the button box with "Delete Entry" and "Close".
        """
        self.button_box = QDialogButtonBox(self.dialog)
        self.delete_button = self.button_box.addButton(
            "Delete Entry", QDialogButtonBox.ButtonRole.ActionRole
        )
        self.delete_button.clicked.connect(self.delete_entry)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Close)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def _update_hours_from_times(self) -> None:
        """
        Set the hours to the length of the start/end interval, if positive.
        """
        seconds = self.start_edit.dateTime().secsTo(self.end_edit.dateTime())
        if seconds > 0:
            self.hours_spin.setValue(seconds / 3600)

    def load_entries(self) -> None:
        """
        Load the project's time entries into the table and update the summary.
        """
        service = self.main_window.project_service
        try:
            entries = service.get_time_entries(self.project.id)
            logged = service.get_logged_hours(self.project.id)
        except StorageError as e:
            self.main_window.show_error(
                f"Failed to load time entries:\n{e!s}", title="Load Error"
            )
            return

        self.entry_table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            self._set_entry_row(row, entry)
        self.summary_label.setText(
            f"Logged: {format_hours(logged)}    "
            f"Hours worked on project: {format_hours(self.project.hours_worked)}"
        )

    def _set_entry_row(self, row: int, entry: TimeEntry) -> None:
        """
        Fill one table row with a time entry.

        Args:
            row: Row index
            entry: Time entry

        """
        start_item = QTableWidgetItem(
            entry.start_time.strftime(self.TIME_FORMAT) if entry.start_time else ""
        )
        start_item.setData(Qt.ItemDataRole.UserRole, entry.id)
        self.entry_table.setItem(row, 0, start_item)
        self.entry_table.setItem(
            row,
            1,
            QTableWidgetItem(
                entry.end_time.strftime(self.TIME_FORMAT) if entry.end_time else ""
            ),
        )
        self.entry_table.setItem(row, 2, QTableWidgetItem(format_hours(entry.hours)))
        self.entry_table.setItem(row, 3, QTableWidgetItem(entry.description or ""))

    def log_entry(self) -> None:
        """
        Log a new time entry from the form.
        """
        hours = self.hours_spin.value()
        if hours <= 0:
            self.main_window.show_warning("Hours must be greater than zero.")
            return
        start_time = self.start_edit.dateTime().toPython()
        end_time = self.end_edit.dateTime().toPython()
        if end_time < start_time:
            self.main_window.show_warning("The end time is before the start time.")
            return
        try:
            self.main_window.project_service.log_time_entry(
                self.project.id,
                hours,
                start_time=start_time,
                end_time=end_time,
                description=self.description_edit.text().strip() or None,
            )
        except (DoesNotExist, StorageError) as e:
            self.main_window.show_error(
                f"Failed to log time entry:\n{e!s}", title="Save Error"
            )
            return
        self.description_edit.clear()
        self.load_entries()
        self.main_window.show_message("Time entry logged")

    def delete_entry(self) -> None:
        """
        Delete the selected time entry after confirmation.
        """
        row = self.entry_table.currentRow()
        item = self.entry_table.item(row, 0) if row >= 0 else None
        if item is None:
            self.main_window.show_warning("Please select a time entry to delete.")
            return
        reply = QMessageBox.question(
            self.dialog,
            "Confirm Deletion",
            "Are you sure you want to delete this time entry?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        try:
            self.main_window.project_service.delete_time_entry(
                item.data(Qt.ItemDataRole.UserRole)
            )
        except (DoesNotExist, StorageError) as e:
            self.main_window.show_error(
                f"Failed to delete time entry:\n{e!s}", title="Delete Error"
            )
            return
        self.load_entries()

    def execute(self) -> None:
        """
        Execute the time entries dialog.
        """
        self.build()
        self.dialog.exec()
