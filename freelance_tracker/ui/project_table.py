from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHeaderView, QTableWidget, QTableWidgetItem, QWidget

from freelance_tracker.utils import format_hours, format_money, format_rate, status_label

if TYPE_CHECKING:
    from freelance_tracker.models.project import Project


class NumericTableWidgetItem(QTableWidgetItem):
    """
    Custom QTableWidgetItem that sorts by numeric value instead of display text.
    """

    def __init__(self, display_text: str, value: float) -> None:
        """
        Initialize the numeric table item.

        Args:
            display_text: Text to display in the table
            value: Number for sorting

        """
        super().__init__(display_text)
        self._value = value
        self.setTextAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        )

    def __lt__(self, other: QTableWidgetItem) -> bool:
        """
        Compare items by value for proper sorting.

        Args:
            other: Other item to compare with

        Returns:
            True if this value is less than the other

        """
        if isinstance(other, NumericTableWidgetItem):
            return self._value < other._value
        # Fall back to text comparison for non-numeric items
        return self.text() < other.text()


class ProjectTable(QTableWidget):
    """
    Table listing the projects: name, client, rate, hours, revenue, status.

    The project ID is stored on the name cell under
    :attr:`Qt.ItemDataRole.UserRole`.
    """

    #: Column headers
    HEADERS: Final[list[str]] = [
        "Name",
        "Client",
        "Rate",
        "Hours",
        "Revenue",
        "Status",
    ]

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: Currency symbol used for amounts
        self.currency = "$"
        self.setColumnCount(len(self.HEADERS))
        self.setHorizontalHeaderLabels(self.HEADERS)
        self.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self.setAlternatingRowColors(True)
        self.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.setSortingEnabled(True)
        header = self.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        for column in range(2, len(self.HEADERS)):
            header.setSectionResizeMode(
                column, QHeaderView.ResizeMode.ResizeToContents
            )

    def load_projects(self, projects: list[Project]) -> None:
        """
        Replace the rows of the table with ``projects``.

        Args:
            projects: Projects to show

        """
        # Disable sorting while populating to avoid rows moving under us
        self.setSortingEnabled(False)
        self.setRowCount(len(projects))
        for row, project in enumerate(projects):
            name_item = QTableWidgetItem(project.name)
            name_item.setData(Qt.ItemDataRole.UserRole, project.id)
            self.setItem(row, 0, name_item)
            self.setItem(row, 1, QTableWidgetItem(project.client))
            self.setItem(
                row,
                2,
                NumericTableWidgetItem(
                    format_rate(project.hourly_rate, self.currency),
                    project.hourly_rate,
                ),
            )
            self.setItem(
                row,
                3,
                NumericTableWidgetItem(
                    format_hours(project.hours_worked), project.hours_worked
                ),
            )
            self.setItem(
                row,
                4,
                NumericTableWidgetItem(
                    format_money(project.revenue(), self.currency), project.revenue()
                ),
            )
            self.setItem(row, 5, QTableWidgetItem(status_label(project.status)))
        self.setSortingEnabled(True)

    def selected_project_id(self) -> int | None:
        """
        Get the ID of the selected project.

        Returns:
            Project ID, or None if no row is selected

        """
        selected_row = self.currentRow()
        if selected_row < 0 or not self.selectionModel().hasSelection():
            return None
        name_item = self.item(selected_row, 0)
        if name_item is None:
            return None
        return name_item.data(Qt.ItemDataRole.UserRole)
