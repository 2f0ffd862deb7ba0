from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from freelance_tracker.services.metrics import OVERWORK_THRESHOLD_HOURS
from freelance_tracker.utils import format_hours, format_money, format_rate

if TYPE_CHECKING:
    from collections.abc import Mapping

    from freelance_tracker.services.metrics import (
        OverallProfitability,
        ProjectStatistics,
    )


class StatCard(QFrame):
    """
    A small framed card showing one figure with a caption underneath.

    Args:
        caption: Text shown under the figure

    """

    #: Style of the figure label
    VALUE_STYLE: Final[str] = "font-size: 18pt; font-weight: bold;"

    def __init__(self, caption: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        layout = QVBoxLayout(self)
        self.value_label = QLabel("0", self)
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.value_label.setStyleSheet(self.VALUE_STYLE)
        caption_label = QLabel(caption, self)
        caption_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        caption_label.setStyleSheet("color: #666;")
        layout.addWidget(self.value_label)
        layout.addWidget(caption_label)

    def set_value(self, value: str) -> None:
        """Set the figure shown on the card."""
        self.value_label.setText(value)


class DashboardPanel(QWidget):
    """
    The dashboard at the top of the main window: project counts, overall
    profitability, and the workload forecast for the next four weeks with
    any overwork warnings.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        #: Currency symbol used for amounts
        self.currency = "$"
        layout = QHBoxLayout(self)

        cards = QGridLayout()
        self.total_projects_card = StatCard("Projects")
        self.active_projects_card = StatCard("Active")
        self.completed_projects_card = StatCard("Completed")
        self.total_revenue_card = StatCard("Total revenue")
        self.total_hours_card = StatCard("Total hours")
        self.average_rate_card = StatCard("Average rate")
        cards.addWidget(self.total_projects_card, 0, 0)
        cards.addWidget(self.active_projects_card, 0, 1)
        cards.addWidget(self.completed_projects_card, 0, 2)
        cards.addWidget(self.total_revenue_card, 1, 0)
        cards.addWidget(self.total_hours_card, 1, 1)
        cards.addWidget(self.average_rate_card, 1, 2)
        layout.addLayout(cards, stretch=2)

        workload_box = QGroupBox("Workload by week", self)
        workload_layout = QVBoxLayout(workload_box)
        self.workload_layout = QVBoxLayout()
        workload_layout.addLayout(self.workload_layout)
        self.warnings_label = QLabel(workload_box)
        self.warnings_label.setWordWrap(True)
        self.warnings_label.setStyleSheet("color: #b00020;")
        self.warnings_label.hide()
        workload_layout.addWidget(self.warnings_label)
        workload_layout.addStretch()
        layout.addWidget(workload_box, stretch=1)

    def update_statistics(
        self,
        statistics: ProjectStatistics,
        profitability: OverallProfitability,
    ) -> None:
        """
        Show the project counts and the overall profitability.

        Args:
            statistics: Project statistics
            profitability: Overall profitability

        """
        self.total_projects_card.set_value(str(statistics.total_projects))
        self.active_projects_card.set_value(str(statistics.active_projects))
        self.completed_projects_card.set_value(str(statistics.completed_projects))
        self.total_revenue_card.set_value(
            format_money(profitability.total_revenue, self.currency)
        )
        self.total_hours_card.set_value(format_hours(profitability.total_hours))
        self.average_rate_card.set_value(
            format_rate(profitability.average_hourly_rate, self.currency)
        )

    def update_workload(
        self, workload: Mapping[str, float], warnings: list[str]
    ) -> None:
        """
        Show the weekly workload forecast and the overwork warnings.

        Args:
            workload: Week label to hours
            warnings: Overwork warnings

        """
        while self.workload_layout.count():
            item = self.workload_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        for label, hours in workload.items():
            week_label = QLabel(f"{label}: {hours:.1f} hours")
            if hours > OVERWORK_THRESHOLD_HOURS:
                week_label.setStyleSheet("color: #b00020; font-weight: bold;")
            self.workload_layout.addWidget(week_label)
        self.warnings_label.setText("\n".join(warnings))
        self.warnings_label.setVisible(bool(warnings))
