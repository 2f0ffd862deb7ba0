from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QLabel,
    QLineEdit,
    QVBoxLayout,
)

from freelance_tracker.config import get_currency, get_db_path, set_currency

if TYPE_CHECKING:
    from freelance_tracker.ui.main_window import MainWindow


class SettingsDialog:
    """
    Preferences dialog: the currency symbol used for amounts, and where the
    data file lives.
    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 450
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 180

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize settings dialog.
        """
        self.main_window = main_window
        self.settings = QSettings()

    def build(self) -> None:
        """
        Build the settings dialog.
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Preferences")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)

        # Currency symbol
        currency_label = QLabel("Currency symbol:")
        self.currency_edit = QLineEdit(self.dialog)
        self.currency_edit.setMaxLength(8)
        self.currency_edit.setText(get_currency(self.settings))
        self.layout.addWidget(currency_label)
        self.layout.addWidget(self.currency_edit)

        # Data file (read only: changing it takes effect on restart)
        db_label = QLabel("Data file:")
        self.db_path_edit = QLineEdit(self.dialog)
        self.db_path_edit.setText(str(get_db_path(self.settings)))
        self.db_path_edit.setReadOnly(True)
        self.layout.addWidget(db_label)
        self.layout.addWidget(self.db_path_edit)

        # Button box
        self.button_box = QDialogButtonBox(self.dialog)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Ok)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save_settings)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def save_settings(self) -> None:
        """Save settings to QSettings and apply them to the main window."""
        set_currency(self.currency_edit.text(), self.settings)
        self.main_window.set_currency(get_currency(self.settings))
        self.dialog.accept()

    def execute(self) -> None:
        """
        Execute the settings dialog.
        """
        self.build()
        self.dialog.exec()
