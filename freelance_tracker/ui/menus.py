from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMenu

if TYPE_CHECKING:
    from freelance_tracker.ui.main_window import MainWindow


class MainMenu:
    """Main application menu."""

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize main menu.

        Args:
            main_window: Main window instance

        """
        #: Main window instance
        self.main_window = main_window
        #: Menu bar
        self.menu = self.main_window.menuBar()

    def add_menu(self, menu: str) -> QMenu:
        """
        Add a menu to the main menu bar.

        Args:
            menu: title of the menu

        Returns:
            The added menu instance

        """
        return self.menu.addMenu(menu)

    def build(self) -> None:
        """Build the main menu."""
        # Save a reference to the file menu so PreferencesMenu can find it,
        # if needed.
        self.file_menu = FileMenu(self, self.main_window).file_menu
        ProjectMenu(self, self.main_window)
        # This must come after the file menu so we can find the right place base
        # on OS; on macOS, it goes in the application menu, on Windows/Linux, it
        # goes in the File menu.
        PreferencesMenu(self, self.main_window)


class FileMenu:
    """
    A "File" menu to be added to the main menu bar with the following actions:

    - Export PDF Report...
    - Refresh
    - Quit

    Args:
        main_menu: Main menu instance
        main_window: Main window instance

    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        """
        Initialize file menu.
        """
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Add a "File" menu to the main menu bar.
        """
        # Store reference for preferences menu
        self.file_menu = self.main_menu.add_menu("&File")

        export_action = QAction("&Export PDF Report...", self.file_menu)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(
            self.main_window.action_service.export_report_pdf
        )
        self.file_menu.addAction(export_action)

        refresh_action = QAction("&Refresh", self.file_menu)
        refresh_action.setShortcut(QKeySequence("F5"))
        refresh_action.triggered.connect(self.main_window.refresh)
        self.file_menu.addAction(refresh_action)

        self.file_menu.addSeparator()

        quit_action = QAction("&Quit", self.file_menu)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.main_window.close)
        self.file_menu.addAction(quit_action)


class ProjectMenu:
    """
    A "Project" menu to be added to the main menu bar with the following actions:

    - New Project...
    - Edit Project...
    - Delete Project
    - Time Entries...
    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Add a "Project" menu to the main menu bar.
        """
        self.project_menu = self.main_menu.add_menu("&Project")
        actions = self.main_window.action_service

        new_action = QAction("&New Project...", self.project_menu)
        new_action.setShortcut(QKeySequence("Ctrl+N"))
        new_action.triggered.connect(actions.new_project)
        self.project_menu.addAction(new_action)

        edit_action = QAction("&Edit Project...", self.project_menu)
        edit_action.triggered.connect(actions.edit_project)
        self.project_menu.addAction(edit_action)

        delete_action = QAction("&Delete Project", self.project_menu)
        delete_action.setShortcut(QKeySequence("Ctrl+Backspace"))
        delete_action.triggered.connect(actions.delete_project)
        self.project_menu.addAction(delete_action)

        self.project_menu.addSeparator()

        time_action = QAction("&Time Entries...", self.project_menu)
        time_action.setShortcut(QKeySequence("Ctrl+T"))
        time_action.triggered.connect(actions.show_time_entries)
        self.project_menu.addAction(time_action)


class PreferencesMenu:
    """
    A "Preferences" menu to be added to the main menu bar with the following
    actions:

    - Preferences...
    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Populate the preferences menu with the following actions:

        - Preferences...

        On macOS, this goes in the application menu.
        On Windows/Linux, this goes in the File menu.

        """
        file_menu = self.main_menu.file_menu
        if sys.platform == "darwin":
            # macOS: Qt moves an action with the preferences role into the
            # application menu
            preferences_action = QAction("&Preferences...", file_menu)
            preferences_action.setMenuRole(QAction.MenuRole.PreferencesRole)
            preferences_action.setShortcut(QKeySequence("Ctrl+,"))
            preferences_action.triggered.connect(self.main_window.show_settings_dialog)
            file_menu.addAction(preferences_action)
        else:
            # Windows/Linux: Add to File menu
            self.main_menu.file_menu.addSeparator()
            settings_action = QAction("&Settings...", self.main_menu.file_menu)
            settings_action.triggered.connect(self.main_window.show_settings_dialog)
            self.main_menu.file_menu.addAction(settings_action)
