"""
Application preferences, stored with :class:`PySide6.QtCore.QSettings`.

The organization and application names must be set on
:class:`~PySide6.QtCore.QCoreApplication` before any of these are used, so
that every part of the application reads the same settings store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, cast

from PySide6.QtCore import QSettings

from freelance_tracker.db import get_app_db_path

#: Settings key for a custom data file location
DB_PATH_KEY: Final[str] = "database/path"
#: Settings key for the currency symbol printed after amounts
CURRENCY_KEY: Final[str] = "report/currency_symbol"
#: Settings key for the directory the last report was saved to
LAST_DIRECTORY_KEY: Final[str] = "report/last_directory"
#: Default currency symbol
DEFAULT_CURRENCY: Final[str] = "$"


def get_db_path(settings: QSettings | None = None) -> Path:
    """
    Get the data file path.

    The ``database/path`` setting wins if it is set; otherwise the file lives
    in the per-platform application directory.

    Keyword Args:
        settings: Settings to read; defaults to the application settings

    Returns:
        Path to the database file

    """
    settings = settings or QSettings()
    custom_path = cast("str | None", settings.value(DB_PATH_KEY, None, type=str))
    if custom_path:
        return Path(custom_path).expanduser()
    return get_app_db_path()


def get_currency(settings: QSettings | None = None) -> str:
    """
    Get the currency symbol (default: ``$``).
    """
    settings = settings or QSettings()
    return cast("str", settings.value(CURRENCY_KEY, DEFAULT_CURRENCY, type=str))


def set_currency(currency: str, settings: QSettings | None = None) -> None:
    """
    Set the currency symbol.
    """
    settings = settings or QSettings()
    settings.setValue(CURRENCY_KEY, currency.strip() or DEFAULT_CURRENCY)


def get_last_directory(settings: QSettings | None = None) -> str:
    """
    Get the directory the last report was saved to, or an empty string.
    """
    settings = settings or QSettings()
    return cast("str", settings.value(LAST_DIRECTORY_KEY, "", type=str))


def set_last_directory(directory: Path, settings: QSettings | None = None) -> None:
    """
    Remember the directory a report was saved to.
    """
    settings = settings or QSettings()
    settings.setValue(LAST_DIRECTORY_KEY, str(directory))
