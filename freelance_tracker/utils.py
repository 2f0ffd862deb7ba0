"""Utility functions for Freelance Tracker."""

import sys
from datetime import datetime
from pathlib import Path
from typing import Final

#: Display labels for project statuses.
STATUS_LABELS: Final[dict[str, str]] = {
    "active": "Active",
    "completed": "Completed",
    "paused": "Paused",
}


def get_resource_path(relative_path: str) -> Path:
    """
    Get resource path for bundled application or development.

    Args:
        relative_path: Relative path from the ``freelance_tracker`` package

    Returns:
        Path to resource file

    """
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        # Running in PyInstaller bundle
        base_path = Path(sys._MEIPASS) / "freelance_tracker"  # noqa: SLF001
    else:
        base_path = Path(__file__).parent
    return base_path / relative_path


def to_iso(dt: datetime | None) -> str | None:
    """
    Convert datetime to an ISO-8601 string.

    Args:
        dt: Datetime object to convert, or None

    Returns:
        ISO format string, or None

    """
    if dt is None:
        return None
    return dt.isoformat()


def from_iso(iso_str: str | None) -> datetime | None:
    """
    Parse an ISO-8601 string to a datetime.

    Both ``2024-01-15T10:30`` and ``2024-01-15 10:30:00`` are accepted, so
    data files written by older versions of the application still load.

    Args:
        iso_str: ISO format string, or None

    Returns:
        Naive datetime object, or None

    """
    if not iso_str:
        return None
    dt = datetime.fromisoformat(iso_str)
    # SQLite has no timezone support; keep everything naive local time
    return dt.replace(tzinfo=None)


def status_label(status: str | None) -> str:
    """
    Return the display label for a project status.

    Unknown statuses are returned unchanged.

    Args:
        status: Status code, e.g. ``active``

    Returns:
        Human readable label

    """
    if status is None:
        return ""
    return STATUS_LABELS.get(status, status)


def format_money(amount: float, currency: str = "$") -> str:
    """
    Format an amount of money with two decimals.

    Args:
        amount: Amount to format
        currency: Currency symbol appended after the amount

    Returns:
        Formatted amount, e.g. ``650.00 $``

    """
    return f"{amount:.2f} {currency}".rstrip()


def format_rate(rate: float, currency: str = "$") -> str:
    """Format an hourly rate, e.g. ``50.00 $/h``."""
    return f"{rate:.2f} {currency}/h"


def format_hours(hours: float) -> str:
    """Format an hours figure with one decimal, e.g. ``115.0 h``."""
    return f"{hours:.1f} h"
