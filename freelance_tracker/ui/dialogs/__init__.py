from .project_form import ProjectFormDialog
from .settings import SettingsDialog
from .time_entries import TimeEntriesDialog

__all__ = [
    "ProjectFormDialog",
    "SettingsDialog",
    "TimeEntriesDialog",
]
