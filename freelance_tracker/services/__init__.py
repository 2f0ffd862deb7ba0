"""Services package initialization."""

from freelance_tracker.services.export_pdf import PDFReportExporter
from freelance_tracker.services.projects import ProjectService
from freelance_tracker.services.store import ProjectStore, TimeEntryStore

__all__ = [
    "PDFReportExporter",
    "ProjectService",
    "ProjectStore",
    "TimeEntryStore",
]
