"""PDF report export service for Freelance Tracker."""

from __future__ import annotations

import io
import logging
from datetime import date
from typing import TYPE_CHECKING, Final
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.fonts import addMapping
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from freelance_tracker.utils import (
    format_hours,
    format_money,
    format_rate,
    get_resource_path,
    status_label,
)

if TYPE_CHECKING:
    from pathlib import Path

    from reportlab.platypus import Flowable

    from freelance_tracker.models.project import Project
    from freelance_tracker.services.metrics import (
        OverallProfitability,
        ProjectProfitability,
    )
    from freelance_tracker.services.projects import ProjectService

logger = logging.getLogger(__name__)

#: Name of the regular report font.  The built-in PDF fonts only cover
#: Latin-1, so a TrueType font with Cyrillic and other scripts is embedded.
FONT_NAME: Final[str] = "DejaVuSans"
#: Name of the bold report font.
BOLD_FONT_NAME: Final[str] = "DejaVuSans-Bold"
#: Font file for each font name, relative to the package.
FONT_FILES: Final[dict[str, str]] = {
    FONT_NAME: "etc/fonts/DejaVuSans.ttf",
    BOLD_FONT_NAME: "etc/fonts/DejaVuSans-Bold.ttf",
}


def register_fonts() -> None:
    """
    Register the report fonts with reportlab.

    Registering is global to the process, so fonts already registered are
    skipped.
    """
    registered = set(pdfmetrics.getRegisteredFontNames())
    for name, relative_path in FONT_FILES.items():
        if name in registered:
            continue
        pdfmetrics.registerFont(TTFont(name, str(get_resource_path(relative_path))))
        logger.debug("Registered font %s", name)
    # Let <b> in paragraphs switch to the bold face
    addMapping(FONT_NAME, 0, 0, FONT_NAME)
    addMapping(FONT_NAME, 1, 0, BOLD_FONT_NAME)
    addMapping(FONT_NAME, 0, 1, FONT_NAME)
    addMapping(FONT_NAME, 1, 1, BOLD_FONT_NAME)


class PDFReportExporter:
    """
    Exports the profitability report for all projects as a PDF.

    The report has these sections:

    - A title and the report date
    - The overall profitability
    - A table of every project (only if there are projects)
    - The overwork warnings (only if there are any)

    Args:
        project_service: Service providing the projects and their metrics

    Keyword Args:
        currency: Currency symbol printed after amounts

    """

    #: Report title
    TITLE: Final[str] = "Freelance Projects Report"
    #: Project table column headers
    TABLE_HEADERS: Final[tuple[str, ...]] = (
        "Name",
        "Client",
        "Rate",
        "Hours",
        "Revenue",
        "Status",
    )
    #: Relative widths of the project table columns
    COLUMN_WEIGHTS: Final[tuple[int, ...]] = (4, 3, 2, 2, 2, 2)
    #: Page margin
    MARGIN: Final[float] = 15 * mm

    def __init__(self, project_service: ProjectService, currency: str = "$") -> None:
        """
        Initialize exporter.
        """
        self.project_service = project_service
        self.currency = currency
        register_fonts()
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "ReportTitle",
            parent=styles["Title"],
            fontName=BOLD_FONT_NAME,
            fontSize=20,
            alignment=TA_CENTER,
        )
        self.date_style = ParagraphStyle(
            "ReportDate",
            parent=styles["Normal"],
            fontName=FONT_NAME,
            alignment=TA_CENTER,
            spaceAfter=20,
        )
        self.heading_style = ParagraphStyle(
            "ReportHeading",
            parent=styles["Heading2"],
            fontName=BOLD_FONT_NAME,
            fontSize=16,
            spaceBefore=20,
        )
        self.body_style = ParagraphStyle(
            "ReportBody",
            parent=styles["Normal"],
            fontName=FONT_NAME,
            bulletFontName=FONT_NAME,
        )

    def generate_report(self, today: date | None = None) -> bytes:
        """
        Generate the report.

        Keyword Args:
            today: Report date, also used for the workload forecast; defaults
                to today

        Returns:
            The PDF document

        Raises:
            StorageError: the projects could not be read

        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN,
            rightMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN,
            title=self.TITLE,
        )
        doc.build(self.build_story(today=today))
        return buffer.getvalue()

    def export(self, output_path: Path, today: date | None = None) -> bool:
        """
        Generate the report and write it to a file.

        Args:
            output_path: Path to output PDF file

        Keyword Args:
            today: Report date; defaults to today

        Returns:
            True if successful, False otherwise

        """
        content = self.generate_report(today=today)
        try:
            output_path.write_bytes(content)
        except OSError:
            logger.exception("Failed to write report to %s", output_path)
            return False
        logger.info("Report written to %s", output_path)
        return True

    def build_story(self, today: date | None = None) -> list[Flowable]:
        """
        Build the flowables that make up the report.

        Keyword Args:
            today: Report date; defaults to today

        Returns:
            List of flowables

        """
        if today is None:
            today = date.today()
        story: list[Flowable] = [
            Paragraph(self.TITLE, self.title_style),
            Paragraph(f"Date: {today.strftime('%d.%m.%Y')}", self.date_style),
        ]
        story.extend(
            self._profitability_section(
                self.project_service.calculate_overall_profitability()
            )
        )
        projects = self.project_service.get_all_projects()
        if projects:
            profitabilities = self.project_service.get_project_profitabilities(
                projects=projects
            )
            rows = list(zip(projects, profitabilities, strict=True))
            story.extend(self._projects_section(rows))
        warnings = self.project_service.check_for_overwork(today=today)
        if warnings:
            story.extend(self._warnings_section(warnings))
        return story

    def _profitability_section(
        self, profitability: OverallProfitability
    ) -> list[Flowable]:
        """
        Build the overall profitability section.

        Args:
            profitability: Overall profitability figures

        """
        lines = [
            "Total revenue: "
            + format_money(profitability.total_revenue, self.currency),
            f"Total hours: {format_hours(profitability.total_hours)}",
            "Average rate: "
            + format_rate(profitability.average_hourly_rate, self.currency),
            f"Project count: {profitability.project_count}",
        ]
        return [
            Paragraph("Overall Profitability", self.heading_style),
            *(Paragraph(escape(line), self.body_style) for line in lines),
            Spacer(1, 20),
        ]

    def _projects_section(
        self, projects: list[tuple[Project, ProjectProfitability]]
    ) -> list[Flowable]:
        """
        Build the project table section.

        Args:
            projects: Projects to list, each with its profitability figures

        """
        rows: list[list[str]] = [list(self.TABLE_HEADERS)]
        rows.extend(
            [
                profitability.project_name,
                project.client,
                format_rate(profitability.hourly_rate, self.currency),
                format_hours(profitability.hours_worked),
                format_money(profitability.total_revenue, self.currency),
                status_label(project.status),
            ]
            for project, profitability in projects
        )
        available_width = A4[0] - 2 * self.MARGIN
        unit = available_width / sum(self.COLUMN_WEIGHTS)
        table = Table(
            rows,
            colWidths=[weight * unit for weight in self.COLUMN_WEIGHTS],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -1), FONT_NAME),
                    ("FONTNAME", (0, 0), (-1, 0), BOLD_FONT_NAME),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("ALIGN", (2, 1), (4, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        return [Paragraph("Projects", self.heading_style), table]

    def _warnings_section(self, warnings: list[str]) -> list[Flowable]:
        """
        Build the overwork warnings section.

        Args:
            warnings: Overwork warnings

        """
        return [
            Paragraph("Overwork Warnings", self.heading_style),
            *(
                Paragraph(escape(warning), self.body_style, bulletText="•")
                for warning in warnings
            ),
        ]
