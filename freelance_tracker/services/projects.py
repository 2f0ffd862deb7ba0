"""Project management and business metrics."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from freelance_tracker.exc import DoesNotExist
from freelance_tracker.models.project import Project
from freelance_tracker.models.time_entry import TimeEntry
from freelance_tracker.services import metrics

if TYPE_CHECKING:
    from datetime import datetime

    from freelance_tracker.services.metrics import (
        OverallProfitability,
        ProjectProfitability,
        ProjectStatistics,
    )
    from freelance_tracker.services.store import ProjectStore, TimeEntryStore

logger = logging.getLogger(__name__)


class ProjectService:
    """
    CRUD operations on projects and time entries, and the business metrics
    computed over them.

    Every metrics call reads a fresh snapshot of the projects from the store;
    nothing is cached between calls.

    Args:
        project_store: Store for projects
        time_entry_store: Store for time entries

    """

    def __init__(
        self, project_store: ProjectStore, time_entry_store: TimeEntryStore
    ) -> None:
        #: Store for projects
        self.project_store = project_store
        #: Store for time entries
        self.time_entry_store = time_entry_store

    # ===============================
    # Projects
    # ===============================

    def get_all_projects(self) -> list[Project]:
        """Get all projects, newest first."""
        return self.project_store.find_all()

    def get_project_by_id(self, project_id: int) -> Project | None:
        """Get a project by ID, or None if it does not exist."""
        return self.project_store.find_by_id(project_id)

    def get_active_projects(self) -> list[Project]:
        """Get all active projects, newest first."""
        return self.project_store.find_by_status(Project.ACTIVE)

    def create_project(self, project: Project) -> Project:
        """
        Create a new project.

        A project without a status is made ``active``, and a project without
        a start date starts today.

        Args:
            project: The project to create

        Returns:
            The created project, with its ID assigned

        """
        if project.status is None:
            project.status = Project.ACTIVE
        if project.start_date is None:
            project.start_date = date.today()
        if project.hours_worked is None:
            project.hours_worked = 0.0
        return self.project_store.save(project)

    def update_project(self, project: Project) -> None:
        """
        Update an existing project.

        Raises:
            DoesNotExist: the project is not in the database

        """
        self.project_store.update(project)

    def delete_project(self, project_id: int) -> None:
        """
        Delete a project and its time entries.

        Raises:
            DoesNotExist: the project is not in the database

        """
        self.project_store.delete(project_id)

    # ===============================
    # Time entries
    # ===============================

    def log_time_entry(  # noqa: PLR0913
        self,
        project_id: int,
        hours: float,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        description: str | None = None,
    ) -> TimeEntry:
        """
        Log a time entry against a project.

        The entry is a record only: the project's ``hours_worked``, which all
        the metrics use, is left as it is.

        Args:
            project_id: Project ID
            hours: Hours worked

        Keyword Args:
            start_time: When the work started
            end_time: When the work ended
            description: What was done

        Raises:
            DoesNotExist: the project is not in the database

        Returns:
            The saved time entry

        """
        if self.project_store.find_by_id(project_id) is None:
            raise DoesNotExist("Project", project_id)  # noqa: EM101
        entry = TimeEntry(
            project_id=project_id,
            hours=hours,
            start_time=start_time,
            end_time=end_time,
            description=description,
        )
        return self.time_entry_store.save(entry)

    def get_time_entries(self, project_id: int) -> list[TimeEntry]:
        """Get the time entries of a project, newest first."""
        return self.time_entry_store.find_by_project_id(project_id)

    def delete_time_entry(self, entry_id: int) -> None:
        """
        Delete a time entry.

        Raises:
            DoesNotExist: the time entry is not in the database

        """
        self.time_entry_store.delete(entry_id)

    def get_logged_hours(self, project_id: int) -> float:
        """Sum the hours in the time entries of a project."""
        return self.time_entry_store.total_hours(project_id)

    # ===============================
    # Metrics
    # ===============================

    def calculate_profitability(self, project_id: int) -> ProjectProfitability | None:
        """
        Calculate the profitability of one project.

        Args:
            project_id: Project ID

        Returns:
            The profitability figures, or None if the project does not exist

        """
        project = self.project_store.find_by_id(project_id)
        if project is None:
            return None
        return metrics.calculate_profitability(project)

    def get_project_profitabilities(
        self, projects: list[Project] | None = None
    ) -> list[ProjectProfitability]:
        """
        Calculate the profitability of every project, newest first.

        Keyword Args:
            projects: Projects already read from the store; read fresh if not
                given

        Returns:
            One entry per project, in the same order as ``projects``

        """
        if projects is None:
            projects = self.project_store.find_all()
        return [metrics.calculate_profitability(project) for project in projects]

    def calculate_overall_profitability(self) -> OverallProfitability:
        """Calculate the profitability across all projects."""
        return metrics.calculate_overall_profitability(self.project_store.find_all())

    def get_workload_by_week(self, today: date | None = None) -> dict[str, float]:
        """
        Forecast the weekly workload of the active projects for four weeks.

        Keyword Args:
            today: The current date; defaults to today

        """
        return metrics.get_workload_by_week(self.get_active_projects(), today=today)

    def check_for_overwork(self, today: date | None = None) -> list[str]:
        """
        List a warning for every forecast week with more than 40 hours of work.

        Keyword Args:
            today: The current date; defaults to today

        """
        warnings = metrics.check_for_overwork(self.get_workload_by_week(today=today))
        if warnings:
            logger.warning("Overwork forecast for %d week(s)", len(warnings))
        return warnings

    def get_project_statistics(self) -> ProjectStatistics:
        """Count projects overall, by status and by client."""
        return metrics.get_project_statistics(self.project_store.find_all())
