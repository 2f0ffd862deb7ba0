"""
Business metrics computed over snapshots of projects.

Every function here is pure: it takes the projects it needs, never touches
the database and never mutates its input.  Input is assumed to have been
validated by the forms, so nonsensical values (negative hours, say) produce
nonsensical figures rather than errors.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from freelance_tracker.models.project import Project

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

#: Number of weeks covered by the workload forecast.
WORKLOAD_WEEKS: Final[int] = 4
#: Weekly hours above which an overwork warning is raised.
OVERWORK_THRESHOLD_HOURS: Final[float] = 40.0
#: Prefix of a week label in the workload forecast.
WEEK_LABEL_PREFIX: Final[str] = "Week"


@dataclass(frozen=True)
class ProjectProfitability:
    """Profitability figures for one project."""

    #: The project name.
    project_name: str
    #: ``hourly_rate * hours_worked``
    total_revenue: float
    #: Hours worked on the project.
    hours_worked: float
    #: The project's hourly rate.
    hourly_rate: float
    #: Currently the same as the hourly rate.
    efficiency: float


@dataclass(frozen=True)
class OverallProfitability:
    """Profitability figures across a set of projects."""

    #: Sum of the revenue of every project.
    total_revenue: float = 0.0
    #: Sum of the hours worked on every project.
    total_hours: float = 0.0
    #: ``total_revenue / total_hours``, or 0.0 when no hours were worked.
    average_hourly_rate: float = 0.0
    #: Number of projects.
    project_count: int = 0


@dataclass(frozen=True)
class ProjectStatistics:
    """Project counts, overall and per client."""

    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    #: Client name to number of projects for that client, read-only.
    client_breakdown: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({})
    )


def calculate_profitability(project: Project) -> ProjectProfitability:
    """
    Calculate the profitability of a single project.

    Args:
        project: The project

    Returns:
        The project's profitability figures

    """
    return ProjectProfitability(
        project_name=project.name,
        total_revenue=project.revenue(),
        hours_worked=project.hours_worked,
        hourly_rate=project.hourly_rate,
        efficiency=project.hourly_rate,
    )


def calculate_overall_profitability(
    projects: Iterable[Project],
) -> OverallProfitability:
    """
    Calculate the profitability across all ``projects``, whatever their status.

    Args:
        projects: The projects

    Returns:
        The overall profitability figures

    """
    projects = list(projects)
    total_revenue = sum((project.revenue() for project in projects), 0.0)
    total_hours = sum((project.hours_worked for project in projects), 0.0)
    average_rate = total_revenue / total_hours if total_hours > 0 else 0.0
    return OverallProfitability(
        total_revenue=total_revenue,
        total_hours=total_hours,
        average_hourly_rate=average_rate,
        project_count=len(projects),
    )


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_label(start: date) -> str:
    """Return the label of the week starting on ``start``, e.g. ``Week 2024-01-15``."""
    return f"{WEEK_LABEL_PREFIX} {start.isoformat()}"


def get_workload_by_week(
    active_projects: Iterable[Project], today: date | None = None
) -> dict[str, float]:
    """
    Forecast the hours of work for this week and the three weeks after it.

    Each active project contributes a quarter of its total ``hours_worked`` to
    every week that ends on or after its start date (a week "ends" seven days
    after its Monday).  This spreads the logged hours evenly over the
    forecast; it is not a measure of the hours actually worked in a week.

    Args:
        active_projects: The active projects
        today: The current date; defaults to :meth:`datetime.date.today`

    Returns:
        Week label to hours, ordered from this week to three weeks out

    """
    if today is None:
        today = date.today()
    projects = [
        project
        for project in active_projects
        if project.status == Project.ACTIVE and project.start_date is not None
    ]
    first_week = week_start(today)
    workload: dict[str, float] = {}
    for week in range(WORKLOAD_WEEKS):
        start = first_week + timedelta(weeks=week)
        cutoff = start + timedelta(days=7)
        workload[week_label(start)] = sum(
            (
                project.hours_worked / WORKLOAD_WEEKS
                for project in projects
                if project.start_date <= cutoff  # type: ignore[operator]
            ),
            0.0,
        )
    return workload


def check_for_overwork(workload_by_week: Mapping[str, float]) -> list[str]:
    """
    Build a warning for every week with more than 40 hours of work.

    Args:
        workload_by_week: Week label to hours, as returned by
            :func:`get_workload_by_week`

    Returns:
        One warning per overworked week, in the order of ``workload_by_week``

    """
    return [
        f"WARNING: {label} - overwork ({hours:.1f} hours)"
        for label, hours in workload_by_week.items()
        if hours > OVERWORK_THRESHOLD_HOURS
    ]


def get_project_statistics(projects: Iterable[Project]) -> ProjectStatistics:
    """
    Count projects overall, by status and by client.

    Only ``active`` and ``completed`` projects are counted by status; paused
    projects appear in the total and in the client breakdown only.

    Args:
        projects: The projects

    Returns:
        The project statistics

    """
    projects = list(projects)
    statuses = Counter(project.status for project in projects)
    return ProjectStatistics(
        total_projects=len(projects),
        active_projects=statuses[Project.ACTIVE],
        completed_projects=statuses[Project.COMPLETED],
        client_breakdown=MappingProxyType(
            dict(Counter(project.client for project in projects))
        ),
    )
