"""Unit tests for the metrics functions."""

from datetime import date, timedelta

import pytest

from freelance_tracker.models.project import Project
from freelance_tracker.services.metrics import (
    OverallProfitability,
    ProjectStatistics,
    calculate_overall_profitability,
    calculate_profitability,
    check_for_overwork,
    get_project_statistics,
    get_workload_by_week,
    week_label,
    week_start,
)
from tests.conftest import make_project

#: A Wednesday
TODAY = date(2024, 1, 17)


class TestCalculateProfitability:
    """Test cases for calculate_profitability()."""

    def test_revenue_is_rate_times_hours(self):
        """Test revenue equals hourly rate times hours worked."""
        project = make_project(name="Site", hourly_rate=45.5, hours_worked=12.0)

        result = calculate_profitability(project)

        assert result.project_name == "Site"
        assert result.total_revenue == 45.5 * 12.0
        assert result.hours_worked == 12.0
        assert result.hourly_rate == 45.5

    def test_efficiency_equals_hourly_rate(self):
        """Test efficiency is reported as the hourly rate."""
        project = make_project(hourly_rate=80.0, hours_worked=3.0)

        assert calculate_profitability(project).efficiency == 80.0

    def test_zero_hours_gives_zero_revenue(self):
        """Test a project with no hours has no revenue."""
        project = make_project(hourly_rate=100.0, hours_worked=0.0)

        assert calculate_profitability(project).total_revenue == 0.0

    def test_negative_hours_are_not_rejected(self):
        """Test nonsensical input produces nonsensical figures, not errors."""
        project = make_project(hourly_rate=10.0, hours_worked=-2.0)

        assert calculate_profitability(project).total_revenue == -20.0


class TestCalculateOverallProfitability:
    """Test cases for calculate_overall_profitability()."""

    def test_three_projects(self):
        """Test the totals and average rate across three projects."""
        projects = [
            make_project(hourly_rate=50.0, hours_worked=10.0),
            make_project(hourly_rate=30.0, hours_worked=5.0),
            make_project(hourly_rate=0.0, hours_worked=100.0),
        ]

        result = calculate_overall_profitability(projects)

        assert result.total_revenue == 650.0
        assert result.total_hours == 115.0
        assert result.average_hourly_rate == pytest.approx(650 / 115)
        assert round(result.average_hourly_rate, 2) == 5.65
        assert result.project_count == 3

    def test_empty_gives_zeros(self):
        """Test no projects gives all zeros without dividing by zero."""
        result = calculate_overall_profitability([])

        assert result == OverallProfitability()
        assert result.total_revenue == 0.0
        assert result.total_hours == 0.0
        assert result.average_hourly_rate == 0.0
        assert result.project_count == 0

    def test_zero_hours_gives_zero_average(self):
        """Test projects with no hours give a zero average rate."""
        projects = [make_project(hourly_rate=50.0, hours_worked=0.0)]

        result = calculate_overall_profitability(projects)

        assert result.average_hourly_rate == 0.0
        assert result.project_count == 1

    def test_total_revenue_is_sum_of_project_revenues(self):
        """Test total revenue equals the sum of the per-project revenues."""
        projects = [
            make_project(hourly_rate=12.5, hours_worked=3.0),
            make_project(hourly_rate=75.0, hours_worked=8.5),
            make_project(hourly_rate=40.0, hours_worked=0.0),
        ]

        result = calculate_overall_profitability(projects)

        assert result.total_revenue == pytest.approx(
            sum(calculate_profitability(p).total_revenue for p in projects)
        )

    def test_includes_every_status(self):
        """Test projects of every status are counted."""
        projects = [
            make_project(hourly_rate=10.0, hours_worked=1.0, status=Project.ACTIVE),
            make_project(hourly_rate=10.0, hours_worked=1.0, status=Project.PAUSED),
            make_project(
                hourly_rate=10.0, hours_worked=1.0, status=Project.COMPLETED
            ),
        ]

        result = calculate_overall_profitability(projects)

        assert result.total_revenue == 30.0
        assert result.project_count == 3

    def test_accepts_a_generator(self):
        """Test any iterable of projects is accepted."""
        projects = (make_project(hourly_rate=10.0, hours_worked=2.0) for _ in range(2))

        result = calculate_overall_profitability(projects)

        assert result.total_revenue == 40.0
        assert result.project_count == 2


class TestWeekHelpers:
    """Test cases for week_start() and week_label()."""

    def test_week_start_is_monday(self):
        """Test week_start() returns the Monday of the week."""
        assert week_start(TODAY) == date(2024, 1, 15)

    def test_week_start_of_monday_is_itself(self):
        """Test week_start() of a Monday is that Monday."""
        assert week_start(date(2024, 1, 15)) == date(2024, 1, 15)

    def test_week_start_of_sunday(self):
        """Test week_start() of a Sunday is the previous Monday."""
        assert week_start(date(2024, 1, 21)) == date(2024, 1, 15)

    def test_week_label(self):
        """Test week_label() format."""
        assert week_label(date(2024, 1, 15)) == "Week 2024-01-15"


class TestGetWorkloadByWeek:
    """Test cases for get_workload_by_week()."""

    def test_four_weeks_from_this_monday(self):
        """Test the forecast covers this week and the next three."""
        result = get_workload_by_week([], today=TODAY)

        assert list(result) == [
            "Week 2024-01-15",
            "Week 2024-01-22",
            "Week 2024-01-29",
            "Week 2024-02-05",
        ]
        assert all(hours == 0.0 for hours in result.values())

    def test_project_starting_today_fills_every_week(self):
        """Test 200 hours starting today gives 50 hours in every week."""
        project = make_project(hours_worked=200.0, start_date=TODAY)

        result = get_workload_by_week([project], today=TODAY)

        assert list(result.values()) == [50.0, 50.0, 50.0, 50.0]

    def test_future_project_only_counts_from_its_week(self):
        """Test a project starting later only fills weeks ending after its start."""
        start = date(2024, 2, 1)
        project = make_project(hours_worked=40.0, start_date=start)

        result = get_workload_by_week([project], today=TODAY)

        # Week of 2024-01-15 ends 2024-01-22, week of 2024-01-22 ends
        # 2024-01-29; both before the start date
        assert list(result.values()) == [0.0, 0.0, 10.0, 10.0]

    def test_start_date_on_cutoff_is_included(self):
        """Test a project starting exactly seven days after Monday is counted."""
        project = make_project(hours_worked=8.0, start_date=date(2024, 1, 22))

        result = get_workload_by_week([project], today=TODAY)

        assert result["Week 2024-01-15"] == 2.0

    def test_hours_of_several_projects_add_up(self):
        """Test the quarters of every active project are summed."""
        projects = [
            make_project(hours_worked=40.0, start_date=date(2023, 12, 1)),
            make_project(hours_worked=80.0, start_date=date(2023, 11, 1)),
        ]

        result = get_workload_by_week(projects, today=TODAY)

        assert list(result.values()) == [30.0, 30.0, 30.0, 30.0]

    def test_ignores_inactive_projects(self):
        """Test paused and completed projects are not forecast."""
        projects = [
            make_project(hours_worked=100.0, status=Project.PAUSED),
            make_project(hours_worked=100.0, status=Project.COMPLETED),
        ]

        result = get_workload_by_week(projects, today=TODAY)

        assert all(hours == 0.0 for hours in result.values())

    def test_ignores_projects_without_start_date(self):
        """Test a project with no start date is not forecast."""
        project = make_project(hours_worked=100.0)
        project.start_date = None

        result = get_workload_by_week([project], today=TODAY)

        assert all(hours == 0.0 for hours in result.values())

    def test_defaults_to_today(self):
        """Test the forecast starts this week when no date is given."""
        result = get_workload_by_week([])

        first_label = next(iter(result))
        assert first_label == week_label(week_start(date.today()))

    def test_does_not_mutate_input(self):
        """Test the projects are left unchanged."""
        project = make_project(hours_worked=20.0, start_date=TODAY)

        get_workload_by_week([project], today=TODAY)

        assert project.hours_worked == 20.0
        assert project.start_date == TODAY

    def test_project_starting_next_month_is_not_in_this_week(self):
        """Test a start date beyond the last cutoff contributes nothing."""
        project = make_project(
            hours_worked=100.0, start_date=TODAY + timedelta(weeks=8)
        )

        result = get_workload_by_week([project], today=TODAY)

        assert sum(result.values()) == 0.0


class TestCheckForOverwork:
    """Test cases for check_for_overwork()."""

    def test_warns_for_every_week_over_forty(self):
        """Test 200 hours starting today warns for all four weeks."""
        project = make_project(hours_worked=200.0, start_date=TODAY)

        warnings = check_for_overwork(get_workload_by_week([project], today=TODAY))

        assert warnings == [
            "WARNING: Week 2024-01-15 - overwork (50.0 hours)",
            "WARNING: Week 2024-01-22 - overwork (50.0 hours)",
            "WARNING: Week 2024-01-29 - overwork (50.0 hours)",
            "WARNING: Week 2024-02-05 - overwork (50.0 hours)",
        ]

    def test_no_warnings_at_or_below_forty(self):
        """Test exactly 40 hours is not overwork."""
        workload = {"Week 2024-01-15": 40.0, "Week 2024-01-22": 12.5}

        assert check_for_overwork(workload) == []

    def test_one_warning_per_week_over_forty(self):
        """Test only the weeks over 40 hours are reported, in order."""
        workload = {
            "Week 2024-01-15": 40.1,
            "Week 2024-01-22": 10.0,
            "Week 2024-01-29": 41.0,
            "Week 2024-02-05": 40.0,
        }

        warnings = check_for_overwork(workload)

        assert warnings == [
            "WARNING: Week 2024-01-15 - overwork (40.1 hours)",
            "WARNING: Week 2024-01-29 - overwork (41.0 hours)",
        ]

    def test_empty_workload(self):
        """Test no weeks means no warnings."""
        assert check_for_overwork({}) == []


class TestGetProjectStatistics:
    """Test cases for get_project_statistics()."""

    def test_client_breakdown(self):
        """Test projects are counted per client."""
        projects = [
            make_project(client="Acme"),
            make_project(client="Acme"),
            make_project(client="Beta"),
        ]

        result = get_project_statistics(projects)

        assert result.client_breakdown == {"Acme": 2, "Beta": 1}
        assert result.total_projects == 3

    def test_counts_by_status(self):
        """Test active and completed projects are counted; paused are not."""
        projects = [
            make_project(status=Project.ACTIVE),
            make_project(status=Project.ACTIVE),
            make_project(status=Project.PAUSED),
            make_project(status=Project.COMPLETED),
        ]

        result = get_project_statistics(projects)

        assert result.total_projects == 4
        assert result.active_projects == 2
        assert result.completed_projects == 1
        assert result.active_projects + result.completed_projects <= 4

    def test_empty(self):
        """Test no projects gives zero counts and an empty breakdown."""
        result = get_project_statistics([])

        assert result.total_projects == 0
        assert result.active_projects == 0
        assert result.completed_projects == 0
        assert result.client_breakdown == {}

    def test_statistics_are_frozen(self):
        """Test the result cannot be modified."""
        result = get_project_statistics([])

        with pytest.raises(AttributeError):
            result.total_projects = 5  # type: ignore[misc]

    def test_client_breakdown_is_read_only(self):
        """Test the client breakdown cannot be modified."""
        result = get_project_statistics([make_project(client="Acme")])

        with pytest.raises(TypeError):
            result.client_breakdown["Acme"] = 5  # type: ignore[index]
        with pytest.raises(TypeError):
            ProjectStatistics().client_breakdown["Beta"] = 1  # type: ignore[index]
