"""Data models for Freelance Tracker."""

from freelance_tracker.models.project import Project
from freelance_tracker.models.time_entry import TimeEntry

__all__ = ["Project", "TimeEntry"]
