"""
Parsing and validation of project form input.

The form delivers everything as text.  This module turns it into the types
the models use and checks it, collecting every problem so that the user sees
all of them at once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from freelance_tracker.exc import ValidationError
from freelance_tracker.models.project import Project


@dataclass
class ProjectInput:
    """Validated values of the project form."""

    name: str
    client: str
    hourly_rate: float
    hours_worked: float
    status: str
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None

    def apply_to(self, project: Project) -> Project:
        """
        Copy the values onto ``project``.

        Args:
            project: Project to update

        Returns:
            The same project

        """
        project.name = self.name
        project.client = self.client
        project.hourly_rate = self.hourly_rate
        project.hours_worked = self.hours_worked
        project.status = self.status
        project.start_date = self.start_date
        project.end_date = self.end_date
        project.description = self.description
        return project


def parse_number(text: str) -> float:
    """
    Parse a number typed by the user.

    A decimal comma is accepted as well as a decimal point.

    Args:
        text: Input text

    Returns:
        The number

    Raises:
        ValueError: the text is not a number

    """
    value = float(text.strip().replace(",", "."))
    if not math.isfinite(value):
        msg = f"Not a finite number: {text!r}"
        raise ValueError(msg)
    return value


def validate_project_input(  # noqa: PLR0913
    name: str,
    client: str,
    rate: str,
    hours: str,
    status: str = Project.ACTIVE,
    start_date: date | None = None,
    end_date: date | None = None,
    description: str = "",
) -> ProjectInput:
    """
    Validate the project form.

    Args:
        name: Project name
        client: Client name
        rate: Hourly rate, as typed
        hours: Hours worked, as typed

    Keyword Args:
        status: Project status
        start_date: Start date
        end_date: End date
        description: Description

    Returns:
        The validated values

    Raises:
        ValidationError: with one message per invalid field

    """
    errors: list[str] = []
    name = name.strip()
    client = client.strip()
    if not name:
        errors.append("Project name is required")
    if not client:
        errors.append("Client name is required")

    hourly_rate = 0.0
    try:
        hourly_rate = parse_number(rate)
    except ValueError:
        errors.append("Hourly rate must be a number")
    else:
        if hourly_rate <= 0:
            errors.append("Hourly rate must be greater than zero")

    hours_worked = 0.0
    try:
        hours_worked = parse_number(hours)
    except ValueError:
        errors.append("Hours worked must be a number")
    else:
        if hours_worked < 0:
            errors.append("Hours worked cannot be negative")

    if start_date and end_date and end_date < start_date:
        errors.append("End date cannot be before the start date")

    if errors:
        raise ValidationError(errors)

    return ProjectInput(
        name=name,
        client=client,
        hourly_rate=hourly_rate,
        hours_worked=hours_worked,
        status=status or Project.ACTIVE,
        start_date=start_date,
        end_date=end_date,
        description=description.strip() or None,
    )
