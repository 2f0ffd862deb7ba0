"""Project model."""

from __future__ import annotations

import builtins
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Float, Integer, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship

from freelance_tracker.db import Base

if TYPE_CHECKING:
    from freelance_tracker.models.time_entry import TimeEntry


class Project(Base):
    """
    Represents a freelance project billed hourly to a client.

    A project has these characteristics:
    - A name and a client
    - An hourly rate and the cumulative hours worked
    - A status: ``active``, ``paused`` or ``completed``
    - A start date and an optional end date
    - A list of time entries

    ``hours_worked`` is the figure every revenue and workload calculation
    uses.  Time entries are a separate log and do not change it.
    """

    __tablename__ = "projects"

    #: Status of a project that is being worked on.
    ACTIVE = "active"
    #: Status of a project that is on hold.
    PAUSED = "paused"
    #: Status of a finished project.
    COMPLETED = "completed"
    #: All known statuses, in the order they are offered in the UI.
    STATUSES = (ACTIVE, PAUSED, COMPLETED)

    #: The project ID.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    #: The project name.
    name: Mapped[str] = mapped_column(String, nullable=False)
    #: The client name.
    client: Mapped[str] = mapped_column(String, nullable=False)
    #: The hourly rate.
    hourly_rate: Mapped[float] = mapped_column(Float, nullable=False)
    #: The cumulative hours worked.
    hours_worked: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    #: The status.
    status: Mapped[str] = mapped_column(String, default=ACTIVE, nullable=False)
    #: The start date.
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    #: The end date.
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    #: The project description.
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    # Relationships
    time_entries: Mapped[builtins.list[TimeEntry]] = relationship(
        "TimeEntry",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="TimeEntry.id",
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} name={self.name!r} client={self.client!r}>"

    def revenue(self) -> float:
        """
        Return the revenue earned on this project.

        Returns:
            ``hourly_rate * hours_worked``

        """
        return self.hourly_rate * self.hours_worked

    @classmethod
    def get(cls, session: Session, project_id: int) -> Project | None:
        """
        Get a project by ID.

        Args:
            session: SQLAlchemy session
            project_id: Project ID

        Returns:
            The project or None if not found

        """
        return session.get(cls, project_id)

    @classmethod
    def exists(cls, session: Session, project_id: int) -> bool:
        """
        Check if a project exists by ID.
        """
        return cls.get(session, project_id) is not None

    @classmethod
    def list(cls, session: Session) -> builtins.list[Project]:
        """
        List all projects, newest first.

        Args:
            session: SQLAlchemy session

        Returns:
            List of projects

        """
        return builtins.list(
            session.scalars(select(cls).order_by(cls.id.desc())).all()
        )

    @classmethod
    def list_by_status(cls, session: Session, status: str) -> builtins.list[Project]:
        """
        List all projects with the given status, newest first.

        Args:
            session: SQLAlchemy session
            status: Project status

        Returns:
            List of projects

        """
        return builtins.list(
            session.scalars(
                select(cls).where(cls.status == status).order_by(cls.id.desc())
            ).all()
        )

    @classmethod
    def list_by_client(cls, session: Session, client: str) -> builtins.list[Project]:
        """
        List all projects whose client name contains ``client``, newest first.

        Matching follows SQLite's ``LIKE``, so it ignores ASCII case.

        Args:
            session: SQLAlchemy session
            client: Client name, or part of it

        Returns:
            List of projects

        """
        return builtins.list(
            session.scalars(
                select(cls)
                .where(cls.client.like(f"%{client}%"))
                .order_by(cls.id.desc())
            ).all()
        )

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        session: Session,
        name: str,
        client: str,
        hourly_rate: float,
        hours_worked: float = 0.0,
        status: str = ACTIVE,
        start_date: date | None = None,
        end_date: date | None = None,
        description: str | None = None,
    ) -> Project:
        """
        Create a new project.

        Args:
            session: SQLAlchemy session
            name: Project name
            client: Client name
            hourly_rate: Hourly rate

        Keyword Args:
            hours_worked: Hours worked so far
            status: Project status
            start_date: Start date; today if not given
            end_date: End date
            description: Free text description

        Returns:
            The new :class:`~freelance_tracker.models.project.Project` object

        """
        project = cls(
            name=name,
            client=client,
            hourly_rate=hourly_rate,
            hours_worked=hours_worked,
            status=status,
            start_date=start_date or date.today(),
            end_date=end_date,
            description=description,
        )
        session.add(project)
        session.commit()
        return project

