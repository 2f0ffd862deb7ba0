"""Time entry model."""

from __future__ import annotations

import builtins
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Integer, String, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship

from freelance_tracker.db import Base, ISODateTime

if TYPE_CHECKING:
    from freelance_tracker.models.project import Project


class TimeEntry(Base):
    """
    Represents a logged interval of work against a project.
    """

    __tablename__ = "time_entries"

    #: The time entry ID.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    #: The project ID.
    project_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    #: When the work started.
    start_time: Mapped[datetime | None] = mapped_column(ISODateTime, nullable=True)
    #: When the work ended.
    end_time: Mapped[datetime | None] = mapped_column(ISODateTime, nullable=True)
    #: The number of hours worked.
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    #: What was done.
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    # Relationships
    project: Mapped[Project] = relationship("Project", back_populates="time_entries")

    def __repr__(self) -> str:
        return (
            f"<TimeEntry id={self.id!r} project_id={self.project_id!r} "
            f"hours={self.hours!r}>"
        )

    @classmethod
    def get(cls, session: Session, entry_id: int) -> TimeEntry | None:
        """
        Get a time entry by ID.
        """
        return session.get(cls, entry_id)

    @classmethod
    def list(cls, session: Session) -> builtins.list[TimeEntry]:
        """
        List all time entries, newest first.
        """
        return builtins.list(
            session.scalars(select(cls).order_by(cls.id.desc())).all()
        )

    @classmethod
    def list_for_project(
        cls, session: Session, project_id: int
    ) -> builtins.list[TimeEntry]:
        """
        List the time entries of a project, newest first.

        Args:
            session: SQLAlchemy session
            project_id: Project ID

        Returns:
            List of time entries

        """
        return builtins.list(
            session.scalars(
                select(cls)
                .where(cls.project_id == project_id)
                .order_by(cls.id.desc())
            ).all()
        )

    @classmethod
    def total_hours(cls, session: Session, project_id: int) -> float:
        """
        Sum the hours logged against a project.

        Args:
            session: SQLAlchemy session
            project_id: Project ID

        Returns:
            Total logged hours, 0.0 if nothing has been logged

        """
        total = session.scalar(
            select(func.sum(cls.hours)).where(cls.project_id == project_id)
        )
        return float(total or 0.0)

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        session: Session,
        project_id: int,
        hours: float,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        description: str | None = None,
    ) -> TimeEntry:
        """
        Create a new time entry.

        Args:
            session: SQLAlchemy session
            project_id: Project ID
            hours: Hours worked

        Keyword Args:
            start_time: When the work started
            end_time: When the work ended
            description: What was done

        Returns:
            The new :class:`~freelance_tracker.models.time_entry.TimeEntry` object

        """
        entry = cls(
            project_id=project_id,
            hours=hours,
            start_time=start_time,
            end_time=end_time,
            description=description,
        )
        session.add(entry)
        session.commit()
        return entry
