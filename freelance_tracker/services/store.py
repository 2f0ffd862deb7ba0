"""Entity store: persistence of projects and time entries."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from freelance_tracker.exc import DoesNotExist, StorageError
from freelance_tracker.models.project import Project
from freelance_tracker.models.time_entry import TimeEntry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


class SessionScope:
    """
    Base class for the stores.

    Every public store method runs in its own short-lived session: the
    session is opened, used, committed by the method and closed again.  Any
    database failure is logged, rolled back and re-raised as a
    :class:`~freelance_tracker.exc.StorageError`.

    Args:
        session_factory: Factory producing SQLAlchemy sessions

    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        #: Factory producing SQLAlchemy sessions
        self.session_factory = session_factory

    @contextmanager
    def session(self, operation: str) -> Iterator[Session]:
        """
        Open a session for one store operation.

        Args:
            operation: Description of the operation, used in error messages

        Yields:
            SQLAlchemy session

        Raises:
            StorageError: the database could not be read or written

        """
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Storage error while %s", operation)
            raise StorageError(operation, e) from e
        finally:
            session.close()


class ProjectStore(SessionScope):
    """
    Reads and writes :class:`~freelance_tracker.models.project.Project` rows.
    """

    def find_all(self) -> list[Project]:
        """
        Get all projects, newest first.
        """
        with self.session("finding all projects") as session:
            return Project.list(session)

    def find_by_id(self, project_id: int) -> Project | None:
        """
        Get a project by ID.

        Args:
            project_id: Project ID

        Returns:
            The project, or None if there is no project with that ID

        """
        with self.session("finding project by id") as session:
            return Project.get(session, project_id)

    def find_by_status(self, status: str) -> list[Project]:
        """
        Get all projects with the given status, newest first.
        """
        with self.session("finding projects by status") as session:
            return Project.list_by_status(session, status)

    def find_by_client(self, client: str) -> list[Project]:
        """
        Get all projects whose client name contains ``client``, newest first.
        """
        with self.session("finding projects by client") as session:
            return Project.list_by_client(session, client)

    def save(self, project: Project) -> Project:
        """
        Insert a new project.

        The fields of ``project`` are copied into a new row; a project with no
        status is ``active``, one with no hours has worked none, and one with
        no start date starts today.

        Args:
            project: Project to insert

        Returns:
            The stored project, with its ``id`` assigned

        """
        with self.session("saving project") as session:
            saved = Project.create(
                session,
                name=project.name,
                client=project.client,
                hourly_rate=project.hourly_rate,
                hours_worked=project.hours_worked or 0.0,
                status=project.status or Project.ACTIVE,
                start_date=project.start_date,
                end_date=project.end_date,
                description=project.description,
            )
            logger.info("Created project %s (%s)", saved.id, saved.name)
            return saved

    def update(self, project: Project) -> None:
        """
        Write the fields of an existing project back to the database.

        Args:
            project: Project with updated fields

        Raises:
            DoesNotExist: there is no project with ``project.id``

        """
        with self.session("updating project") as session:
            if project.id is None or not Project.exists(session, project.id):
                raise DoesNotExist("Project", project.id)  # noqa: EM101
            session.merge(project)
            session.commit()
            logger.info("Updated project %s", project.id)

    def delete(self, project_id: int) -> None:
        """
        Delete a project and its time entries.

        Args:
            project_id: Project ID

        Raises:
            DoesNotExist: there is no project with ``project_id``

        """
        with self.session("deleting project") as session:
            project = Project.get(session, project_id)
            if project is None:
                raise DoesNotExist("Project", project_id)  # noqa: EM101
            session.delete(project)
            session.commit()
            logger.info("Deleted project %s", project_id)


class TimeEntryStore(SessionScope):
    """
    Reads and writes :class:`~freelance_tracker.models.time_entry.TimeEntry` rows.
    """

    def find_all(self) -> list[TimeEntry]:
        """
        Get all time entries, newest first.
        """
        with self.session("finding all time entries") as session:
            return TimeEntry.list(session)

    def find_by_id(self, entry_id: int) -> TimeEntry | None:
        """
        Get a time entry by ID, or None if it does not exist.
        """
        with self.session("finding time entry by id") as session:
            return TimeEntry.get(session, entry_id)

    def find_by_project_id(self, project_id: int) -> list[TimeEntry]:
        """
        Get the time entries of a project, newest first.
        """
        with self.session("finding time entries by project id") as session:
            return TimeEntry.list_for_project(session, project_id)

    def total_hours(self, project_id: int) -> float:
        """
        Sum the hours logged against a project.
        """
        with self.session("summing time entries") as session:
            return TimeEntry.total_hours(session, project_id)

    def save(self, entry: TimeEntry) -> TimeEntry:
        """
        Insert a new time entry.

        Args:
            entry: Time entry to insert

        Returns:
            The stored entry, with its ``id`` assigned

        """
        with self.session("saving time entry") as session:
            saved = TimeEntry.create(
                session,
                project_id=entry.project_id,
                hours=entry.hours,
                start_time=entry.start_time,
                end_time=entry.end_time,
                description=entry.description,
            )
            logger.info(
                "Logged %.2f hours against project %s", saved.hours, saved.project_id
            )
            return saved

    def update(self, entry: TimeEntry) -> None:
        """
        Write the fields of an existing time entry back to the database.

        Raises:
            DoesNotExist: there is no time entry with ``entry.id``

        """
        with self.session("updating time entry") as session:
            if entry.id is None or TimeEntry.get(session, entry.id) is None:
                raise DoesNotExist("TimeEntry", entry.id)  # noqa: EM101
            session.merge(entry)
            session.commit()

    def delete(self, entry_id: int) -> None:
        """
        Delete a time entry.

        Raises:
            DoesNotExist: there is no time entry with ``entry_id``

        """
        with self.session("deleting time entry") as session:
            entry = TimeEntry.get(session, entry_id)
            if entry is None:
                raise DoesNotExist("TimeEntry", entry_id)  # noqa: EM101
            session.delete(entry)
            session.commit()
