"""Unit tests for ProjectStore and TimeEntryStore."""

from datetime import date, datetime

import pytest
from sqlalchemy.exc import OperationalError

from freelance_tracker.db import create_engine_with_path, create_session_factory
from freelance_tracker.exc import DoesNotExist, StorageError
from freelance_tracker.models.project import Project
from freelance_tracker.models.time_entry import TimeEntry
from freelance_tracker.services.store import ProjectStore, TimeEntryStore
from tests.conftest import make_project


@pytest.fixture
def broken_session_factory(tmp_path):
    """Session factory for a database that has no tables."""
    engine = create_engine_with_path(tmp_path / "empty.db")
    yield create_session_factory(engine)
    engine.dispose()


def save_entry(store, project_id, hours=1.0):
    return store.save(TimeEntry(project_id=project_id, hours=hours))


class TestProjectStore:
    """Test cases for ProjectStore."""

    def test_save_assigns_id(self, project_store):
        """Test save() inserts the project and assigns its ID."""
        project = project_store.save(make_project(name="Website"))

        assert project.id is not None
        assert project_store.find_by_id(project.id).name == "Website"

    def test_save_fills_in_defaults(self, project_store):
        """Test a bare project is stored active, with no hours, from today."""
        project = project_store.save(
            Project(name="Website", client="Acme", hourly_rate=50.0)
        )

        found = project_store.find_by_id(project.id)
        assert found.status == Project.ACTIVE
        assert found.hours_worked == 0.0
        assert found.start_date == date.today()
        assert found.end_date is None

    def test_find_by_id_returns_none_when_missing(self, project_store):
        """Test find_by_id() returns None for an unknown ID."""
        assert project_store.find_by_id(99999) is None

    def test_found_project_is_readable_after_session_closes(self, project_store):
        """Test returned projects can be read outside the store."""
        saved = project_store.save(
            make_project(name="Site", hourly_rate=20.0, hours_worked=3.0)
        )

        found = project_store.find_by_id(saved.id)

        assert found.name == "Site"
        assert found.revenue() == 60.0

    def test_find_all_newest_first(self, project_store):
        """Test find_all() orders projects by descending ID."""
        first = project_store.save(make_project(name="First"))
        second = project_store.save(make_project(name="Second"))

        assert [p.id for p in project_store.find_all()] == [second.id, first.id]

    def test_find_all_empty(self, project_store):
        """Test find_all() on an empty database."""
        assert project_store.find_all() == []

    def test_find_by_status(self, project_store):
        """Test find_by_status() filters on status."""
        project_store.save(make_project(name="A", status=Project.ACTIVE))
        done = project_store.save(make_project(name="B", status=Project.COMPLETED))

        result = project_store.find_by_status(Project.COMPLETED)

        assert [p.id for p in result] == [done.id]

    def test_find_by_client(self, project_store):
        """Test find_by_client() matches part of the client name."""
        project_store.save(make_project(client="Acme Corp"))
        project_store.save(make_project(client="Acme Inc"))
        project_store.save(make_project(client="Beta"))

        result = project_store.find_by_client("Acme")

        assert sorted(p.client for p in result) == ["Acme Corp", "Acme Inc"]

    def test_update(self, project_store):
        """Test update() writes the changed fields."""
        project = project_store.save(make_project(name="Old", hours_worked=1.0))
        project.name = "New"
        project.hours_worked = 5.0
        project.end_date = date(2024, 6, 30)

        project_store.update(project)

        found = project_store.find_by_id(project.id)
        assert found.name == "New"
        assert found.hours_worked == 5.0
        assert found.end_date == date(2024, 6, 30)

    def test_update_missing_raises(self, project_store):
        """Test update() raises DoesNotExist for an unknown project."""
        project = make_project()
        project.id = 99999

        with pytest.raises(DoesNotExist):
            project_store.update(project)

        assert project_store.find_all() == []

    def test_update_unsaved_raises(self, project_store):
        """Test update() raises DoesNotExist for a project with no ID."""
        with pytest.raises(DoesNotExist):
            project_store.update(make_project())

    def test_delete(self, project_store):
        """Test delete() removes the project."""
        project = project_store.save(make_project())

        project_store.delete(project.id)

        assert project_store.find_by_id(project.id) is None

    def test_delete_removes_time_entries(self, project_store, time_entry_store):
        """Test delete() removes the project's time entries too."""
        project = project_store.save(make_project())
        save_entry(time_entry_store, project.id)

        project_store.delete(project.id)

        assert time_entry_store.find_all() == []

    def test_delete_missing_raises(self, project_store):
        """Test delete() raises DoesNotExist for an unknown project."""
        with pytest.raises(DoesNotExist) as exc_info:
            project_store.delete(99999)

        assert exc_info.value.resource_type == "Project"
        assert exc_info.value.resource_id == 99999

    def test_storage_failure_is_wrapped(self, broken_session_factory):
        """Test database errors are re-raised as StorageError."""
        store = ProjectStore(broken_session_factory)

        with pytest.raises(StorageError) as exc_info:
            store.find_all()

        assert exc_info.value.operation == "finding all projects"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_storage_failure_on_save(self, broken_session_factory):
        """Test a failed insert is re-raised as StorageError."""
        store = ProjectStore(broken_session_factory)

        with pytest.raises(StorageError, match="saving project"):
            store.save(make_project())

    def test_storage_failure_is_logged(self, broken_session_factory, caplog):
        """Test database errors are logged."""
        store = ProjectStore(broken_session_factory)

        with pytest.raises(StorageError):
            store.find_by_status(Project.ACTIVE)

        assert "Storage error while finding projects by status" in caplog.text


class TestTimeEntryStore:
    """Test cases for TimeEntryStore."""

    @pytest.fixture
    def project(self, project_store):
        return project_store.save(make_project())

    def test_save_and_find_by_id(self, time_entry_store, project):
        """Test save() inserts the entry and find_by_id() reads it back."""
        entry = time_entry_store.save(
            TimeEntry(
                project_id=project.id,
                hours=2.0,
                start_time=datetime(2024, 1, 15, 9, 0),
                end_time=datetime(2024, 1, 15, 11, 0),
                description="Design",
            )
        )

        found = time_entry_store.find_by_id(entry.id)
        assert found.hours == 2.0
        assert found.start_time == datetime(2024, 1, 15, 9, 0)
        assert found.end_time == datetime(2024, 1, 15, 11, 0)
        assert found.description == "Design"

    def test_find_by_id_returns_none_when_missing(self, time_entry_store):
        """Test find_by_id() returns None for an unknown ID."""
        assert time_entry_store.find_by_id(99999) is None

    def test_find_by_project_id(self, project_store, time_entry_store, project):
        """Test find_by_project_id() only returns the project's entries."""
        other = project_store.save(make_project(name="Other"))
        first = save_entry(time_entry_store, project.id)
        second = save_entry(time_entry_store, project.id)
        save_entry(time_entry_store, other.id)

        result = time_entry_store.find_by_project_id(project.id)

        assert [e.id for e in result] == [second.id, first.id]

    def test_total_hours(self, time_entry_store, project):
        """Test total_hours() sums the entries of a project."""
        save_entry(time_entry_store, project.id, hours=1.0)
        save_entry(time_entry_store, project.id, hours=0.5)

        assert time_entry_store.total_hours(project.id) == 1.5

    def test_save_for_missing_project_raises(self, time_entry_store):
        """Test the foreign key failure is re-raised as StorageError."""
        with pytest.raises(StorageError):
            save_entry(time_entry_store, 99999)

    def test_update(self, time_entry_store, project):
        """Test update() writes the changed fields."""
        entry = save_entry(time_entry_store, project.id, hours=1.0)
        entry.hours = 3.0

        time_entry_store.update(entry)

        assert time_entry_store.find_by_id(entry.id).hours == 3.0

    def test_update_missing_raises(self, time_entry_store, project):
        """Test update() raises DoesNotExist for an unknown entry."""
        entry = TimeEntry(id=99999, project_id=project.id, hours=1.0)

        with pytest.raises(DoesNotExist):
            time_entry_store.update(entry)

    def test_delete(self, time_entry_store, project):
        """Test delete() removes the entry."""
        entry = save_entry(time_entry_store, project.id)

        time_entry_store.delete(entry.id)

        assert time_entry_store.find_by_id(entry.id) is None

    def test_delete_missing_raises(self, time_entry_store):
        """Test delete() raises DoesNotExist for an unknown entry."""
        with pytest.raises(DoesNotExist):
            time_entry_store.delete(99999)

    def test_storage_failure_is_wrapped(self, broken_session_factory):
        """Test database errors are re-raised as StorageError."""
        store = TimeEntryStore(broken_session_factory)

        with pytest.raises(StorageError):
            store.total_hours(1)
