"""
Unit tests for task queue operations.
"""

from datetime import datetime

import pytest
from sqlalchemy import text

from filmstore.database import crud
from filmstore.database.connection import DatabaseManager
from filmstore.database.errors import NotFoundError, WriteError
from filmstore.database.records import NewTask, TaskRecord


@pytest.fixture
def db_manager():
    """Create an in-memory SQLite store with the schema."""
    manager = DatabaseManager("sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    session = db_manager.get_session()
    yield session
    session.close()


def set_created_at(session, task_id, timestamp):
    session.execute(
        text("UPDATE tasks SET created_at = :ts WHERE id = :id"),
        {"ts": timestamp, "id": task_id},
    )
    session.commit()


class TestAddTask:
    """Tests for add_task and fetch_all_tasks."""

    def test_add_returns_id(self, session):
        task_id = crud.add_task(session, NewTask("scrape", is_timer_used=True, priority=1))

        tasks = crud.fetch_all_tasks(session)
        assert [t.id for t in tasks] == [task_id]

    def test_ids_increase(self, session):
        ids = [
            crud.add_task(session, NewTask(f"task-{i}", is_timer_used=False, priority=i))
            for i in range(5)
        ]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_fields_round_trip(self, session):
        run_at = datetime(2025, 3, 1, 12, 30)
        task_id = crud.add_task(
            session,
            NewTask.with_params(
                "refresh",
                {"source": "imdb", "pages": 3},
                is_timer_used=True,
                priority=7,
                run_in_time=run_at,
            ),
        )

        task = crud.fetch_all_tasks(session)[0]
        assert isinstance(task, TaskRecord)
        assert task.id == task_id
        assert task.task_name == "refresh"
        assert task.is_timer_used is True
        assert task.run_in_time == run_at
        assert task.priority == 7
        assert task.params == {"source": "imdb", "pages": 3}
        assert isinstance(task.created_at, datetime)
        assert task.done_at is None

    def test_add_without_table(self, db_manager, session):
        db_manager.drop_tables()

        with pytest.raises(WriteError):
            crud.add_task(session, NewTask("scrape", is_timer_used=False, priority=0))

    def test_count(self, session):
        assert crud.get_task_count(session) == 0
        crud.add_task(session, NewTask("a", is_timer_used=False, priority=0))
        assert crud.get_task_count(session) == 1


class TestDeleteTask:
    """Tests for delete_task_by_id."""

    def test_delete(self, session):
        keep = crud.add_task(session, NewTask("keep", is_timer_used=False, priority=0))
        drop = crud.add_task(session, NewTask("drop", is_timer_used=False, priority=0))

        crud.delete_task_by_id(session, drop)

        assert [t.id for t in crud.fetch_all_tasks(session)] == [keep]

    def test_delete_unknown_id(self, session):
        with pytest.raises(NotFoundError):
            crud.delete_task_by_id(session, 12345)

    def test_id_not_reused_after_delete(self, session):
        """A deleted task's id is never handed out again."""
        first = crud.add_task(session, NewTask("first", is_timer_used=False, priority=0))
        second = crud.add_task(session, NewTask("second", is_timer_used=False, priority=0))
        crud.delete_task_by_id(session, second)

        third = crud.add_task(session, NewTask("third", is_timer_used=False, priority=0))

        assert first < second < third

    def test_delete_twice(self, session):
        task_id = crud.add_task(session, NewTask("once", is_timer_used=False, priority=0))
        crud.delete_task_by_id(session, task_id)

        with pytest.raises(NotFoundError):
            crud.delete_task_by_id(session, task_id)


class TestTopPriorityTask:
    """Tests for fetch_top_priority_task."""

    def test_no_timer_tasks(self, session):
        crud.add_task(session, NewTask("manual", is_timer_used=False, priority=100))

        with pytest.raises(NotFoundError):
            crud.fetch_top_priority_task(session)

    def test_empty_queue(self, session):
        with pytest.raises(NotFoundError):
            crud.fetch_top_priority_task(session)

    def test_highest_priority_timer_task(self, session):
        crud.add_task(session, NewTask("low", is_timer_used=True, priority=1))
        high = crud.add_task(session, NewTask("high", is_timer_used=True, priority=5))
        crud.add_task(session, NewTask("manual", is_timer_used=False, priority=99))

        task = crud.fetch_top_priority_task(session)
        assert task.id == high
        assert task.is_timer_used is True

    def test_tie_goes_to_earliest_created(self, session):
        first = crud.add_task(session, NewTask("first", is_timer_used=True, priority=3))
        second = crud.add_task(session, NewTask("second", is_timer_used=True, priority=3))
        set_created_at(session, first, "2024-05-02 08:00:00")
        set_created_at(session, second, "2024-05-01 08:00:00")

        assert crud.fetch_top_priority_task(session).id == second

    def test_tie_same_timestamp(self, session):
        first = crud.add_task(session, NewTask("first", is_timer_used=True, priority=3))
        second = crud.add_task(session, NewTask("second", is_timer_used=True, priority=3))
        set_created_at(session, first, "2024-05-01 08:00:00")
        set_created_at(session, second, "2024-05-01 08:00:00")

        assert crud.fetch_top_priority_task(session).id == first
