"""
Data-access operations for movies and tasks.

Every function takes an SQLAlchemy Session as its first argument and performs
one round trip against the store. Reads return typed records (or plain dicts
where ``as_dict=True``); writes commit before returning. Store faults are
re-raised as the errors defined in ``filmstore.database.errors``.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from filmstore.database.errors import NotFoundError, ReadError, WriteError
from filmstore.database.models import Movie, Task
from filmstore.database.query_builder import movie_search_statement, top_rated_statement
from filmstore.database.records import MovieRecord, NewTask, TaskRecord

logger = logging.getLogger(__name__)


# Fixed policy for the "latest top rated" listing
TOP_RATED_MIN_RATING = 6.0
TOP_RATED_LIMIT = 50

MovieRows = List[Union[MovieRecord, Dict[str, Any]]]


def _fetch(session: Session, statement, action: str) -> list:
    """Execute a SELECT of mapped objects, translating store faults."""
    try:
        return list(session.scalars(statement).all())
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Failed to %s: %s", action, e)
        raise ReadError(f"failed to {action}: {e}") from e


def _to_movies(movies, as_dict: bool = False) -> MovieRows:
    try:
        records = [MovieRecord.from_model(movie) for movie in movies]
    except (TypeError, ValueError) as e:
        raise ReadError(f"failed to scan row: {e}") from e
    if as_dict:
        return [record.to_dict() for record in records]
    return records


def _count(session: Session, model, action: str) -> int:
    try:
        return int(session.scalar(select(func.count()).select_from(model)))
    except SQLAlchemyError as e:
        session.rollback()
        raise ReadError(f"failed to {action}: {e}") from e


# ==================== MOVIE OPERATIONS ====================

def insert_movie(session: Session, movie: MovieRecord) -> None:
    """
    Insert a new movie.

    Args:
        session: Database session
        movie: Movie to store

    Raises:
        WriteError: If rating/year are not numeric, or the insert fails
            (e.g. the code already exists)
    """
    try:
        movie.validate()
    except (TypeError, ValueError) as e:
        raise WriteError(f"invalid movie {movie.code}: {e}") from e

    try:
        session.add(Movie(**movie.to_dict()))
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning("Failed to insert movie %s: %s", movie.code, e)
        raise WriteError(f"failed to insert movie: {e}") from e


def fetch_all_movies(session: Session, as_dict: bool = False) -> MovieRows:
    """
    Get every movie, in store order.

    Args:
        session: Database session
        as_dict: Return plain dicts instead of MovieRecord objects

    Returns:
        List of movies

    Raises:
        ReadError: If the query or row mapping fails
    """
    return _to_movies(_fetch(session, select(Movie), "fetch movies"), as_dict)


def fetch_top_rated_recent(session: Session, as_dict: bool = False) -> MovieRows:
    """
    Get the most recently added movies rated above 6.

    Ordered by creation time (newest first), then rating (highest first),
    and capped at 50 rows.

    Raises:
        ReadError: If the query or row mapping fails, including a stored
            rating that is not numeric
    """
    statement = top_rated_statement(TOP_RATED_MIN_RATING, TOP_RATED_LIMIT)
    return _to_movies(_fetch(session, statement, "fetch latest top-rated movies"), as_dict)


def get_movie_by_code(session: Session, code: str) -> MovieRecord:
    """
    Get a movie by its unique code.

    Raises:
        NotFoundError: If no movie has this code
        ReadError: If the query or row mapping fails
    """
    try:
        movie = session.get(Movie, code)
    except SQLAlchemyError as e:
        session.rollback()
        raise ReadError(f"failed to fetch movie: {e}") from e
    if movie is None:
        raise NotFoundError(f"movie with code {code} not found")
    return _to_movies([movie])[0]


def search_movies(
    session: Session,
    title: Optional[str] = None,
    years: Optional[Iterable[str]] = None,
    min_rating: float = 0,
    as_dict: bool = False,
) -> MovieRows:
    """
    Search movies by title, release years and minimum rating.

    Each filter is applied only when its input is present; active filters
    are combined with AND. An empty title means no title filter.

    Args:
        session: Database session
        title: Case-insensitive title substring
        years: Accepted release years (exact match on the stored text)
        min_rating: Minimum rating, inclusive; ignored when not positive
        as_dict: Return plain dicts instead of MovieRecord objects

    Returns:
        Matching movies in store order

    Raises:
        ReadError: If the query or row mapping fails
    """
    statement = movie_search_statement(title=title, years=years, min_rating=min_rating)
    logger.debug("Movie search: title=%r years=%r min_rating=%r", title, years, min_rating)
    return _to_movies(_fetch(session, statement, "search movies"), as_dict)


def get_movie_count(session: Session) -> int:
    """Get total count of movies."""
    return _count(session, Movie, "count movies")


# ==================== TASK OPERATIONS ====================

def add_task(session: Session, task: NewTask) -> int:
    """
    Queue a new task.

    Args:
        session: Database session
        task: Task fields

    Returns:
        Identifier assigned by the store

    Raises:
        WriteError: If the insert fails
    """
    row = Task(
        task_name=task.task_name,
        is_timer_used=task.is_timer_used,
        run_in_time=task.run_in_time,
        priority=task.priority,
        params_json=task.params_json,
    )
    try:
        session.add(row)
        session.commit()
        session.refresh(row)
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning("Failed to insert task %s: %s", task.task_name, e)
        raise WriteError(f"failed to insert task: {e}") from e
    return row.id


def delete_task_by_id(session: Session, task_id: int) -> None:
    """
    Delete a task.

    Raises:
        NotFoundError: If no task has this id
        WriteError: If the delete fails
    """
    try:
        task = session.get(Task, task_id)
        if task is not None:
            session.delete(task)
            session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning("Failed to delete task %s: %s", task_id, e)
        raise WriteError(f"failed to delete task: {e}") from e
    if task is None:
        raise NotFoundError(f"task with id {task_id} not found")


def fetch_top_priority_task(session: Session) -> TaskRecord:
    """
    Get the timer-driven task that should run next.

    Highest priority wins; ties go to the earliest created task.

    Raises:
        NotFoundError: If no task uses the timer
        ReadError: If the query fails
    """
    statement = (
        select(Task)
        .where(Task.is_timer_used.is_(True))
        .order_by(Task.priority.desc(), Task.created_at.asc(), Task.id.asc())
        .limit(1)
    )
    tasks = _fetch(session, statement, "fetch top priority task")
    if not tasks:
        raise NotFoundError("no timer task found")
    return TaskRecord.from_model(tasks[0])


def fetch_all_tasks(session: Session) -> List[TaskRecord]:
    """
    Get every task, in store order.

    Raises:
        ReadError: If the query fails
    """
    return [TaskRecord.from_model(task) for task in _fetch(session, select(Task), "fetch tasks")]


def get_task_count(session: Session) -> int:
    """Get total count of tasks."""
    return _count(session, Task, "count tasks")


def is_integrity_error(error: Exception) -> bool:
    """True when a store error was caused by a constraint violation."""
    return isinstance(error.__cause__, IntegrityError)
