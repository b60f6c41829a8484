"""
Database connection management using SQLAlchemy.

This module handles engine creation, the liveness check, and session
management. A DatabaseManager is built once by the application's composition
root and passed to whatever needs a session; there is no module-level instance.
"""

import logging
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from filmstore.database.errors import StoreConnectionError
from filmstore.database.models import Base
from filmstore.database.query_builder import SQLITE_STRICT_FLOAT
from filmstore.database.records import parse_rating

logger = logging.getLogger(__name__)


# Matches the docker-compose service layout
DEFAULT_DATABASE_URL = "postgresql+psycopg2://user:password@db/films_db"

PING_SQL = "SELECT 1"


def _is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _sqlite_lower(value):
    return value.lower() if isinstance(value, str) else value


def _sqlite_strict_float(value):
    return None if value is None else parse_rating(value)


def register_sqlite_functions(dbapi_conn, connection_record):
    """
    Register Python functions on a new SQLite connection.

    ``lower`` is replaced so non-ASCII titles fold case like they do on
    PostgreSQL. ``strict_float`` raises on non-numeric text, which SQLite
    reports as an OperationalError.
    """
    dbapi_conn.create_function("lower", 1, _sqlite_lower, deterministic=True)
    dbapi_conn.create_function(SQLITE_STRICT_FLOAT, 1, _sqlite_strict_float, deterministic=True)


def _engine_kwargs(database_url: str) -> dict:
    """Driver-specific engine options."""
    if _is_sqlite(database_url):
        # One shared connection so in-memory databases survive across sessions
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {}


class DatabaseManager:
    """
    Database connection manager.

    Owns the engine and the session factory for one store.
    """

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL, echo: bool = False):
        """
        Create the engine and session factory.

        No connection is opened here; call ping() to verify the store.

        Args:
            database_url: SQLAlchemy database URL
            echo: If True, log all SQL statements (useful for debugging)

        Raises:
            StoreConnectionError: If the URL is invalid or the driver is missing
        """
        self.database_url = database_url
        try:
            self.engine = create_engine(
                database_url,
                echo=echo,
                **_engine_kwargs(database_url)
            )
        except (ArgumentError, ImportError) as e:
            raise StoreConnectionError(f"failed to connect to database: {e}") from e

        if _is_sqlite(database_url):
            event.listen(self.engine, "connect", register_sqlite_functions)

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    @property
    def safe_url(self) -> str:
        """Database URL with the password masked, for logging."""
        return self.engine.url.render_as_string(hide_password=True)

    def ping(self) -> None:
        """
        Verify the store answers a round-trip query.

        Raises:
            StoreConnectionError: If the connection or the query fails
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text(PING_SQL))
        except SQLAlchemyError as e:
            logger.error("Database ping failed for %s: %s", self.safe_url, e)
            raise StoreConnectionError(f"failed to ping database: {e}") from e
        logger.info("Connected to database %s", self.safe_url)

    def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        """
        Drop and recreate all tables.

        WARNING: This will delete all data in the database!
        """
        self.drop_tables()
        self.create_tables()

    def get_session(self) -> Session:
        """
        Get a new database session.

        Returns:
            SQLAlchemy Session object. The caller closes it.
        """
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        The data-access functions commit their own writes; this rolls back
        anything left pending when the block raises and always closes the
        session.

        Usage:
            with db_manager.session_scope() as session:
                movies = crud.fetch_all_movies(session)

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()
