"""
Database initialization and schema creation.

``init_database`` is the single entry point the application uses to obtain its
DatabaseManager: it builds the engine, pings the store, and optionally creates
the schema.
"""

import logging
from typing import Optional
from sqlalchemy import inspect

from filmstore.database.connection import DEFAULT_DATABASE_URL, DatabaseManager

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'movies', 'tasks'}


def init_database(
    database_url: str = DEFAULT_DATABASE_URL,
    echo: bool = False,
    create_tables: bool = False,
    reset: bool = False,
) -> DatabaseManager:
    """
    Open the store and verify it is reachable.

    Args:
        database_url: SQLAlchemy database URL
        echo: If True, log all SQL statements
        create_tables: Create missing tables after connecting
        reset: Drop existing tables before creating new ones (implies create_tables)

    Returns:
        DatabaseManager instance

    Raises:
        StoreConnectionError: If the store cannot be opened or pinged
    """
    db_manager = DatabaseManager(database_url=database_url, echo=echo)
    db_manager.ping()

    if reset:
        logger.warning("Resetting database (dropping all tables)")
        db_manager.reset_database()
    elif create_tables:
        db_manager.create_tables()
        logger.info("Database tables created")

    return db_manager


def verify_schema(db_manager: DatabaseManager, expected: Optional[set] = None) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance
        expected: Table names to look for (default: movies and tasks)

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = (expected or EXPECTED_TABLES) - existing_tables

    if missing_tables:
        logger.warning("Missing tables: %s", sorted(missing_tables))
        return False

    logger.info("All tables exist: %s", sorted(existing_tables))
    return True


if __name__ == "__main__":
    from filmstore.api.config import get_database_url
    from filmstore.utils.logging_config import setup_logging

    setup_logging()
    print("Initializing database...")
    db_manager = init_database(get_database_url(), create_tables=True)

    if verify_schema(db_manager):
        print("\n✅ Database initialization successful!")
    else:
        print("\n❌ Database initialization failed!")
