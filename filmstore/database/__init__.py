"""
Database module for the film store.

This module provides the schema models, connection management, the filter
query builder, and the data-access operations for movies and tasks.
"""

from filmstore.database.models import Base, Movie, Task
from filmstore.database.connection import DatabaseManager
from filmstore.database.errors import (
    StoreError,
    StoreConnectionError,
    ReadError,
    WriteError,
    NotFoundError,
)
from filmstore.database.records import MovieRecord, NewTask, TaskRecord
from filmstore.database.init_db import init_database, verify_schema
from filmstore.database import crud

__all__ = [
    # Models
    'Base',
    'Movie',
    'Task',
    # Records
    'MovieRecord',
    'NewTask',
    'TaskRecord',
    # Connection
    'DatabaseManager',
    # Errors
    'StoreError',
    'StoreConnectionError',
    'ReadError',
    'WriteError',
    'NotFoundError',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
