"""
FastAPI dependency injection for the database session.
"""

from typing import Generator
from fastapi import Request
from sqlalchemy.orm import Session

from filmstore.database.connection import DatabaseManager


def get_db_manager(request: Request) -> DatabaseManager:
    """Return the DatabaseManager opened at application startup."""
    return request.app.state.db_manager


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager(request)
    with db_manager.session_scope() as session:
        yield session
