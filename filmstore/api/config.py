"""
API configuration loaded from environment or defaults.
"""

import os

from filmstore.database.connection import DEFAULT_DATABASE_URL


def get_database_url() -> str:
    """Get SQLAlchemy database URL from env or default."""
    return os.getenv("DATABASE_URL", "") or DEFAULT_DATABASE_URL


def get_sql_echo() -> bool:
    """Whether the engine should log every SQL statement."""
    return os.getenv("SQL_ECHO", "false").strip().lower() in ("1", "true", "yes", "on")


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))
