"""
Logging configuration for the film store.

Console logging is always on; the API also writes a rotating ``api.log``.
SQL statement logging follows the engine's ``echo`` flag, so the
``sqlalchemy.engine`` logger is kept quiet here unless asked for.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _file_handler(log_dir: str, log_file: str, max_bytes: int, backup_count: int) -> RotatingFileHandler:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        log_path / log_file,
        maxBytes=max_bytes,
        backupCount=backup_count
    )


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = "logs",
    sql_debug: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_file: Name of log file (default: None, logs to console only)
        log_dir: Directory for log files (default: 'logs')
        sql_debug: Let SQLAlchemy engine logs through at the root level
        max_bytes: Maximum size of log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
    """
    log_level = getattr(logging, level.upper())
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(_file_handler(log_dir, log_file, max_bytes, backup_count))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger('sqlalchemy.engine').setLevel(log_level if sql_debug else logging.WARNING)
    if log_file:
        root_logger.info("Logging to file: %s", Path(log_dir) / log_file)


def configure_api_logging(level: str = "INFO", sql_debug: bool = False):
    """
    Configure logging for the API process.

    Args:
        level: Logging level name, usually from LOG_LEVEL
        sql_debug: Also show SQL statements (SQL_ECHO)
    """
    setup_logging(level=level, log_file="api.log", log_dir="logs", sql_debug=sql_debug)
