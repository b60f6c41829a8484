"""
Film store application package.

This package contains the data-access layer for movies and the task queue,
and the HTTP API built on top of it.
"""

__version__ = "1.0.0"
