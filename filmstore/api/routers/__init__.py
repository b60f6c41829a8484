"""
API route handlers.
"""

from filmstore.api.routers import movies, tasks, system

__all__ = ["movies", "tasks", "system"]
