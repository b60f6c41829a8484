"""
Pydantic schemas for API request/response validation.
"""

from filmstore.api.models.movie import MovieCreate, MovieResponse, MovieList
from filmstore.api.models.task import TaskCreate, TaskCreated, TaskResponse, TaskList

__all__ = [
    "MovieCreate",
    "MovieResponse",
    "MovieList",
    "TaskCreate",
    "TaskCreated",
    "TaskResponse",
    "TaskList",
]
