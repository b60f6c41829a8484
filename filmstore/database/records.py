"""
Typed records returned by the data-access layer.

Rows fetched from the store are mapped into these frozen dataclasses. Callers
that need a loosely typed key/value view use ``to_dict()`` instead of a second
query path.
"""

import json
import re
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional


MOVIE_COLUMNS = ("code", "title", "rating", "year", "image_link")
TASK_COLUMNS = (
    "id",
    "task_name",
    "is_timer_used",
    "run_in_time",
    "priority",
    "params_json",
    "created_at",
    "done_at",
)

# ASCII only: the store's CAST must read the text the same way Python does
RATING_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
YEAR_PATTERN = re.compile(r"[0-9]+")


def parse_rating(value: str) -> float:
    """
    Parse a text-encoded rating such as "7.4".

    Raises:
        ValueError: If the text is not a plain decimal number
        TypeError: If the value is not a string
    """
    if not RATING_PATTERN.fullmatch(value):
        raise ValueError(f"invalid rating: {value!r}")
    return float(value)


def parse_year(value: str) -> int:
    """
    Parse a text-encoded year such as "1999".

    Raises:
        ValueError: If the text is not a plain non-negative integer
        TypeError: If the value is not a string
    """
    if not YEAR_PATTERN.fullmatch(value):
        raise ValueError(f"invalid year: {value!r}")
    return int(value)


@dataclass(frozen=True)
class MovieRecord:
    """
    A single row of the ``movies`` table.

    Attributes:
        code: Unique movie code (e.g. an IMDb id)
        title: Movie title
        rating: Decimal rating stored as text (e.g. "7.4")
        year: Release year stored as text (e.g. "1999")
        image_link: URL of the poster image
    """
    code: str
    title: str
    rating: str
    year: str
    image_link: str

    def validate(self) -> None:
        """Check that rating and year parse as numbers."""
        parse_rating(self.rating)
        parse_year(self.year)

    @property
    def rating_value(self) -> float:
        return parse_rating(self.rating)

    @classmethod
    def from_model(cls, movie: Any) -> "MovieRecord":
        """
        Build a record from a mapped ``Movie`` instance.

        Raises:
            ValueError: If the stored rating or year is not numeric
        """
        record = cls(**{column: getattr(movie, column) for column in MOVIE_COLUMNS})
        record.validate()
        return record

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NewTask:
    """Fields supplied by the caller when queueing a task."""
    task_name: str
    is_timer_used: bool
    priority: int
    params_json: str = "{}"
    run_in_time: Optional[datetime] = None

    @classmethod
    def with_params(cls, task_name: str, params: Dict[str, Any], **kwargs) -> "NewTask":
        return cls(task_name=task_name, params_json=json.dumps(params), **kwargs)


@dataclass(frozen=True)
class TaskRecord:
    """
    A single row of the ``tasks`` table.

    Attributes:
        id: Store-assigned identifier
        task_name: Name of the task to run
        is_timer_used: Whether the task is scheduled by timer
        run_in_time: When the task should run (optional)
        priority: Higher values run first
        params_json: JSON-encoded task parameters
        created_at: Timestamp when the row was created
        done_at: Timestamp when the task completed (optional)
    """
    id: int
    task_name: str
    is_timer_used: bool
    run_in_time: Optional[datetime]
    priority: int
    params_json: str
    created_at: datetime
    done_at: Optional[datetime]

    @property
    def params(self) -> Dict[str, Any]:
        return json.loads(self.params_json) if self.params_json else {}

    @classmethod
    def from_model(cls, task: Any) -> "TaskRecord":
        """Build a record from a mapped ``Task`` instance."""
        return cls(**{column: getattr(task, column) for column in TASK_COLUMNS})
