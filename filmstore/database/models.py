"""
SQLAlchemy ORM models describing the store schema.

The data-access functions in ``crud`` query these classes and map the results
into the immutable records of ``filmstore.database.records``.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import Boolean, Index, Integer, Text, TIMESTAMP
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Movie(Base):
    """
    Movie table.

    Rating and year are stored as text; queries cast them when comparing.

    Attributes:
        code: Unique movie code, primary key
        title: Movie title
        rating: Decimal rating as text
        year: Release year as text
        image_link: Poster URL
        created_at: Timestamp when record was created
    """
    __tablename__ = 'movies'

    code: Mapped[str] = mapped_column(Text, primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[str] = mapped_column(Text, nullable=False)
    image_link: Mapped[str] = mapped_column(Text, nullable=False, default='')
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )

    __table_args__ = (
        Index('idx_movies_created_at', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Movie(code='{self.code}', title='{self.title}', year='{self.year}')>"


class Task(Base):
    """
    Task queue table.

    Attributes:
        id: Primary key, assigned by the store
        task_name: Name of the task
        is_timer_used: Whether the task is timer-driven
        run_in_time: Scheduled run time (optional)
        priority: Higher runs first
        params_json: JSON-encoded parameters
        created_at: Timestamp when record was created
        done_at: Completion timestamp (optional)
    """
    __tablename__ = 'tasks'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    task_name: Mapped[str] = mapped_column(Text, nullable=False)
    is_timer_used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    run_in_time: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, nullable=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    params_json: Mapped[str] = mapped_column(Text, nullable=False, default='{}')
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    done_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, nullable=True)

    __table_args__ = (
        Index('idx_tasks_timer_priority', 'is_timer_used', 'priority'),
        # Never reuse the id of a deleted task
        {'sqlite_autoincrement': True},
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, task_name='{self.task_name}', priority={self.priority})>"
