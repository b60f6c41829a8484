"""
Pydantic schemas for Task API.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    """Request body for queueing a task."""

    task_name: str = Field(..., min_length=1)
    is_timer_used: bool = False
    run_in_time: datetime | None = None
    priority: int = 0
    params: dict[str, Any] = Field(default_factory=dict)


class TaskCreated(BaseModel):
    """Response model for a queued task."""

    id: int


class TaskResponse(BaseModel):
    """Response model for a task."""

    id: int
    task_name: str
    is_timer_used: bool
    run_in_time: datetime | None
    priority: int
    params_json: str
    created_at: datetime
    done_at: datetime | None

    class Config:
        from_attributes = True


class TaskList(BaseModel):
    """Response model for list of tasks with total count."""

    tasks: list[TaskResponse]
    total: int
