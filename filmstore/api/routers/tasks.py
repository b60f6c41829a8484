"""
Task queue API endpoints.
"""

import json

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from filmstore.api.dependencies import get_db
from filmstore.api.models.task import TaskCreate, TaskCreated, TaskResponse, TaskList
from filmstore.database import crud
from filmstore.database.errors import NotFoundError
from filmstore.database.records import NewTask

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=TaskList)
def list_tasks(db: Session = Depends(get_db)):
    """List all queued tasks."""
    tasks = crud.fetch_all_tasks(db)
    return TaskList(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total=len(tasks),
    )


@router.post("", response_model=TaskCreated)
def create_task(task_in: TaskCreate, db: Session = Depends(get_db)):
    """Queue a task and return its id."""
    task = NewTask(
        task_name=task_in.task_name,
        is_timer_used=task_in.is_timer_used,
        priority=task_in.priority,
        params_json=json.dumps(task_in.params),
        run_in_time=task_in.run_in_time,
    )
    return TaskCreated(id=crud.add_task(db, task))


@router.get("/top", response_model=TaskResponse)
def get_top_priority_task(db: Session = Depends(get_db)):
    """Get the timer task that should run next."""
    try:
        return crud.fetch_top_priority_task(db)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    """Remove a task from the queue."""
    try:
        crud.delete_task_by_id(db, task_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"id": task_id, "deleted": True}
