"""
System API endpoints (health).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from filmstore.api.dependencies import get_db
from filmstore.database import crud
from filmstore.database.errors import StoreError

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check: database reachable and row counts."""
    try:
        movie_count = crud.get_movie_count(db)
        task_count = crud.get_task_count(db)
    except StoreError as e:
        return {"status": "unhealthy", "database": str(e)}
    return {
        "status": "healthy",
        "database": "connected",
        "movies": movie_count,
        "tasks": task_count,
    }
