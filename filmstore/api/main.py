"""
FastAPI application entry point for the film store API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filmstore.api.config import get_api_host, get_api_port, get_database_url, get_log_level, get_sql_echo
from filmstore.api.routers import movies, tasks, system
from filmstore.database.errors import StoreError, WriteError
from filmstore.database.init_db import init_database
from filmstore.utils.logging_config import configure_api_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store once at startup; a connection failure aborts startup."""
    configure_api_logging(level=get_log_level(), sql_debug=get_sql_echo())
    app.state.db_manager = init_database(get_database_url())
    yield
    app.state.db_manager.close()


app = FastAPI(
    title="Film Store API",
    description="REST API over the movies catalogue and task queue",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(movies.router)
app.include_router(tasks.router)
app.include_router(system.router)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Report unhandled store faults as server errors."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    status_code = 400 if isinstance(exc, WriteError) and isinstance(exc.__cause__, ValueError) else 500
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Film Store API",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_api_host(), port=get_api_port())
