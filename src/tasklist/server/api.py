"""FastAPI web server for the task list."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from ..errors import TaskListError
from ..store.store import TaskStore
from .task_api import create_task_router


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = str(err.get("msg", "Invalid value"))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request body"


def create_app(
    store: Optional[TaskStore] = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store: Task store backing the API. A fresh empty store is created
            when omitted.
        enable_cors: Whether to enable CORS.

    Returns:
        Configured FastAPI app.
    """
    app = FastAPI(
        title="Task List",
        description="In-memory task list with create/read/update/delete endpoints",
        version="1.0.0",
    )

    # The browser client is served from a different origin
    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.store = store if store is not None else TaskStore()

    def _get_store() -> TaskStore:
        return app.state.store

    @app.exception_handler(TaskListError)
    async def task_list_error_handler(request: Request, exc: TaskListError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.warning("Rejected {} {}: {}", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(create_task_router(_get_store))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Task List",
            "version": "1.0.0",
            "status": "running",
            "tasks": len(app.state.store),
        }

    return app
