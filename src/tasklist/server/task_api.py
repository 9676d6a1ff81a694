"""Task API endpoints.

This module provides a FastAPI router with the CRUD endpoints for the task
list.  It is mounted under ``/todos`` by the main ``create_app`` factory.
Domain errors raised by the store propagate out of the handlers and are
turned into ``{"error": ...}`` bodies by the app's exception handlers.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import APIRouter, Response
from loguru import logger

from ..errors import ValidationError
from ..store.store import TaskStore
from .models import CreateTodoRequest, ErrorResponse, TodoResponse, UpdateTodoRequest


def create_task_router(get_store: Callable[[], TaskStore]) -> APIRouter:
    """Create the task API router.

    Parameters
    ----------
    get_store:
        A zero-argument callable returning the :class:`TaskStore` that
        backs the endpoints.
    """
    router = APIRouter(prefix="/todos", tags=["todos"])

    @router.get(
        "",
        response_model=list[TodoResponse],
        response_model_exclude_none=True,
    )
    async def list_todos() -> list[dict[str, Any]]:
        return [t.to_dict() for t in get_store().list()]

    @router.post(
        "",
        response_model=TodoResponse,
        response_model_exclude_none=True,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
    )
    async def create_todo(body: Optional[CreateTodoRequest] = None) -> dict[str, Any]:
        if body is None or not body.title or not body.title.strip():
            raise ValidationError("Title is required")
        task = get_store().create(body.title, deadline=body.deadline)
        return task.to_dict()

    @router.put(
        "/{task_id}",
        response_model=TodoResponse,
        response_model_exclude_none=True,
        responses={404: {"model": ErrorResponse}},
    )
    async def update_todo(task_id: str, body: Optional[UpdateTodoRequest] = None) -> dict[str, Any]:
        changes = body.changes() if body is not None else {}
        task = get_store().update(task_id, changes)
        logger.debug("PUT /todos/{} fields={}", task_id, sorted(changes))
        return task.to_dict()

    @router.delete(
        "/{task_id}",
        status_code=204,
        response_class=Response,
        responses={404: {"model": ErrorResponse}},
    )
    async def delete_todo(task_id: str) -> Response:
        get_store().delete(task_id)
        return Response(status_code=204)

    return router
