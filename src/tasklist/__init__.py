"""Provide the public `tasklist` package exports."""

from __future__ import annotations

from .errors import NotFoundError, TaskListError, ValidationError
from .server import create_app
from .store import Task, TaskStatus, TaskStore

__all__ = [
    "NotFoundError",
    "Task",
    "TaskListError",
    "TaskStatus",
    "TaskStore",
    "ValidationError",
    "create_app",
]
