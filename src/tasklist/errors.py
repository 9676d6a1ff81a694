"""Domain errors raised by the task store and mapped by the HTTP layer."""

from __future__ import annotations


class TaskListError(Exception):
    """Base class for task list domain errors."""

    status_code = 500


class ValidationError(TaskListError):
    """Request data failed validation (e.g. blank title on create)."""

    status_code = 400


class NotFoundError(TaskListError):
    """No task exists with the requested id."""

    status_code = 404

    def __init__(self, task_id: str, message: str = "Todo not found") -> None:
        super().__init__(message)
        self.task_id = task_id
