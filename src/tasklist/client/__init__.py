"""Client library for the task list API."""

from .api_client import UNSET, TaskApiClient, TaskApiError
from .state import TaskListState

__all__ = ["UNSET", "TaskApiClient", "TaskApiError", "TaskListState"]
