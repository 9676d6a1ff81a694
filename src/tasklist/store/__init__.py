"""In-memory task store.

This package provides the task model and the process-local store that owns
the ordered task collection and its id sequence.
"""

from .model import Task, TaskStatus, next_status, parse_deadline
from .store import TaskStore

__all__ = ["Task", "TaskStatus", "TaskStore", "next_status", "parse_deadline"]
