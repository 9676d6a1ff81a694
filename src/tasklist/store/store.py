"""In-memory task store with thread-safe locking.

Holds the authoritative, insertion-ordered task collection for the lifetime
of the process together with the id counter.  Every public method runs
under a single lock and hands back copies, so callers never mutate the
stored entities directly.
"""

from __future__ import annotations

import dataclasses
import threading
from datetime import date
from typing import Any, Mapping, Optional

from loguru import logger

from ..errors import NotFoundError, ValidationError
from .model import Task, TaskStatus, parse_deadline


def _snapshot(task: Task) -> Task:
    return dataclasses.replace(task)


def _deadline(raw: Any) -> Optional[date]:
    try:
        return parse_deadline(raw)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class TaskStore:
    """Ordered, process-local collection of :class:`Task` objects.

    Ids come from a monotonically increasing counter.  They are never reused,
    so the sequence has gaps after deletions.
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._next_id = 1
        self._lock = threading.Lock()

    # -- internal helpers ---------------------------------------------------

    def _generate_id(self) -> str:
        task_id = str(self._next_id)
        self._next_id += 1
        return task_id

    def _index_of(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        raise NotFoundError(task_id)

    # -- public API ---------------------------------------------------------

    def create(self, title: Optional[str], deadline: Any = None) -> Task:
        """Append a new task and return it.

        Raises :class:`ValidationError` when *title* is missing or blank.
        """
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Title is required")
        due = _deadline(deadline)
        with self._lock:
            task = Task(id=self._generate_id(), title=cleaned, deadline=due)
            self._tasks.append(task)
        logger.info("Created task {}: {}", task.id, task.title)
        return _snapshot(task)

    def list(self) -> list[Task]:
        """Return every task in insertion order."""
        with self._lock:
            return [_snapshot(t) for t in self._tasks]

    def get(self, task_id: str) -> Task:
        with self._lock:
            return _snapshot(self._tasks[self._index_of(task_id)])

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Apply a partial update and return the updated task.

        Only keys present in *changes* are considered:

        * ``title``: replaces the title when non-blank after trimming; a blank
          title is ignored and the existing one kept.
        * ``status``: replaces the status.
        * ``deadline``: ``None`` clears it, a date replaces it.

        Raises :class:`NotFoundError` for an unknown id.
        """
        status = changes.get("status")
        if "status" in changes and status is not None and not isinstance(status, TaskStatus):
            try:
                status = TaskStatus(str(status))
            except ValueError as exc:
                raise ValidationError(f"Invalid status: {status!r}") from exc
        due = _deadline(changes["deadline"]) if "deadline" in changes else None

        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            if "title" in changes:
                title = (changes["title"] or "").strip()
                if title:
                    task.title = title
            if status is not None:
                task.status = status
            if "deadline" in changes:
                task.deadline = due
            updated = _snapshot(task)
        logger.debug("Updated task {} with {}", task_id, sorted(changes))
        return updated

    def delete(self, task_id: str) -> None:
        """Remove a task; later tasks shift up by one position."""
        with self._lock:
            self._tasks.pop(self._index_of(task_id))
        logger.info("Deleted task {}", task_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
