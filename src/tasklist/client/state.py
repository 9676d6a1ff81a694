"""Client-side view of the task list.

:class:`TaskListState` caches the tasks fetched from the server and applies
mutations only after the server confirms them, so a failed request leaves
the cache untouched and only sets :attr:`TaskListState.error`, a localized
banner string.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from loguru import logger

from ..constants import DEFAULT_LOCALE
from ..store.model import Task, TaskStatus, next_status, parse_deadline
from . import messages
from .api_client import TaskApiClient, TaskApiError


class TaskListState:
    """Cached task collection driven through a :class:`TaskApiClient`."""

    def __init__(self, api: TaskApiClient, locale: str = DEFAULT_LOCALE) -> None:
        self.api = api
        self.locale = locale
        self.todos: list[Task] = []
        self.error: Optional[str] = None
        self.is_loading = False

    # -- helpers ------------------------------------------------------------

    def _fail(self, key: str, exc: TaskApiError) -> None:
        self.error = messages.message(key, self.locale)
        logger.warning("{}: {}", key, exc)

    def find(self, task_id: str) -> Optional[Task]:
        for task in self.todos:
            if task.id == task_id:
                return task
        return None

    def status_label(self, task: Task) -> str:
        return messages.status_label(task.status, self.locale)

    def deadline_label(self, task: Task) -> Optional[str]:
        return messages.format_deadline(task.deadline, self.locale)

    # -- operations ---------------------------------------------------------

    def load(self) -> bool:
        """Replace the cache with the server's task list."""
        self.is_loading = True
        self.error = None
        try:
            self.todos = self.api.get_todos()
            return True
        except TaskApiError as exc:
            self._fail("load_failed", exc)
            return False
        finally:
            self.is_loading = False

    def add(self, title: str, deadline: Optional[date] = None) -> Optional[Task]:
        """Create a task; blank titles are ignored without a request."""
        if not title.strip():
            return None
        self.error = None
        try:
            task = self.api.create_todo(title.strip(), deadline=deadline)
        except TaskApiError as exc:
            self._fail("create_failed", exc)
            return None
        self.todos.append(task)
        return task

    def update(self, task_id: str, **fields) -> Optional[Task]:
        """Send a partial update and swap the confirmed task into the cache."""
        self.error = None
        try:
            updated = self.api.update_todo(task_id, **fields)
        except TaskApiError as exc:
            self._fail("update_failed", exc)
            return None
        self.todos = [updated if t.id == task_id else t for t in self.todos]
        return updated

    def rename(self, task_id: str, title: str) -> Optional[Task]:
        if not title.strip():
            return None
        return self.update(task_id, title=title.strip())

    def set_status(self, task_id: str, status: TaskStatus) -> Optional[Task]:
        return self.update(task_id, status=status)

    def toggle(self, task_id: str, checked: bool) -> Optional[Task]:
        """Apply a checkbox change using the status cycle of :func:`next_status`."""
        task = self.find(task_id)
        current = task.status if task is not None else TaskStatus.NOT_STARTED
        return self.update(task_id, status=next_status(current, checked))

    def set_deadline(self, task_id: str, deadline: Optional[date | str]) -> Optional[Task]:
        """Save a deadline; an empty value clears it."""
        try:
            due = parse_deadline(deadline)
        except ValueError as exc:
            self.error = messages.message("update_failed", self.locale)
            logger.warning("update_failed: {}", exc)
            return None
        return self.update(task_id, deadline=due)

    def clear_deadline(self, task_id: str) -> Optional[Task]:
        return self.update(task_id, deadline=None)

    def delete(
        self,
        task_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
    ) -> bool:
        """Delete a task after optional confirmation.

        ``confirm`` receives the localized prompt and returns whether to
        proceed.
        """
        if confirm is not None and not confirm(messages.message("confirm_delete", self.locale)):
            return False
        self.error = None
        try:
            self.api.delete_todo(task_id)
        except TaskApiError as exc:
            self._fail("delete_failed", exc)
            return False
        self.todos = [t for t in self.todos if t.id != task_id]
        return True
