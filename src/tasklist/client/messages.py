"""Localized strings shown by task list clients."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..constants import DEFAULT_LOCALE
from ..store.model import TaskStatus

MESSAGES: dict[str, dict[str, str]] = {
    "ja": {
        "load_failed": "タスクの読み込みに失敗しました",
        "create_failed": "タスクの追加に失敗しました",
        "update_failed": "タスクの更新に失敗しました",
        "delete_failed": "タスクの削除に失敗しました",
        "confirm_delete": "このタスクを削除しますか？",
        "empty": "タスクがありません。新しいタスクを追加してください。",
        "deadline": "期限",
        "title": "タスク",
        "status": "状態",
    },
    "en": {
        "load_failed": "Failed to load tasks",
        "create_failed": "Failed to add the task",
        "update_failed": "Failed to update the task",
        "delete_failed": "Failed to delete the task",
        "confirm_delete": "Delete this task?",
        "empty": "No tasks yet. Add a new one.",
        "deadline": "Deadline",
        "title": "Task",
        "status": "Status",
    },
}

STATUS_LABELS: dict[str, dict[TaskStatus, str]] = {
    "ja": {
        TaskStatus.NOT_STARTED: "未着手",
        TaskStatus.IN_PROGRESS: "着手中",
        TaskStatus.DONE: "完了",
    },
    "en": {
        TaskStatus.NOT_STARTED: "Not started",
        TaskStatus.IN_PROGRESS: "In progress",
        TaskStatus.DONE: "Done",
    },
}


def message(key: str, locale: str = DEFAULT_LOCALE) -> str:
    table = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    return table[key]


def status_label(status: TaskStatus, locale: str = DEFAULT_LOCALE) -> str:
    return STATUS_LABELS.get(locale, STATUS_LABELS[DEFAULT_LOCALE])[status]


def format_deadline(deadline: Optional[date], locale: str = DEFAULT_LOCALE) -> Optional[str]:
    """Render a deadline for display, e.g. ``2024/5/1`` in Japanese."""
    if deadline is None:
        return None
    if locale == "ja":
        return f"{deadline.year}/{deadline.month}/{deadline.day}"
    return deadline.isoformat()
