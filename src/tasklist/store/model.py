"""Task model for the in-memory task list.

A :class:`Task` is the only entity in the system.  It serializes to the
camelCase JSON shape the HTTP API speaks (``createdAt``) and omits the
``deadline`` key entirely when no deadline is set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskStatus(str, Enum):
    """Progress of a task.  Any status may be assigned from any other."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_deadline(raw: Any) -> Optional[date]:
    """Coerce a deadline value to a :class:`date`.

    Accepts ``None``/``""`` (no deadline), a ``date``, a ``datetime`` or an
    ISO string.  Full timestamps such as ``2024-05-01T00:00:00.000Z`` keep
    only their date part; any other trailing text is rejected.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        if "T" in text:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return datetime.fromisoformat(text).date()
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Invalid deadline: {raw!r}") from exc


def next_status(current: TaskStatus, checked: bool) -> TaskStatus:
    """Return the status a checkbox toggle moves *current* to.

    Checking advances NOT_STARTED -> IN_PROGRESS -> DONE (DONE stays DONE);
    unchecking always goes back to NOT_STARTED.
    """
    if not checked:
        return TaskStatus.NOT_STARTED
    if current == TaskStatus.NOT_STARTED:
        return TaskStatus.IN_PROGRESS
    return TaskStatus.DONE


# ---------------------------------------------------------------------------
# Task dataclass
# ---------------------------------------------------------------------------

@dataclass
class Task:
    """One to-do item."""

    id: str
    title: str
    status: TaskStatus = TaskStatus.NOT_STARTED
    deadline: Optional[date] = None
    created_at: str = field(default_factory=_now_iso)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
        }
        if self.deadline is not None:
            data["deadline"] = self.deadline.isoformat()
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Deserialize from the JSON wire shape."""
        raw_status = data.get("status")
        try:
            status = TaskStatus(str(raw_status)) if raw_status else TaskStatus.NOT_STARTED
        except ValueError:
            status = TaskStatus.NOT_STARTED
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            status=status,
            deadline=parse_deadline(data.get("deadline")),
            created_at=str(data.get("createdAt") or data.get("created_at") or _now_iso()),
        )

    # ------------------------------------------------------------------
    # Status helpers
    # ------------------------------------------------------------------

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE
