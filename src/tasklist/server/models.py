"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ..store.model import TaskStatus, parse_deadline


class CreateTodoRequest(BaseModel):
    """Body of ``POST /todos``."""

    title: Optional[str] = None
    deadline: Optional[date] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline_field(cls, value: Any) -> Optional[date]:
        return parse_deadline(value)


class UpdateTodoRequest(BaseModel):
    """Body of ``PUT /todos/{id}``.

    Fields the client omitted are absent from :meth:`changes`; an explicit
    ``"deadline": null`` is kept so the store can clear the deadline.
    """

    title: Optional[str] = None
    status: Optional[TaskStatus] = None
    deadline: Optional[date] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline_field(cls, value: Any) -> Optional[date]:
        return parse_deadline(value)

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.model_fields_set}


class TodoResponse(BaseModel):
    """Task as returned by the API."""

    id: str
    title: str
    status: TaskStatus
    deadline: Optional[date] = None
    createdAt: str


class ErrorResponse(BaseModel):
    error: str
