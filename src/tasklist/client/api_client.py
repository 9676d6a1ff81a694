"""HTTP client for the task list API.

Wraps an :class:`httpx.Client` and decodes responses into :class:`Task`
objects.  Any non-2xx response or transport failure is raised as
:class:`TaskApiError`.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Union

import httpx
from loguru import logger

from ..constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT
from ..store.model import Task, TaskStatus


class TaskApiError(Exception):
    """A request to the task API failed.

    ``status_code`` is ``None`` when the server could not be reached.
    """

    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marks an update field the caller did not supply
UNSET: Any = _Unset()


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"


class TaskApiClient:
    """Synchronous client for the ``/todos`` endpoints.

    Args:
        base_url: Server root, e.g. ``http://127.0.0.1:3001``.
        timeout: Request timeout in seconds.
        client: Pre-built ``httpx.Client`` to use instead of creating one
            (its ``base_url`` is used as-is). Not closed by :meth:`close`.
    """

    def __init__(
        self,
        base_url: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}",
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(
            base_url=base_url,
            timeout=timeout,
            trust_env=False,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TaskApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TimeoutException as exc:
            logger.warning("{} {} timed out: {}", method, path, exc)
            raise TaskApiError(None, f"Request timeout: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("{} {} failed: {}", method, path, exc)
            raise TaskApiError(None, f"Connection error: {exc}") from exc
        if response.is_error:
            message = _error_message(response)
            logger.warning("{} {} -> {}: {}", method, path, response.status_code, message)
            raise TaskApiError(response.status_code, message)
        return response

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_todos(self) -> list[Task]:
        response = self._request("GET", "/todos")
        return [Task.from_dict(item) for item in response.json()]

    def create_todo(self, title: str, deadline: Optional[date] = None) -> Task:
        payload: dict[str, Any] = {"title": title}
        if deadline is not None:
            payload["deadline"] = deadline.isoformat()
        response = self._request("POST", "/todos", json=payload)
        return Task.from_dict(response.json())

    def update_todo(
        self,
        task_id: str,
        *,
        title: Union[str, _Unset] = UNSET,
        status: Union[TaskStatus, str, _Unset] = UNSET,
        deadline: Union[date, None, _Unset] = UNSET,
    ) -> Task:
        """Send a partial update.

        Only supplied fields are sent.  ``deadline=None`` is sent as an
        explicit ``null`` and clears the deadline on the server.
        """
        payload: dict[str, Any] = {}
        if title is not UNSET:
            payload["title"] = title
        if status is not UNSET:
            payload["status"] = TaskStatus(status).value
        if deadline is not UNSET:
            payload["deadline"] = deadline.isoformat() if deadline is not None else None
        response = self._request("PUT", f"/todos/{task_id}", json=payload)
        return Task.from_dict(response.json())

    def delete_todo(self, task_id: str) -> None:
        self._request("DELETE", f"/todos/{task_id}")
