"""Tests for the HTTP API client (client/api_client.py)."""

from __future__ import annotations

import json
from datetime import date

import httpx
import pytest
from fastapi.testclient import TestClient

from tasklist.client.api_client import TaskApiClient, TaskApiError
from tasklist.server.api import create_app
from tasklist.store.model import TaskStatus


@pytest.fixture
def api() -> TaskApiClient:
    return TaskApiClient(client=TestClient(create_app(enable_cors=False)))


class TestRoundTrip:
    def test_get_empty(self, api: TaskApiClient) -> None:
        assert api.get_todos() == []

    def test_create_and_list(self, api: TaskApiClient) -> None:
        created = api.create_todo("Buy milk", deadline=date(2024, 5, 1))
        assert created.title == "Buy milk"
        assert created.deadline == date(2024, 5, 1)
        assert created.status == TaskStatus.NOT_STARTED

        listed = api.get_todos()
        assert [t.id for t in listed] == [created.id]

    def test_update_fields(self, api: TaskApiClient) -> None:
        task = api.create_todo("Draft", deadline=date(2024, 5, 1))
        updated = api.update_todo(task.id, status=TaskStatus.IN_PROGRESS)
        assert updated.status == TaskStatus.IN_PROGRESS
        assert updated.deadline == date(2024, 5, 1)

        cleared = api.update_todo(task.id, deadline=None)
        assert cleared.deadline is None
        assert cleared.status == TaskStatus.IN_PROGRESS

    def test_delete(self, api: TaskApiClient) -> None:
        task = api.create_todo("Temp")
        api.delete_todo(task.id)
        assert api.get_todos() == []


class TestErrors:
    def test_blank_title(self, api: TaskApiClient) -> None:
        with pytest.raises(TaskApiError) as info:
            api.create_todo("   ")
        assert info.value.status_code == 400
        assert info.value.message == "Title is required"

    def test_update_unknown(self, api: TaskApiClient) -> None:
        with pytest.raises(TaskApiError) as info:
            api.update_todo("404", title="x")
        assert info.value.is_not_found
        assert info.value.message == "Todo not found"

    def test_delete_unknown(self, api: TaskApiClient) -> None:
        with pytest.raises(TaskApiError) as info:
            api.delete_todo("404")
        assert info.value.status_code == 404

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")
        api = TaskApiClient(client=client)
        with pytest.raises(TaskApiError) as info:
            api.get_todos()
        assert info.value.status_code is None
        assert "Connection error" in info.value.message

    def test_non_json_error_body(self) -> None:
        client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway")),
            base_url="http://test",
        )
        with pytest.raises(TaskApiError) as info:
            TaskApiClient(client=client).get_todos()
        assert info.value.message == "HTTP 502"


class TestPayloads:
    def test_update_sends_only_supplied_fields(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"id": "1", "title": "t", "status": "done", "createdAt": "now"})

        client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://test")
        api = TaskApiClient(client=client)

        api.update_todo("1", status="done")
        api.update_todo("1", deadline=None)
        api.update_todo("1", title="New", deadline=date(2024, 1, 2))

        assert seen == [
            {"status": "done"},
            {"deadline": None},
            {"title": "New", "deadline": "2024-01-02"},
        ]
