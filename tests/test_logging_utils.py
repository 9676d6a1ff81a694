"""Tests for logging_utils module."""

from __future__ import annotations

import pytest
from loguru import logger

from tasklist.logging_utils import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    configure_logging("WARNING")


def test_level_filters_messages(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("warning")
    logger.info("quiet message")
    logger.warning("loud message")
    err = capsys.readouterr().err
    assert "quiet message" not in err
    assert "loud message" in err
    assert "WARNING" in err


def test_store_logs_creates(capsys: pytest.CaptureFixture[str]) -> None:
    from tasklist.store.store import TaskStore

    configure_logging("INFO")
    TaskStore().create("Logged task")
    assert "Created task 1: Logged task" in capsys.readouterr().err
