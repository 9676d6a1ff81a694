"""HTTP server for the task list."""

from .api import create_app

__all__ = ["create_app"]
