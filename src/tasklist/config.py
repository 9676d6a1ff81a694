"""Load optional server/client configuration from ``tasklist.yaml``.

Settings are resolved in three layers: built-in defaults, the optional YAML
file, then ``TASKLIST_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .constants import (
    CONFIG_FILE,
    DEFAULT_HOST,
    DEFAULT_LOCALE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    SUPPORTED_LOCALES,
)


@dataclass
class ServerConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors: bool = True
    log_level: str = DEFAULT_LOG_LEVEL


@dataclass
class ClientConfig:
    base_url: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"
    timeout: float = DEFAULT_TIMEOUT
    locale: str = DEFAULT_LOCALE


def load_config_file(path: Optional[Path] = None) -> tuple[dict[str, Any], str | None]:
    """Load the optional YAML config file.

    Args:
        path: Explicit config path. Defaults to ``tasklist.yaml`` in the
            current working directory.

    Returns:
        A tuple of ``(config, error_message)``. If the file is missing,
        returns ``({}, None)``.
    """
    path = path if path is not None else Path.cwd() / CONFIG_FILE
    if not path.exists():
        return {}, None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        return {}, f"Unable to read {path}: {exc}"
    if data is None:
        return {}, None
    if not isinstance(data, dict):
        return {}, f"Invalid config in {path}: expected a mapping"
    return data, None


def _section(config: Mapping[str, Any], key: str) -> dict[str, Any]:
    raw = config.get(key)
    return raw if isinstance(raw, dict) else {}


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_number(value: Any, cast, default, name: str, errors: list[str]):
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        errors.append(f"Invalid {name}: {value!r} (using {default})")
        return default


def get_server_config(
    config: Mapping[str, Any],
    env: Optional[Mapping[str, str]] = None,
) -> tuple[ServerConfig, str | None]:
    """Build the server settings from the ``server:`` block and environment.

    Args:
        config: Parsed config file contents.
        env: Environment mapping (defaults to ``os.environ``).

    Returns:
        A tuple of ``(config, error_message)``. Invalid values keep their
        default and are described in the error message.
    """
    env = os.environ if env is None else env
    raw = _section(config, "server")
    errors: list[str] = []
    cfg = ServerConfig(
        host=str(raw.get("host") or DEFAULT_HOST),
        port=_as_number(raw.get("port"), int, DEFAULT_PORT, "server.port", errors),
        cors=_as_bool(raw.get("cors"), True),
        log_level=str(raw.get("log_level") or DEFAULT_LOG_LEVEL),
    )
    if env.get("TASKLIST_HOST"):
        cfg.host = env["TASKLIST_HOST"]
    if env.get("TASKLIST_PORT"):
        cfg.port = _as_number(env["TASKLIST_PORT"], int, cfg.port, "TASKLIST_PORT", errors)
    if env.get("TASKLIST_LOG_LEVEL"):
        cfg.log_level = env["TASKLIST_LOG_LEVEL"]
    return cfg, "; ".join(errors) or None


def get_client_config(
    config: Mapping[str, Any],
    env: Optional[Mapping[str, str]] = None,
) -> tuple[ClientConfig, str | None]:
    """Build the client settings from the ``client:`` block and environment.

    Unsupported locales fall back to the default locale.
    """
    env = os.environ if env is None else env
    raw = _section(config, "client")
    errors: list[str] = []
    cfg = ClientConfig(
        base_url=str(raw.get("base_url") or ClientConfig.base_url),
        timeout=_as_number(raw.get("timeout"), float, DEFAULT_TIMEOUT, "client.timeout", errors),
        locale=str(raw.get("locale") or DEFAULT_LOCALE),
    )
    if env.get("TASKLIST_URL"):
        cfg.base_url = env["TASKLIST_URL"]
    if env.get("TASKLIST_LOCALE"):
        cfg.locale = env["TASKLIST_LOCALE"]
    if cfg.locale not in SUPPORTED_LOCALES:
        cfg.locale = DEFAULT_LOCALE
    return cfg, "; ".join(errors) or None
