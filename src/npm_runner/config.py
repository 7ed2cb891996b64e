"""Configuration loader for discovery settings.

Settings come from an optional JSON file validated against ``SETTINGS_SCHEMA``
and from environment overrides. File lookup priority:

1. Explicit path argument (``--config``)
2. NPM_RUNNER_CONFIG environment variable
3. ``.npm-runner.json`` in the search root
4. Built-in defaults
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .discovery import IGNORED_DIRS
from .errors import ConfigError

CONFIG_FILE_NAME = ".npm-runner.json"
CONFIG_PATH_ENV_VAR = "NPM_RUNNER_CONFIG"
MAX_WORKERS_ENV_VAR = "NPM_RUNNER_MAX_WORKERS"
LOG_LEVEL_ENV_VAR = "NPM_RUNNER_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "ignoredDirs": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
        "maxWorkers": {"type": "integer", "minimum": 1},
        "logLevel": {"type": "string", "enum": list(LOG_LEVELS)},
    },
    "additionalProperties": False,
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Discovery and logging settings for one run."""

    ignored_dirs: frozenset[str] = frozenset()
    max_workers: int | None = None
    log_level: str = "WARNING"

    @property
    def all_ignored_dirs(self) -> frozenset[str]:
        """Built-in ignore set plus configured additions."""
        return IGNORED_DIRS | self.ignored_dirs

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a schema-valid configuration document."""
        return cls(
            ignored_dirs=frozenset(data.get("ignoredDirs", ())),
            max_workers=data.get("maxWorkers"),
            log_level=data.get("logLevel", "WARNING"),
        )


def _format_errors(errors: list[Any]) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"{pointer or '<root>'}: {error.message}")
    return "; ".join(messages)


def _resolve_config_path(path: Path | str | None, search_root: Path | None) -> Path | None:
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    if search_root is not None:
        candidate = Path(search_root) / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    return None


def _load_file(config_path: Path) -> Settings:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ConfigError(f"Invalid configuration in {config_path}: {_format_errors(errors)}")

    return Settings.from_dict(data)


def _apply_env(settings: Settings) -> Settings:
    max_workers = os.environ.get(MAX_WORKERS_ENV_VAR, "").strip()
    if max_workers:
        try:
            workers = int(max_workers)
        except ValueError:
            workers = 0
        if workers < 1:
            raise ConfigError(f"{MAX_WORKERS_ENV_VAR} must be a positive integer, got {max_workers!r}")
        settings = replace(settings, max_workers=workers)

    log_level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if log_level:
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"{LOG_LEVEL_ENV_VAR} must be one of {', '.join(LOG_LEVELS)}")
        settings = replace(settings, log_level=log_level)

    return settings


def load_settings(path: Path | str | None = None, search_root: Path | None = None) -> Settings:
    """Load settings from the configuration file (if any) and the environment.

    Args:
        path: Optional explicit config file path.
        search_root: Directory searched for ``.npm-runner.json``.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, fails
            schema validation, or an environment override is invalid.
    """
    config_path = _resolve_config_path(path, search_root)
    settings = _load_file(config_path) if config_path is not None else Settings()
    return _apply_env(settings)
