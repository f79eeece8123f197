"""Application configuration models and loader utilities."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import BaseModel, Field


class ImapSettings(BaseModel):
    """Settings controlling IMAP connectivity."""

    host: str = Field(default="imap.gmail.com", description="IMAP hostname")
    port: int = Field(default=993, description="IMAP port, typically 993 for SSL")
    username: str | None = Field(default=None, description="Account username")
    app_password: str | None = Field(default=None, description="Gmail app password")
    mailbox: str = Field(
        default="Imported",
        description="Existing mailbox or Gmail label receiving uploads",
    )
    use_ssl: bool = Field(default=True, description="Whether to enforce SSL")
    verify_tls: bool = Field(
        default=True, description="Verify the server certificate and hostname"
    )
    timeout_seconds: float | None = Field(
        default=60.0, gt=0, description="Socket timeout for IMAP commands"
    )


class SourceSettings(BaseModel):
    """Settings describing where message files are read from."""

    directory: Path = Field(
        default=Path("./eml"), description="Directory containing message files"
    )
    extension: str = Field(
        default=".eml", description="Case-insensitive file name suffix to import"
    )


class StorageSettings(BaseModel):
    """Settings for local persistence."""

    ledger_path: Path = Field(
        default=Path("./processed_eml.txt"),
        description="Append-only record of uploaded file names",
    )


class LoggingSettings(BaseModel):
    """Logging preferences."""

    level: str = Field(default="INFO", description="Root logging level")
    structured: bool = Field(
        default=False, description="Use the brace-style formatter with logger name"
    )
    file: Path | None = Field(
        default=Path("./import_eml_log.txt"),
        description="Log file written alongside the console stream",
    )


class RetrySettings(BaseModel):
    """Settings controlling run-level retries and session liveness."""

    max_attempts: int = Field(
        default=100, ge=1, description="Full runs attempted before giving up"
    )
    delay_seconds: float = Field(
        default=5.0, ge=0.0, description="Pause between failed attempts"
    )
    keepalive_interval_seconds: float = Field(
        default=30.0, gt=0.0, description="Interval between NOOP pings"
    )


class AppSettings(BaseModel):
    """Aggregated application configuration."""

    imap: ImapSettings = Field(default_factory=ImapSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)


ENV_PREFIX = "EML_IMPORTER_"


def _normalize_key(raw_key: str) -> list[str]:
    """Convert an environment variable key into a nested attribute path."""
    trimmed = raw_key.removeprefix(ENV_PREFIX)
    return [segment.lower() for segment in trimmed.split("__") if segment]


def _merge_into_tree(tree: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a value to a nested dictionary given a path."""
    cursor = tree
    for segment in path[:-1]:
        next_node = cursor.setdefault(segment, {})
        cursor = cast(dict[str, Any], next_node)
    cursor[path[-1]] = value


def _collect_env_values(
    env_file: Path | str | None, include_environment: bool
) -> dict[str, Any]:
    """Load configuration values from environment variables and optional file."""
    collected: dict[str, Any] = {}

    file_values = {}
    if env_file:
        env_path = Path(env_file)
        if env_path.is_file():
            file_values = {
                key: value
                for key, value in dotenv_values(env_path).items()
                if key and key.startswith(ENV_PREFIX)
            }

    env_values = {}
    if include_environment:
        env_values = {
            key: value
            for key, value in os.environ.items()
            if key.startswith(ENV_PREFIX)
        }

    combined: dict[str, Any] = {**file_values, **env_values}

    for key, value in combined.items():
        path = _normalize_key(key)
        if not path:
            continue
        normalized_value: Any = value
        if isinstance(value, str) and value == "":
            normalized_value = None
        elif isinstance(value, str):
            lowercase_value = value.lower()
            if lowercase_value == "true":
                normalized_value = True
            elif lowercase_value == "false":
                normalized_value = False
        _merge_into_tree(collected, path, normalized_value)

    return collected


@lru_cache(maxsize=1)
def load_app_settings(
    env_file: Path | str | None = None,
    *,
    include_environment: bool = True,
    **overrides: Any,
) -> AppSettings:
    """Load application settings, applying env files and overrides."""
    collected = _collect_env_values(env_file, include_environment)
    if overrides:
        collected.update(overrides)
    return AppSettings.model_validate(collected)


__all__ = [
    "AppSettings",
    "ImapSettings",
    "LoggingSettings",
    "RetrySettings",
    "SourceSettings",
    "StorageSettings",
    "load_app_settings",
]
