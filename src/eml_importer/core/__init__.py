"""Core utilities for configuration, logging, and shared models."""

from .config import AppSettings, RetrySettings, load_app_settings
from .logging import configure_logging
from .models import RunStats, SourceFile, UploadOutcome, UploadStatus

__all__ = [
    "AppSettings",
    "RetrySettings",
    "RunStats",
    "SourceFile",
    "UploadOutcome",
    "UploadStatus",
    "configure_logging",
    "load_app_settings",
]
