"""Ingestion pipeline components."""

from .parser import MessageDateParser
from .runner import ImportRunner, RunAbortedError
from .scanner import discover_source_files
from .uploader import DateParserProtocol, MessageUploader

__all__ = [
    "DateParserProtocol",
    "ImportRunner",
    "MessageDateParser",
    "MessageUploader",
    "RunAbortedError",
    "discover_source_files",
]
