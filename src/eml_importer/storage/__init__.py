"""Persistence for upload progress."""

from .ledger import FileLedger

__all__ = ["FileLedger"]
