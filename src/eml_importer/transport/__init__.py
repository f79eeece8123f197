"""Transport adapters for the remote mailbox."""

from .imap_client import (
    AppendRejectedError,
    ImapClient,
    ImapConnectionError,
    ImapError,
    MailboxError,
)
from .keepalive import KeepAlive

__all__ = [
    "AppendRejectedError",
    "ImapClient",
    "ImapConnectionError",
    "ImapError",
    "KeepAlive",
    "MailboxError",
]
