"""IMAP transport adapter providing write access to a mailbox."""

from __future__ import annotations

import base64
import imaplib
import logging
import ssl
import threading
from datetime import datetime
from types import TracebackType

from ..core.config import ImapSettings
from ..core.datetime_utils import ensure_aware
from ..core.interfaces import MailboxSession

LOGGER = logging.getLogger(__name__)


class ImapError(RuntimeError):
    """Wrap low level IMAP errors with additional context."""


class ImapConnectionError(ImapError):
    """Raised when the server cannot be reached, authenticated or is lost."""


class MailboxError(ImapError):
    """Raised when the target mailbox cannot be selected."""


class AppendRejectedError(ImapError):
    """Raised when the server refuses to store a single message."""


class ImapClient(MailboxSession):
    """Thin wrapper around ``imaplib`` for appending messages to one mailbox.

    Every command goes through a single lock, so a keep-alive thread can
    share the connection with the upload loop.
    """

    def __init__(self, settings: ImapSettings, mailbox: str | None = None) -> None:
        """Initialise the client with configuration settings and mailbox."""
        self._settings = settings
        self._connection: imaplib.IMAP4 | imaplib.IMAP4_SSL | None = None
        self._lock = threading.RLock()
        self.mailbox = mailbox or settings.mailbox

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> ImapClient:
        """Connect on entering a context manager scope."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Ensure resources are released on context exit."""
        self.close()

    @property
    def connected(self) -> bool:
        """Whether a session is currently open."""
        return self._connection is not None

    # Public API ---------------------------------------------------------------
    def connect(self) -> None:
        """Establish IMAP connection and select the configured mailbox."""
        if self._connection is not None:
            return

        username = self._settings.username
        password = self._settings.app_password
        if username is None or password is None:
            raise ImapConnectionError("IMAP credentials are not configured")

        connection = self._open_socket()
        try:
            LOGGER.debug("Authenticating as %s", username)
            connection.login(username, password)
        except (imaplib.IMAP4.error, OSError) as exc:
            _shutdown_quietly(connection)
            raise ImapConnectionError(f"Failed to authenticate as {username}") from exc

        try:
            status, _ = connection.select(_quote_mailbox(self.mailbox))
        except imaplib.IMAP4.abort as exc:
            _shutdown_quietly(connection)
            raise ImapConnectionError("Connection lost while selecting mailbox") from exc
        except (imaplib.IMAP4.error, UnicodeError) as exc:
            _shutdown_quietly(connection)
            raise MailboxError(f"Unable to select mailbox '{self.mailbox}'") from exc
        if status != "OK":
            _shutdown_quietly(connection)
            raise MailboxError(f"Unable to select mailbox '{self.mailbox}'")

        self._connection = connection
        LOGGER.info(
            "Connected to IMAP server %s, mailbox '%s'",
            self._settings.host,
            self.mailbox,
        )

    def append(self, payload: bytes, *, internal_date: datetime | None = None) -> None:
        """Append ``payload`` to the selected mailbox.

        ``internal_date`` becomes the message's INTERNALDATE; when omitted the
        server assigns the time of receipt.
        """
        date_value = ensure_aware(internal_date)
        with self._lock:
            connection = self._require_connection()
            try:
                status, data = connection.append(
                    _quote_mailbox(self.mailbox), None, date_value, payload
                )
            except (imaplib.IMAP4.abort, OSError) as exc:
                raise ImapConnectionError("Connection lost during APPEND") from exc
            except imaplib.IMAP4.error as exc:
                raise AppendRejectedError(f"APPEND rejected: {exc}") from exc
        if status != "OK":
            raise AppendRejectedError(f"APPEND rejected: {_describe(data)}")

    def noop(self) -> None:
        """Issue NOOP to keep the session from idling out."""
        with self._lock:
            connection = self._require_connection()
            try:
                status, _ = connection.noop()
            except (imaplib.IMAP4.error, OSError) as exc:
                raise ImapConnectionError("NOOP failed") from exc
        if status != "OK":
            raise ImapConnectionError(f"NOOP returned {status}")

    def close(self) -> None:
        """Log out without CLOSE, which would expunge \\Deleted messages."""
        with self._lock:
            if self._connection is None:
                return
            LOGGER.debug("Logging out of IMAP session")
            _shutdown_quietly(self._connection)
            self._connection = None
        LOGGER.info("IMAP connection closed")

    # Internal helpers ---------------------------------------------------------
    def _open_socket(self) -> imaplib.IMAP4 | imaplib.IMAP4_SSL:
        host = self._settings.host
        port = self._settings.port
        timeout = self._settings.timeout_seconds
        try:
            if self._settings.use_ssl:
                LOGGER.debug("Connecting to IMAP host %s:%s via SSL", host, port)
                return imaplib.IMAP4_SSL(
                    host,
                    port,
                    ssl_context=_build_ssl_context(self._settings.verify_tls),
                    timeout=timeout,
                )
            LOGGER.debug("Connecting to IMAP host %s:%s without SSL", host, port)
            return imaplib.IMAP4(host, port, timeout=timeout)
        except (imaplib.IMAP4.error, OSError) as exc:
            raise ImapConnectionError(
                f"Failed to connect to IMAP server {host}:{port}"
            ) from exc

    def _require_connection(self) -> imaplib.IMAP4 | imaplib.IMAP4_SSL:
        if self._connection is None:
            raise ImapError("IMAP connection has not been established")
        return self._connection


def _build_ssl_context(verify: bool) -> ssl.SSLContext:
    """Return a client context, optionally without certificate checks."""
    context = ssl.create_default_context()
    if not verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _quote_mailbox(name: str) -> str:
    """Encode ``name`` as modified UTF-7 and wrap it in a quoted string."""
    escaped = _encode_modified_utf7(name).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _encode_modified_utf7(name: str) -> str:
    """Encode a mailbox name per RFC 3501 section 5.1.3."""
    encoded: list[str] = []
    pending: list[str] = []

    def flush() -> None:
        if not pending:
            return
        chunk = base64.b64encode("".join(pending).encode("utf-16-be"))
        encoded.append("&" + chunk.rstrip(b"=").decode("ascii").replace("/", ",") + "-")
        pending.clear()

    for char in name:
        if 0x20 <= ord(char) <= 0x7E:
            flush()
            encoded.append("&-" if char == "&" else char)
        else:
            pending.append(char)
    flush()
    return "".join(encoded)


def _describe(data: list[bytes | None] | None) -> str:
    """Render an ``imaplib`` response payload for log messages."""
    if not data:
        return "no details"
    parts = [
        item.decode(errors="replace") if isinstance(item, bytes) else str(item)
        for item in data
        if item is not None
    ]
    return " ".join(parts) or "no details"


def _shutdown_quietly(connection: imaplib.IMAP4) -> None:
    try:
        connection.logout()
    except (imaplib.IMAP4.error, OSError):  # pragma: no cover
        LOGGER.debug("IMAP logout raised; suppressing during shutdown")


__all__ = [
    "AppendRejectedError",
    "ImapClient",
    "ImapConnectionError",
    "ImapError",
    "MailboxError",
]
