"""Incremental upload of local .eml files into an IMAP mailbox."""

__version__ = "0.1.0"
