"""Command-line entry point for the EML importer."""

from __future__ import annotations

import argparse
from pathlib import Path

from eml_importer.core import AppSettings, configure_logging, load_app_settings
from eml_importer.ingestion import ImportRunner, discover_source_files
from eml_importer.storage import FileLedger


def build_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Upload local .eml files into an IMAP mailbox"
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file containing configuration overrides.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="import",
        choices=["import", "status"],
        help="Operation to execute (default: import).",
    )
    parser.add_argument(
        "--max-attempts",
        dest="max_attempts",
        type=int,
        default=None,
        help="Full runs attempted before giving up (overrides configuration).",
    )
    parser.add_argument(
        "--retry-delay",
        dest="retry_delay",
        type=float,
        default=None,
        help="Seconds to wait between failed attempts (overrides configuration).",
    )
    return parser


def execute(args: argparse.Namespace, settings: AppSettings) -> None:
    """Execute the requested CLI command."""
    if args.command == "status":
        _print_status(settings)
    else:
        runner = ImportRunner(settings)
        runner.run_with_retry(
            max_attempts=args.max_attempts, delay_seconds=args.retry_delay
        )


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    settings = load_app_settings(env_file=args.env_file)
    configure_logging(settings.logging)
    execute(args, settings)


def _print_status(settings: AppSettings) -> None:
    """Report how many candidate files are still waiting for upload."""
    ledger = FileLedger(settings.storage.ledger_path)
    processed = ledger.load()
    candidates = discover_source_files(
        settings.source.directory, settings.source.extension
    )
    pending = [item for item in candidates if item.filename not in processed]
    print(f"Source directory: {settings.source.directory}")
    print(f"Target mailbox: {settings.imap.mailbox} on {settings.imap.host}")
    print(f"Ledger: {settings.storage.ledger_path} ({len(processed)} entries)")
    print(f"Candidate files: {len(candidates)}")
    print(f"Pending upload: {len(pending)}")


if __name__ == "__main__":
    main()
