from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from shelfsync.app import export_catalog, run_catalog, sync_catalog
from shelfsync.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from shelfsync.domain.reconcile import TraceHook
    from shelfsync.domain.record import CatalogRecord

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Expected a positive number, got {value}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile the board game catalog with BoardGameGeek and export it",
        epilog=(
            "Credentials come from NOTION_TOKEN and NOTION_DATABASE_ID (DATABASE_ID is also "
            "accepted), or from .config/notion_token and .config/database_id."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_sync_arguments(command: argparse.ArgumentParser) -> None:
        command.add_argument(
            "--limit",
            type=_positive_int,
            help="Maximum number of named records to match before stopping",
        )
        command.add_argument(
            "--trace",
            type=str,
            metavar="NAME",
            help="Log the property bag of the record with this name at every stage",
        )

    sync = subparsers.add_parser("sync", help="Match records and fill missing fields")
    add_sync_arguments(sync)

    export = subparsers.add_parser("export", help="Render the catalog to HTML")
    export.add_argument("--output", type=Path, help="File the export is written to")
    export.add_argument("--header", type=Path, help="HTML fragment placed before the catalog")
    export.add_argument("--footer", type=Path, help="HTML fragment placed after the catalog")

    run = subparsers.add_parser("run", help="Sync, then export from the same snapshot")
    add_sync_arguments(run)

    return parser.parse_args(list(argv))


def _build_trace(name: str | None) -> TraceHook | None:
    if not name:
        return None
    wanted = name.casefold()

    def trace(record: CatalogRecord, stage: str) -> None:
        if record.name.casefold() != wanted:
            return
        log.info("[trace %s] %s: %s", stage, record.name, dict(record.properties))

    return trace


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(
        level=logging.DEBUG if parsed_args.verbose else logging.INFO,
        force=parsed_args.verbose,
    )

    try:
        if parsed_args.command == "sync":
            sync_catalog(limit=parsed_args.limit, trace=_build_trace(parsed_args.trace))
        elif parsed_args.command == "export":
            export_catalog(
                output_path=parsed_args.output,
                header_path=parsed_args.header,
                footer_path=parsed_args.footer,
            )
        elif parsed_args.command == "run":
            run_catalog(limit=parsed_args.limit, trace=_build_trace(parsed_args.trace))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def entrypoint() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    entrypoint()
