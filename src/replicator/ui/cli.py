from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from replicator.app import build_replication_service
from replicator.config import ConfigurationError, configure_logging
from replicator.domain.model import ObjectKey
from replicator.domain.replication import ReplicationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from replicator.app import ReplicationService

log = logging.getLogger(__name__)


def _parse_key(value: str) -> ObjectKey:
    try:
        return ObjectKey.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replicate Secrets across namespaces")
    subparsers = parser.add_subparsers(dest="command", required=True)

    replicate = subparsers.add_parser(
        "replicate-to",
        help="Create or update copies of a source Secret in other namespaces",
    )
    replicate.add_argument(
        "--source",
        type=_parse_key,
        required=True,
        help="Source Secret as namespace/name",
    )
    replicate.add_argument(
        "--namespace",
        dest="namespaces",
        action="append",
        required=True,
        help="Destination namespace (repeatable)",
    )

    sync = subparsers.add_parser(
        "sync",
        help="Merge a source Secret's data into an existing target Secret",
    )
    sync.add_argument("--source", type=_parse_key, required=True, help="namespace/name")
    sync.add_argument("--target", type=_parse_key, required=True, help="namespace/name")

    clear = subparsers.add_parser(
        "clear",
        help="Remove the data of a dependent Secret but keep the object",
    )
    clear.add_argument("--source", type=_parse_key, required=True, help="namespace/name")
    clear.add_argument("--target", type=_parse_key, required=True, help="namespace/name")

    delete = subparsers.add_parser(
        "delete",
        help="Delete a replica if it only holds replicated keys",
    )
    delete.add_argument("--target", type=_parse_key, required=True, help="namespace/name")

    return parser.parse_args(list(argv))


def _run(service: ReplicationService, args: argparse.Namespace) -> None:
    if args.command == "replicate-to":
        summary = service.replicate_to(args.source, args.namespaces)
        log.info("written: %s", ", ".join(summary.written) or "-")
        log.info("up to date: %s", ", ".join(summary.up_to_date) or "-")
    elif args.command == "sync":
        written = service.sync(args.source, args.target)
        log.info("%s %s", args.target, "updated" if written else "already up to date")
    elif args.command == "clear":
        service.clear(args.source, args.target)
        log.info("cleared data of %s", args.target)
    elif args.command == "delete":
        deleted = service.delete(args.target)
        log.info("%s %s", args.target, "deleted" if deleted else "kept (holds foreign keys)")
    else:  # pragma: no cover - argparse enforces the choices
        raise ValueError(f"Unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        service = build_replication_service()
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)

    try:
        _run(service, parsed_args)
    except ReplicationError:
        log.exception("Replication failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
