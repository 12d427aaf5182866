"""Command-line interface for SMS Thread Index.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog

from sms_index import __version__
from sms_index.config import get_settings
from sms_index.exceptions import SmsIndexError
from sms_index.index import MessageStoreAccessor
from sms_index.models import Message, ThreadID

logger = structlog.get_logger()


def _add_store_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path to the SQLite message store (default: settings store_db_path)",
    )
    parser.add_argument(
        "--api-level",
        type=int,
        default=None,
        help="Platform capability level used to pick store addresses "
        "(default: settings platform_api_level)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sms-index", description="SMS Thread Index")
    subparsers = parser.add_subparsers(dest="command", required=True)

    conversations_parser = subparsers.add_parser(
        "conversations",
        help="Show the latest message of every conversation",
    )
    _add_store_arguments(conversations_parser)

    thread_parser = subparsers.add_parser("thread", help="Show the messages of one thread")
    thread_parser.add_argument("thread_id", type=int, help="Thread ID")
    _add_store_arguments(thread_parser)

    threads_parser = subparsers.add_parser("threads", help="Show message counts per thread")
    _add_store_arguments(threads_parser)

    return parser


def _accessor_for(args: argparse.Namespace) -> MessageStoreAccessor:
    settings = get_settings()
    overrides: dict[str, object] = {}
    if args.db is not None:
        overrides["store_db_path"] = args.db
    if args.api_level is not None:
        overrides["platform_api_level"] = args.api_level
    if overrides:
        settings = settings.model_copy(update=overrides)
    return MessageStoreAccessor.from_settings(settings)


def _format_message(message: Message) -> str:
    when = message.timestamp
    date_part = when.isoformat() if when else "(no date)"
    return f"{date_part}\t{message.address or '(unknown)'}\t{message}"


def _cmd_conversations(args: argparse.Namespace) -> int:
    conversations = _accessor_for(args).get_conversations()
    for thread_id in sorted(conversations, key=lambda t: t.value):
        print(f"{thread_id}\t{_format_message(conversations[thread_id])}")
    return 0


def _cmd_thread(args: argparse.Namespace) -> int:
    for message in _accessor_for(args).get_messages_in_thread(ThreadID(args.thread_id)):
        print(_format_message(message))
    return 0


def _cmd_threads(args: argparse.Namespace) -> int:
    threads = _accessor_for(args).get_messages_by_thread()
    for thread_id in sorted(threads, key=lambda t: t.value):
        print(f"{thread_id}\t{len(threads[thread_id])} messages")
    return 0


_COMMANDS = {
    "conversations": _cmd_conversations,
    "thread": _cmd_thread,
    "threads": _cmd_threads,
}


def main(args: list[str] | None = None) -> int:
    """Main entry point for the SMS Thread Index CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Configure logging
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper())
        ),
    )

    logger.info("sms_index_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    command = _COMMANDS.get(parsed.command)
    if command is None:
        logger.error("unknown_command", command=parsed.command)
        return 2

    try:
        return command(parsed)
    except SmsIndexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
