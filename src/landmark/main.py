"""Command-line entry point."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TextIO

from landmark import __version__
from landmark.client.api_client import close_api_client
from landmark.config import Settings, get_settings
from landmark.core.chat_session import ChatSession
from landmark.exceptions import ItemStoreError
from landmark.store.items import ItemStore
from landmark.utils.logging import configure_logging

logger = logging.getLogger(__name__)

QUIT_COMMANDS = frozenset({"/quit", "/exit"})
CLEAR_COMMAND = "/clear"


def build_parser() -> argparse.ArgumentParser:
    """Build the ``landmark`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="landmark",
        description="Chat with the LandMark backend and manage local items.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory containing config.yaml / config.local.yaml",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default=None,
        help="Override the configured log format",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    chat = sub.add_parser("chat", help="Send a message, or start an interactive chat")
    chat.add_argument("message", nargs="?", help="Message to send; omit for interactive mode")

    items = sub.add_parser("items", help="Manage locally stored items")
    items_sub = items.add_subparsers(dest="items_command", required=True)

    add = items_sub.add_parser("add", help="Create an item")
    add.add_argument("title")
    add.add_argument("--content", default=None)

    items_sub.add_parser("list", help="List items, newest first")

    delete = items_sub.add_parser("delete", help="Delete an item by id")
    delete.add_argument("id")

    return parser


async def run_chat(
    session: ChatSession,
    message: str | None,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
) -> int:
    """Send one message, or loop over lines from ``stdin`` until EOF.

    Returns:
        Process exit status; 1 if the last send failed.
    """
    if message is not None:
        result = await session.send(message)
        print(result.reply if result.ok else f"Error: {result.error}", file=stdout)
        return 0 if result.ok else 1

    status = 0
    for line in stdin:
        text = line.rstrip("\n")
        if text.strip() in QUIT_COMMANDS:
            break
        if text.strip() == CLEAR_COMMAND:
            session.clear()
            continue
        result = await session.send(text)
        print(result.reply if result.ok else f"Error: {result.error}", file=stdout)
        status = 0 if result.ok else 1
    return status


def run_items(store: ItemStore, args: argparse.Namespace, stdout: TextIO = sys.stdout) -> int:
    """Execute an ``items`` subcommand."""
    if args.items_command == "add":
        item = store.create(title=args.title, content=args.content)
        print(item.id, file=stdout)
        return 0

    if args.items_command == "list":
        for item in store.list():
            print(f"{item.id}  {item.formatted_date}  {item.display_title}", file=stdout)
        return 0

    try:
        item = store.get(args.id)
    except ValueError:
        item = None
    if item is None or not store.delete(item):
        print(f"Item not found: {args.id}", file=stdout)
        return 1
    return 0


async def _chat(settings: Settings, message: str | None) -> int:
    session = ChatSession.from_settings(settings)
    try:
        return await run_chat(session, message)
    finally:
        await close_api_client()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    args = build_parser().parse_args(argv)

    settings = get_settings(args.config_dir)
    configure_logging(
        level=args.log_level or settings.logging.level,
        format=args.log_format or settings.logging.format,
    )

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    if args.command == "chat":
        return asyncio.run(_chat(settings, args.message))

    try:
        return run_items(ItemStore(settings.store.path), args)
    except ItemStoreError as e:
        logger.error(f"Item store error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
