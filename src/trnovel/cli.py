"""Command-line front-end for trnovel.

trnovel.cli
~~~~~~~~~~~

:func:`run` is what the ``trnovel`` launcher awaits. It parses the command
line and dispatches to one of the console commands. The parser never exits
the process: ``--help`` and ``--version`` return normally and bad arguments
raise :exc:`trnovel.exc.UsageError`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import pathlib
import sys
import typing as t

from trnovel import exc
from trnovel.__about__ import __github__, __package_name__, __version__
from trnovel.cache import History, NetworkHistoryItem, clear_cache, novel_cache_dir
from trnovel.display import format_history_item, format_novel_tree
from trnovel.files import novel_files_from_path

if t.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from trnovel.cache import HistoryEntry

    CommandHandler = Callable[[argparse.Namespace], Awaitable[None]]

logger = logging.getLogger(__name__)

DESCRIPTION = f"""\
Terminal reader for novels.

  - local novels
  - network novels
  - reading history

GitHub: {__github__}
"""

#: Single-dash aliases that stand in for a subcommand.
SHORT_FLAGS: dict[str, str] = {
    "-q": "quick",
    "-c": "clear",
    "-n": "network",
    "-l": "local",
    "-H": "history",
}


class ParserExit(Exception):
    """Raised in place of :func:`sys.exit` by :class:`ArgumentParser`."""

    def __init__(self, status: int = 0, message: str | None = None) -> None:
        self.status = status
        self.message = message
        super().__init__(status, message)


class ArgumentParser(argparse.ArgumentParser):
    """:class:`argparse.ArgumentParser` that raises instead of exiting."""

    def exit(self, status: int = 0, message: str | None = None) -> t.NoReturn:  # type: ignore[override]
        if message:
            self._print_message(message, sys.stderr)
        raise ParserExit(status, message)

    def error(self, message: str) -> t.NoReturn:  # type: ignore[override]
        raise exc.UsageError(message, usage=self.format_usage(), prog=self.prog)


def normalize_args(args: Sequence[str]) -> list[str]:
    """Expand a leading short flag into its subcommand.

    Examples
    --------
    >>> normalize_args(["-l", "books"])
    ['local', 'books']
    >>> normalize_args(["history"])
    ['history']
    >>> normalize_args([])
    []
    """
    args = list(args)
    if args and args[0] in SHORT_FLAGS:
        args[0] = SHORT_FLAGS[args[0]]
    return args


def create_parser(prog: str = __package_name__) -> ArgumentParser:
    """Build the argument parser.

    Examples
    --------
    >>> parser = create_parser("trnovel")
    >>> parser.parse_args(["local", "books"]).path
    'books'
    >>> parser.parse_args([]).command is None
    True
    """
    parser = ArgumentParser(
        prog=prog,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    subparsers.add_parser(
        "quick",
        help="Quick mode, continue from where you last stopped reading (-q).",
    )
    subparsers.add_parser(
        "clear",
        help="Clear reading history and cached novels (-c).",
    )
    subparsers.add_parser(
        "network",
        help="Network mode, novels read through book sources (-n).",
    )
    local_parser = subparsers.add_parser("local", help="Local novels (-l).")
    local_parser.add_argument(
        "path",
        nargs="?",
        help="Novel file or directory. Defaults to the last directory used.",
    )
    subparsers.add_parser("history", help="Reading history (-H).")

    return parser


def _print_entries(entries: Sequence[HistoryEntry]) -> None:
    for number, (_, item) in enumerate(entries, start=1):
        print(f"{number:>3}. {format_history_item(item)}")


async def quick_command(args: argparse.Namespace) -> None:
    history = await asyncio.to_thread(History.load)
    entry = history.latest()
    if entry is None:
        raise exc.EmptyHistory("No reading history to continue from.")

    key, item = entry
    print(format_history_item(item))
    print(key)


async def clear_command(args: argparse.Namespace) -> None:
    if not await asyncio.to_thread(clear_cache):
        logger.info("cache directory %s already empty", novel_cache_dir(create=False))


async def network_command(args: argparse.Namespace) -> None:
    history = await asyncio.to_thread(History.load)
    entries = [
        entry
        for entry in history.histories
        if isinstance(entry[1], NetworkHistoryItem)
    ]
    if not entries:
        print("No network reading history.")
        return
    _print_entries(entries)


async def history_command(args: argparse.Namespace) -> None:
    history = await asyncio.to_thread(History.load)
    if not history.histories:
        print("No reading history.")
        return
    _print_entries(history.histories)


async def local_command(args: argparse.Namespace) -> None:
    """List novels under the given path, the remembered path, or the cwd."""
    history = await asyncio.to_thread(History.load)

    if args.path is not None:
        path = pathlib.Path(args.path).expanduser()
    elif history.local_path is not None:
        path = history.local_path
    else:
        path = pathlib.Path.cwd()

    if not path.is_absolute():
        path = pathlib.Path.cwd() / path

    nodes = await asyncio.to_thread(novel_files_from_path, path)

    if args.path is not None and path.is_dir() and path != history.local_path:
        history.local_path = path
        await asyncio.to_thread(history.save)

    if not nodes:
        print(f"No novels found in {path}")
        return
    for line in format_novel_tree(nodes):
        print(line)


COMMANDS: dict[str, CommandHandler] = {
    "quick": quick_command,
    "clear": clear_command,
    "network": network_command,
    "local": local_command,
    "history": history_command,
}


async def run(argv: Sequence[str]) -> None:
    """Parse ``argv`` and run the selected command.

    Parameters
    ----------
    argv : Sequence[str]
        Program name followed by the command-line arguments.

    Raises
    ------
    :exc:`trnovel.exc.TRNovelException`
        On bad arguments or when the command fails.

    Examples
    --------
    >>> import asyncio
    >>> asyncio.run(run(["trnovel", "history"]))
    No reading history.
    """
    argv = list(argv)
    prog = argv[0] if argv else __package_name__
    parser = create_parser(prog)

    try:
        args = parser.parse_args(normalize_args(argv[1:]))
    except ParserExit as e:
        if e.status:
            raise exc.UsageError(
                (e.message or "").strip(),
                usage=parser.format_usage(),
                prog=prog,
            ) from e
        return

    if args.command is None:
        parser.print_help()
        return

    logger.debug("running %s", args.command, extra={"trnovel_command": args.command})
    await COMMANDS[args.command](args)
