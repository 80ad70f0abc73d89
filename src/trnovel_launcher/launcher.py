"""Forward process arguments to :func:`trnovel.run` and exit with its outcome.

trnovel_launcher.launcher
~~~~~~~~~~~~~~~~~~~~~~~~~

The raw argument vector follows the ``[runtime, script, *args]`` layout.
The script's base name becomes the invocation name handed to ``run``:

>>> forwarded_argv(["/usr/bin/python3", "/opt/trnovel/trnovel.py", "-l", "books"])
['trnovel', '-l', 'books']

:func:`launch` is the only function here that terminates the process.
"""

from __future__ import annotations

import asyncio
import logging
import os
import pathlib
import sys
import traceback
import typing as t

from trnovel_launcher.exc import LauncherError

if t.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from typing_extensions import TypeAlias

    RunCallable: TypeAlias = Callable[[Sequence[str]], Awaitable[object]]

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

LOG_LEVEL_ENV = "TRNOVEL_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING
LOGGER_NAMES = ("trnovel", "trnovel_launcher")


def invocation_name(script: str) -> str:
    """Return the file name of ``script`` without its extension.

    Examples
    --------
    >>> invocation_name("a/b/trnovel.js")
    'trnovel'
    >>> invocation_name("trnovel")
    'trnovel'
    """
    return pathlib.PurePath(script).stem


def split_argv(raw_args: Sequence[str]) -> tuple[str, list[str]]:
    """Split the raw vector into the invocation name and forwarded arguments.

    Examples
    --------
    >>> split_argv(["/usr/bin/node", "/opt/trnovel/trnovel.js"])
    ('trnovel', [])
    """
    if len(raw_args) < 2:
        raise LauncherError(
            f"Expected [runtime, script, *args], got {list(raw_args)!r}",
        )
    _runtime, script, *args = raw_args
    return invocation_name(script), args


def forwarded_argv(raw_args: Sequence[str]) -> list[str]:
    """Return the argument list ``run`` is called with."""
    name, args = split_argv(raw_args)
    return [name, *args]


def _default_run() -> RunCallable:
    from trnovel import run

    return run


def report_failure(error: BaseException, stream: t.TextIO) -> None:
    """Write ``error`` with its traceback to ``stream``."""
    traceback.print_exception(type(error), error, error.__traceback__, file=stream)
    stream.flush()


async def launch_async(
    raw_args: Sequence[str],
    run: RunCallable | None = None,
    stderr: t.TextIO | None = None,
) -> int:
    """Await ``run`` with the forwarded arguments and return the exit code.

    Parameters
    ----------
    raw_args : Sequence[str]
        ``[runtime, script, *args]``.
    run : RunCallable, optional
        Coroutine function to await, defaults to :func:`trnovel.run`.
    stderr : TextIO, optional
        Stream for failure output, defaults to :data:`sys.stderr`.

    Returns
    -------
    int
        ``0`` when ``run`` completes, ``1`` when it raises.

    Examples
    --------
    >>> import asyncio
    >>> calls = []
    >>> async def fake_run(argv):
    ...     calls.append(argv)
    >>> asyncio.run(launch_async(["node", "bin/trnovel.js", "-q"], run=fake_run))
    0
    >>> calls
    [['trnovel', '-q']]
    """
    argv = forwarded_argv(raw_args)
    run = run if run is not None else _default_run()

    logger.debug("launching %s", argv[0], extra={"trnovel_argv": argv})
    try:
        await run(argv)
    except Exception as e:
        report_failure(e, stderr if stderr is not None else sys.stderr)
        return EXIT_FAILURE

    return EXIT_SUCCESS


def resolve_log_level(value: str | None = None) -> int:
    """Map a level name from the environment to a :mod:`logging` level.

    Examples
    --------
    >>> resolve_log_level("debug") == logging.DEBUG
    True
    >>> resolve_log_level("nonsense") == DEFAULT_LOG_LEVEL
    True
    """
    if value is None:
        value = os.environ.get(LOG_LEVEL_ENV)
    if not value or not value.strip():
        return DEFAULT_LOG_LEVEL

    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    return DEFAULT_LOG_LEVEL


def setup_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the trnovel loggers once."""
    if level is None:
        level = resolve_log_level()

    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(level)
        if not any(
            getattr(handler, "_trnovel_handler", False)
            for handler in package_logger.handlers
        ):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(levelname)s %(name)s: %(message)s"),
            )
            handler._trnovel_handler = True  # type: ignore[attr-defined]
            package_logger.addHandler(handler)


def launch(raw_args: Sequence[str], run: RunCallable | None = None) -> t.NoReturn:
    """Run :func:`launch_async` to completion and exit the process."""
    setup_logging()
    sys.exit(asyncio.run(launch_async(raw_args, run=run)))


def main(script: str | None = None) -> t.NoReturn:
    """Console script entry point.

    :data:`sys.argv` has no runtime element, so it is prefixed with
    :data:`sys.executable`. ``script`` replaces ``sys.argv[0]`` when the
    launcher runs as ``python -m trnovel_launcher``.
    """
    argv = list(sys.argv)
    if script is not None or not argv:
        argv[:1] = [script or "trnovel"]
    launch([sys.executable, *argv])
