"""Provide exceptions used by trnovel.

trnovel.exc
~~~~~~~~~~~

Every error raised from :func:`trnovel.run` derives from
:exc:`TRNovelException`. The launcher does not inspect these; it reports them
and exits non-zero.
"""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    import pathlib


class TRNovelException(Exception):
    """Base exception for all trnovel errors."""


class UsageError(TRNovelException):
    """Raised when the command line cannot be parsed.

    Examples
    --------
    >>> err = UsageError("unrecognized arguments: --nope", usage="usage: trnovel")
    >>> str(err)
    'usage: trnovel\\ntrnovel: error: unrecognized arguments: --nope'
    """

    def __init__(
        self,
        message: str,
        usage: str | None = None,
        prog: str = "trnovel",
        *args: object,
    ) -> None:
        self.message = message
        self.usage = usage
        msg = f"{prog}: error: {message}"
        if usage:
            msg = f"{usage.rstrip()}\n{msg}"
        super().__init__(msg, *args)


class CacheError(TRNovelException):
    """Raised when the cache directory cannot be created or removed."""


class HistoryError(CacheError):
    """Raised when ``history.json`` exists but cannot be read."""

    def __init__(
        self,
        path: pathlib.Path,
        reason: str,
        *args: object,
    ) -> None:
        self.path = path
        super().__init__(f"Invalid history file {path}: {reason}", *args)


class NovelPathError(TRNovelException):
    """Base exception for novel path lookups."""


class NovelPathNotFound(NovelPathError):
    """Raised when a novel path does not exist."""

    def __init__(self, path: pathlib.Path, *args: object) -> None:
        self.path = path
        super().__init__(f"No such file or directory: {path}", *args)


class UnsupportedFileType(NovelPathError):
    """Raised when a novel file has an extension trnovel cannot read."""

    def __init__(
        self,
        path: pathlib.Path,
        extensions: t.Iterable[str],
        *args: object,
    ) -> None:
        self.path = path
        supported = ", ".join(f".{ext}" for ext in extensions)
        super().__init__(
            f"Unsupported file type: {path.name} (supported: {supported})",
            *args,
        )


class EmptyHistory(TRNovelException):
    """Raised when there is no reading history to resume from."""
