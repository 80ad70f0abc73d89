"""Reading history and the on-disk cache directory.

trnovel.cache
~~~~~~~~~~~~~

The cache lives in ``~/.novel`` (override with ``TRNOVEL_CACHE_DIR``) and is
shared with the full-screen reader. Only ``history.json`` is read here; the
other files in the directory are left alone except by :func:`clear_cache`.
"""

from __future__ import annotations

import datetime
import json
import logging
import os
import pathlib
import re
import shutil
import typing as t
from dataclasses import dataclass, field

from typing_extensions import Literal, TypeAlias

from trnovel import exc

if t.TYPE_CHECKING:
    from typing_extensions import Self

logger = logging.getLogger(__name__)

CACHE_DIR_ENV = "TRNOVEL_CACHE_DIR"
CACHE_DIR_NAME = ".novel"
HISTORY_FILE_NAME = "history.json"

HistoryItemType: TypeAlias = Literal["Local", "Network"]

#: chrono writes nanoseconds, :meth:`datetime.datetime.fromisoformat` wants
#: at most microseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def novel_cache_dir(create: bool = True) -> pathlib.Path:
    """Return the cache directory, creating it unless ``create`` is False.

    Examples
    --------
    >>> novel_cache_dir().name
    '.novel'
    """
    raw = os.environ.get(CACHE_DIR_ENV, "").strip()
    path = pathlib.Path(raw) if raw else pathlib.Path.home() / CACHE_DIR_NAME

    if create and not path.exists():
        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise exc.CacheError(f"Cannot create cache directory {path}: {e}") from e
        logger.debug("created cache directory %s", path)

    return path


def clear_cache() -> bool:
    """Remove the cache directory and everything below it.

    Returns
    -------
    bool
        True when something was removed.
    """
    path = novel_cache_dir(create=False)
    if not path.exists():
        return False

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise exc.CacheError(f"Cannot remove cache directory {path}: {e}") from e

    logger.info("removed cache directory %s", path)
    return True


def parse_timestamp(value: str) -> datetime.datetime:
    """Parse an RFC 3339 timestamp as written by the reader.

    Examples
    --------
    >>> parse_timestamp("2024-05-01T12:34:56.123456789+08:00").isoformat()
    '2024-05-01T12:34:56.123456+08:00'
    >>> parse_timestamp("2024-05-01T04:34:56Z").utcoffset()
    datetime.timedelta(0)
    """
    text = _FRACTION_RE.sub(r"\1", value.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


@dataclass(frozen=True)
class LocalHistoryItem:
    """Reading progress of a local novel file."""

    current_chapter: str
    last_read_at: datetime.datetime
    percent: float
    title: str

    item_type: t.ClassVar[HistoryItemType] = "Local"

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "type": self.item_type,
            "current_chapter": self.current_chapter,
            "last_read_at": self.last_read_at.isoformat(),
            "percent": self.percent,
            "title": self.title,
        }


@dataclass(frozen=True)
class NetworkHistoryItem:
    """Reading progress of a novel fetched through a book source."""

    current_chapter: str
    last_read_at: datetime.datetime
    percent: float
    title: str
    book_source: str

    item_type: t.ClassVar[HistoryItemType] = "Network"

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "type": self.item_type,
            "current_chapter": self.current_chapter,
            "last_read_at": self.last_read_at.isoformat(),
            "percent": self.percent,
            "title": self.title,
            "book_source": self.book_source,
        }


HistoryItem: TypeAlias = t.Union[LocalHistoryItem, NetworkHistoryItem]
HistoryEntry: TypeAlias = t.Tuple[str, HistoryItem]


def history_item_from_dict(data: t.Mapping[str, t.Any]) -> HistoryItem:
    """Build a history item from its tagged JSON form.

    Examples
    --------
    >>> item = history_item_from_dict({
    ...     "type": "Network",
    ...     "current_chapter": "Chapter 3",
    ...     "last_read_at": "2024-05-01T12:00:00+00:00",
    ...     "percent": 12.5,
    ...     "title": "Demo",
    ...     "book_source": "Example",
    ... })
    >>> item.book_source
    'Example'
    """
    item_type = data.get("type")
    common = {
        "current_chapter": str(data["current_chapter"]),
        "last_read_at": parse_timestamp(str(data["last_read_at"])),
        "percent": float(data["percent"]),
        "title": str(data["title"]),
    }
    if item_type == LocalHistoryItem.item_type:
        return LocalHistoryItem(**common)
    if item_type == NetworkHistoryItem.item_type:
        return NetworkHistoryItem(book_source=str(data["book_source"]), **common)
    raise ValueError(f"unknown history item type: {item_type!r}")


def history_file_path() -> pathlib.Path:
    """Return the location of ``history.json``."""
    return novel_cache_dir() / HISTORY_FILE_NAME


@dataclass
class History:
    """Reading history, most recent entry first.

    Entry ids are the novel path for local novels and the book URL for
    network novels.

    Examples
    --------
    >>> history = History()
    >>> item = LocalHistoryItem(
    ...     current_chapter="Chapter 1",
    ...     last_read_at=parse_timestamp("2024-05-01T12:00:00+00:00"),
    ...     percent=0.0,
    ...     title="a.txt",
    ... )
    >>> history.add("/books/a.txt", item)
    >>> history.add("/books/b.txt", item)
    >>> history.add("/books/a.txt", item)
    >>> [key for key, _ in history.histories]
    ['/books/a.txt', '/books/b.txt']
    """

    MAX_LEN: t.ClassVar[int] = 100

    local_path: pathlib.Path | None = None
    histories: list[HistoryEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Self:
        local_path = data.get("local_path")
        histories = [
            (str(key), history_item_from_dict(item))
            for key, item in data.get("histories", [])
        ]
        return cls(
            local_path=pathlib.Path(local_path) if local_path else None,
            histories=histories,
        )

    def to_dict(self) -> dict[str, t.Any]:
        return {
            "local_path": str(self.local_path) if self.local_path else None,
            "histories": [[key, item.to_dict()] for key, item in self.histories],
        }

    @classmethod
    def load(cls, path: pathlib.Path | None = None) -> Self:
        """Load history from disk; a missing file is an empty history."""
        path = path or history_file_path()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("no history file at %s", path)
            return cls()
        except OSError as e:
            raise exc.HistoryError(path, str(e)) from e

        try:
            return cls.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise exc.HistoryError(path, str(e)) from e

    def save(self, path: pathlib.Path | None = None) -> None:
        path = path or history_file_path()
        path.write_text(
            json.dumps(self.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.debug(
            "saved history",
            extra={"history_path": str(path), "history_len": len(self.histories)},
        )

    def add(self, key: str, item: HistoryItem) -> None:
        """Move ``key`` to the front, dropping the oldest entry when full."""
        for index, (existing, _) in enumerate(self.histories):
            if existing == key:
                del self.histories[index]
                self.histories.insert(0, (key, item))
                return

        self.histories.insert(0, (key, item))
        if len(self.histories) > self.MAX_LEN:
            self.histories.pop()

    def remove(self, key: str) -> None:
        for index, (existing, _) in enumerate(self.histories):
            if existing == key:
                del self.histories[index]
                return

    def remove_index(self, index: int) -> None:
        del self.histories[index]

    def latest(self) -> HistoryEntry | None:
        return self.histories[0] if self.histories else None
