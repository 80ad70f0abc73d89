"""Helpers for trnovel tests."""

from __future__ import annotations

import datetime
import typing as t

from trnovel.cache import History, LocalHistoryItem, NetworkHistoryItem

if t.TYPE_CHECKING:
    import pathlib

    from trnovel.cache import HistoryEntry

READ_AT = datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


def local_item(
    title: str = "demo.txt",
    chapter: str = "Chapter 1",
    percent: float = 10.0,
    last_read_at: datetime.datetime = READ_AT,
) -> LocalHistoryItem:
    """Build a local history item with sensible defaults."""
    return LocalHistoryItem(
        current_chapter=chapter,
        last_read_at=last_read_at,
        percent=percent,
        title=title,
    )


def network_item(
    title: str = "Web Novel",
    chapter: str = "Chapter 9",
    percent: float = 42.0,
    book_source: str = "Example Source",
    last_read_at: datetime.datetime = READ_AT,
) -> NetworkHistoryItem:
    """Build a network history item with sensible defaults."""
    return NetworkHistoryItem(
        current_chapter=chapter,
        last_read_at=last_read_at,
        percent=percent,
        title=title,
        book_source=book_source,
    )


def write_history(
    cache_dir: pathlib.Path,
    entries: t.Iterable[HistoryEntry] = (),
    local_path: pathlib.Path | None = None,
) -> History:
    """Write ``history.json`` into ``cache_dir``, most recent entry first."""
    cache_dir.mkdir(parents=True, exist_ok=True)
    history = History(local_path=local_path, histories=list(entries))
    history.save(cache_dir / "history.json")
    return history
