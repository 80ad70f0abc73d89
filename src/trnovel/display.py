"""Plain-text rendering for console output."""

from __future__ import annotations

import typing as t

from trnovel.cache import NetworkHistoryItem

if t.TYPE_CHECKING:
    import datetime

    from trnovel.cache import HistoryItem
    from trnovel.files import NovelNode

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
INDENT = "  "


def format_timestamp(value: datetime.datetime) -> str:
    """Format ``value`` in local time.

    Examples
    --------
    >>> import datetime
    >>> ts = datetime.datetime(2024, 5, 1, 12, 0, 0)
    >>> format_timestamp(ts)
    '2024-05-01 12:00:00'
    """
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(TIMESTAMP_FORMAT)


def format_history_item(item: HistoryItem) -> str:
    """Render one history entry on a single line.

    Examples
    --------
    >>> import datetime
    >>> from trnovel.cache import LocalHistoryItem
    >>> item = LocalHistoryItem(
    ...     current_chapter="Chapter 2",
    ...     last_read_at=datetime.datetime(2024, 5, 1, 12, 0, 0),
    ...     percent=12.345,
    ...     title="demo.txt",
    ... )
    >>> format_history_item(item)
    'demo.txt | Chapter 2 | 12.3% | 2024-05-01 12:00:00'
    """
    chapter = item.current_chapter or "-"
    fields = [
        item.title,
        chapter,
        f"{item.percent:.1f}%",
        format_timestamp(item.last_read_at),
    ]
    if isinstance(item, NetworkHistoryItem):
        fields.append(item.book_source)
    return " | ".join(fields)


def format_novel_tree(nodes: t.Iterable[NovelNode], depth: int = 0) -> list[str]:
    """Render a novel tree, one node per line."""
    lines: list[str] = []
    for node in nodes:
        if node.is_dir:
            lines.append(f"{INDENT * depth}{node.name}/")
            lines.extend(format_novel_tree(node.children, depth + 1))
        else:
            lines.append(f"{INDENT * depth}{node.name}")
    return lines
