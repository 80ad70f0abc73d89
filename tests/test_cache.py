"""Tests for trnovel's reading history and cache directory."""

from __future__ import annotations

import datetime
import json
import typing as t

import pytest

from tests.helpers import READ_AT, local_item, network_item, write_history
from trnovel import exc
from trnovel.cache import (
    History,
    LocalHistoryItem,
    NetworkHistoryItem,
    clear_cache,
    history_item_from_dict,
    novel_cache_dir,
    parse_timestamp,
)

if t.TYPE_CHECKING:
    import pathlib


def test_cache_dir_under_home(cache_dir: pathlib.Path) -> None:
    """The cache lives in ~/.novel and is created on demand."""
    assert not cache_dir.exists()
    assert novel_cache_dir() == cache_dir
    assert cache_dir.is_dir()


def test_cache_dir_without_create(cache_dir: pathlib.Path) -> None:
    """create=False only computes the location."""
    assert novel_cache_dir(create=False) == cache_dir
    assert not cache_dir.exists()


def test_cache_dir_env_override(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: pathlib.Path,
) -> None:
    """TRNOVEL_CACHE_DIR relocates the cache."""
    custom = tmp_path / "custom" / "cache"
    monkeypatch.setenv("TRNOVEL_CACHE_DIR", str(custom))

    assert novel_cache_dir() == custom
    assert custom.is_dir()


def test_cache_dir_not_creatable(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: pathlib.Path,
) -> None:
    """A cache path blocked by a file raises CacheError."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setenv("TRNOVEL_CACHE_DIR", str(blocker / "cache"))

    with pytest.raises(exc.CacheError):
        novel_cache_dir()


def test_clear_cache(cache_dir: pathlib.Path) -> None:
    """clear_cache reports whether anything was removed."""
    write_history(cache_dir, [("/books/a.txt", local_item())])

    assert clear_cache() is True
    assert not cache_dir.exists()
    assert clear_cache() is False


class TimestampFixture(t.NamedTuple):
    """Test fixture for timestamp parsing."""

    test_id: str
    value: str
    expected: datetime.datetime


TIMESTAMP_FIXTURES: list[TimestampFixture] = [
    TimestampFixture(
        test_id="nanoseconds_with_offset",
        value="2024-05-01T20:00:00.123456789+08:00",
        expected=datetime.datetime(
            2024, 5, 1, 12, 0, 0, 123456, tzinfo=datetime.timezone.utc
        ),
    ),
    TimestampFixture(
        test_id="zulu",
        value="2024-05-01T12:00:00Z",
        expected=datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc),
    ),
    TimestampFixture(
        test_id="microseconds",
        value="2024-05-01T12:00:00.500000+00:00",
        expected=datetime.datetime(
            2024, 5, 1, 12, 0, 0, 500000, tzinfo=datetime.timezone.utc
        ),
    ),
]


@pytest.mark.parametrize(
    list(TimestampFixture._fields),
    TIMESTAMP_FIXTURES,
    ids=[test.test_id for test in TIMESTAMP_FIXTURES],
)
def test_parse_timestamp(
    test_id: str,
    value: str,
    expected: datetime.datetime,
) -> None:
    """RFC 3339 timestamps from the reader parse to aware datetimes."""
    parsed = parse_timestamp(value)
    assert parsed.tzinfo is not None
    assert parsed == expected


def test_history_item_from_dict_local() -> None:
    """Items tagged Local become LocalHistoryItem."""
    item = history_item_from_dict(
        {
            "type": "Local",
            "current_chapter": "",
            "last_read_at": "2024-05-01T12:00:00+00:00",
            "percent": 3,
            "title": "demo.txt",
        }
    )
    assert item == local_item(chapter="", percent=3.0)
    assert isinstance(item.percent, float)


def test_history_item_from_dict_unknown_type() -> None:
    """Unknown tags are rejected."""
    with pytest.raises(ValueError):
        history_item_from_dict(
            {
                "type": "Cloud",
                "current_chapter": "",
                "last_read_at": "2024-05-01T12:00:00+00:00",
                "percent": 0,
                "title": "x",
            }
        )


def test_history_load_missing_file(cache_dir: pathlib.Path) -> None:
    """A missing history file loads as empty history."""
    history = History.load()
    assert history.histories == []
    assert history.local_path is None


def test_history_save_and_load(cache_dir: pathlib.Path) -> None:
    """Saved history loads back unchanged."""
    original = write_history(
        cache_dir,
        [
            ("/books/a.txt", local_item()),
            ("https://example.com/book/1", network_item()),
        ],
        local_path=cache_dir.parent / "books",
    )

    assert History.load() == original


def test_history_file_format(cache_dir: pathlib.Path) -> None:
    """history.json keeps the reader's tagged layout."""
    write_history(cache_dir, [("https://example.com/book/1", network_item())])

    data = json.loads((cache_dir / "history.json").read_text(encoding="utf-8"))
    assert data["local_path"] is None
    [[key, item]] = data["histories"]
    assert key == "https://example.com/book/1"
    assert item == {
        "type": "Network",
        "current_chapter": "Chapter 9",
        "last_read_at": READ_AT.isoformat(),
        "percent": 42.0,
        "title": "Web Novel",
        "book_source": "Example Source",
    }


def test_history_loads_reader_file(cache_dir: pathlib.Path) -> None:
    """A file written by the full-screen reader loads."""
    cache_dir.mkdir()
    (cache_dir / "history.json").write_text(
        json.dumps(
            {
                "local_path": "/home/reader/books",
                "histories": [
                    [
                        "/home/reader/books/a.txt",
                        {
                            "type": "Local",
                            "current_chapter": "第一章",
                            "last_read_at": "2024-05-01T20:00:00.123456789+08:00",
                            "percent": 12.5,
                            "title": "a.txt",
                        },
                    ]
                ],
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )

    history = History.load()

    assert str(history.local_path) == "/home/reader/books"
    [(key, item)] = history.histories
    assert key == "/home/reader/books/a.txt"
    assert isinstance(item, LocalHistoryItem)
    assert item.current_chapter == "第一章"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"histories": [["id", {"type": "Local"}]]}',
        '{"histories": [["id", {"type": "Unknown", "current_chapter": "",'
        ' "last_read_at": "2024-05-01T12:00:00Z", "percent": 0, "title": ""}]]}',
        "[]",
    ],
    ids=["invalid_json", "missing_fields", "unknown_type", "wrong_shape"],
)
def test_history_load_invalid(cache_dir: pathlib.Path, content: str) -> None:
    """Unreadable history raises HistoryError naming the file."""
    cache_dir.mkdir()
    path = cache_dir / "history.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(exc.HistoryError) as excinfo:
        History.load()

    assert excinfo.value.path == path


def test_history_add_moves_existing_to_front() -> None:
    """Re-reading a novel replaces its entry at the front."""
    history = History()
    history.add("a", local_item(title="a", percent=1.0))
    history.add("b", local_item(title="b"))
    history.add("a", local_item(title="a", percent=50.0))

    assert [key for key, _ in history.histories] == ["a", "b"]
    assert history.histories[0][1].percent == 50.0


def test_history_add_caps_length() -> None:
    """The oldest entry is dropped beyond MAX_LEN."""
    history = History()
    for index in range(History.MAX_LEN + 5):
        history.add(str(index), local_item(title=str(index)))

    assert len(history.histories) == History.MAX_LEN
    assert history.histories[0][0] == str(History.MAX_LEN + 4)
    assert history.histories[-1][0] == "5"


def test_history_remove() -> None:
    """Entries are removed by id or index; unknown ids are ignored."""
    history = History()
    history.add("a", local_item())
    history.add("b", network_item())
    history.add("c", local_item())

    history.remove("b")
    history.remove("missing")
    assert [key for key, _ in history.histories] == ["c", "a"]

    history.remove_index(0)
    assert [key for key, _ in history.histories] == ["a"]


def test_history_latest() -> None:
    """latest() is the front entry, or None."""
    history = History()
    assert history.latest() is None

    item = network_item()
    history.add("x", item)
    assert history.latest() == ("x", item)
    assert isinstance(history.latest()[1], NetworkHistoryItem)  # type: ignore[index]
