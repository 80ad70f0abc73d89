"""Discovery of novel files on disk."""

from __future__ import annotations

import logging
import pathlib
import typing as t
from dataclasses import dataclass, field

from trnovel import exc

logger = logging.getLogger(__name__)

NOVEL_EXTENSIONS: tuple[str, ...] = ("txt",)


@dataclass(frozen=True)
class NovelNode:
    """A novel file, or a directory that contains novels."""

    path: pathlib.Path
    name: str
    children: tuple[NovelNode, ...] = field(default_factory=tuple)

    @property
    def is_dir(self) -> bool:
        return bool(self.children)

    def walk(self) -> t.Iterator[NovelNode]:
        """Yield this node and every node below it, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def has_novel_extension(
    path: pathlib.Path,
    extensions: t.Iterable[str] = NOVEL_EXTENSIONS,
) -> bool:
    """Return True if ``path`` ends in one of ``extensions``.

    Examples
    --------
    >>> import pathlib
    >>> has_novel_extension(pathlib.Path("book.txt"))
    True
    >>> has_novel_extension(pathlib.Path("book.epub"))
    False
    """
    return path.suffix.lstrip(".") in tuple(extensions)


def _sort_key(path: pathlib.Path) -> tuple[bool, pathlib.Path]:
    return (not path.is_dir(), path)


def find_novels(
    path: pathlib.Path,
    extensions: t.Iterable[str] = NOVEL_EXTENSIONS,
) -> list[NovelNode]:
    """Return the novel tree below ``path``.

    Directories are listed before files. Directories with no novels anywhere
    below them are left out.
    """
    extensions = tuple(extensions)
    nodes: list[NovelNode] = []

    for entry in sorted(path.iterdir(), key=_sort_key):
        if entry.is_dir():
            children = find_novels(entry, extensions)
            if not children:
                continue
            nodes.append(NovelNode(entry, entry.name, tuple(children)))
        elif entry.is_file() and has_novel_extension(entry, extensions):
            nodes.append(NovelNode(entry, entry.name))

    return nodes


def novel_files_from_path(
    path: pathlib.Path | str,
    extensions: t.Iterable[str] = NOVEL_EXTENSIONS,
) -> list[NovelNode]:
    """Resolve ``path`` into novel nodes.

    A file must carry a supported extension and yields a single leaf. A
    directory yields its tree. Relative paths resolve against the working
    directory.

    Raises
    ------
    :exc:`exc.NovelPathNotFound`
    :exc:`exc.UnsupportedFileType`
    """
    extensions = tuple(extensions)
    path = pathlib.Path(path)
    if not path.is_absolute():
        path = pathlib.Path.cwd() / path

    if not path.exists():
        raise exc.NovelPathNotFound(path)

    if path.is_file():
        if not has_novel_extension(path, extensions):
            raise exc.UnsupportedFileType(path, extensions)
        return [NovelNode(path, path.name)]

    logger.debug("scanning %s for novels", path)
    return find_novels(path, extensions)
