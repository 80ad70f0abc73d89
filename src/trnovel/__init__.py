"""trnovel, a terminal reader for novels."""

from .__about__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __package_name__,
    __title__,
    __version__,
)
from .cli import run

__all__ = (
    "__author__",
    "__copyright__",
    "__description__",
    "__license__",
    "__package_name__",
    "__title__",
    "__version__",
    "run",
)
