"""Conftest.py (root-level).

Kept at the root so the fixtures also apply to doctests collected from
``src/`` and so conftest.py stays out of the wheel.
"""

from __future__ import annotations

import logging
import typing as t

import pytest

from trnovel_launcher.launcher import LOGGER_NAMES

if t.TYPE_CHECKING:
    import pathlib


@pytest.fixture
def home_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """Temporary home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def set_home(
    monkeypatch: pytest.MonkeyPatch,
    home_path: pathlib.Path,
) -> None:
    """Point HOME at a temporary directory and clear trnovel's environment."""
    monkeypatch.setenv("HOME", str(home_path))
    monkeypatch.delenv("TRNOVEL_CACHE_DIR", raising=False)
    monkeypatch.delenv("TRNOVEL_LOG_LEVEL", raising=False)


@pytest.fixture
def cache_dir(home_path: pathlib.Path) -> pathlib.Path:
    """Cache directory below the temporary home, not yet created."""
    return home_path / ".novel"


@pytest.fixture(autouse=True)
def reset_loggers() -> t.Iterator[None]:
    """Drop handlers installed by the launcher during a test."""
    yield
    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        for handler in list(package_logger.handlers):
            if getattr(handler, "_trnovel_handler", False):
                package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)
