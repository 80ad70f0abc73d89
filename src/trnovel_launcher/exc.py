"""Provide exceptions used by trnovel_launcher."""

from __future__ import annotations


class LauncherError(Exception):
    """Raised when the raw argument vector lacks the runtime or script path."""
