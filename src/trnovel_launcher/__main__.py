"""Entrypoint for running the launcher as a module."""

from __future__ import annotations

from trnovel_launcher.launcher import main

if __name__ == "__main__":
    main(script="trnovel")
