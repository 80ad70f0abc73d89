"""Process entry point for trnovel."""

from .launcher import invocation_name, launch, launch_async, main

__all__ = (
    "invocation_name",
    "launch",
    "launch_async",
    "main",
)
