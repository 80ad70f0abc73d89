"""Metadata package for trnovel."""

from __future__ import annotations

__title__ = "trnovel"
__package_name__ = "trnovel"
__version__ = "0.4.0"
__description__ = "Terminal reader for novels"
__author__ = "yexiyue"
__github__ = "https://github.com/yexiyue/TRNovel"
__docs__ = "https://yexiyue.github.io/TRNovel"
__tracker__ = "https://github.com/yexiyue/TRNovel/issues"
__pypi__ = "https://pypi.org/project/trnovel/"
__license__ = "MIT"
__copyright__ = "Copyright 2024- yexiyue"
