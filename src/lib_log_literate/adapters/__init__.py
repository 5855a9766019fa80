"""Adapters binding the literate console to Rich and the stdlib logging module."""

from __future__ import annotations

from .console import DEFAULT_OUTPUT_TEMPLATE, LiterateConsoleSink, RichStyledWriter, StreamRouter
from .logging_handler import LiterateConsoleHandler, record_to_event

__all__ = [
    "DEFAULT_OUTPUT_TEMPLATE",
    "LiterateConsoleHandler",
    "LiterateConsoleSink",
    "RichStyledWriter",
    "StreamRouter",
    "record_to_event",
]
