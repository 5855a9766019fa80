"""Public package surface of the literate console.

``literate_console()`` builds a logger writing colourised, pretty-printed
events; ``configure()`` routes the stdlib :mod:`logging` module through the
same renderer.
"""

from __future__ import annotations

from .adapters import DEFAULT_OUTPUT_TEMPLATE, LiterateConsoleHandler, LiterateConsoleSink, RichStyledWriter
from .config import LiterateConsoleConfig, enable_dotenv
from .domain import (
    LogEvent,
    LogLevel,
    Palette,
    PALETTES,
    InvariantFormatProvider,
    SeparatorFormatProvider,
)
from .lib_log_literate import LoggerProxy, build_sink, configure, demo, literate_console, summary_info

__all__ = [
    "DEFAULT_OUTPUT_TEMPLATE",
    "InvariantFormatProvider",
    "LiterateConsoleConfig",
    "LiterateConsoleHandler",
    "LiterateConsoleSink",
    "LogEvent",
    "LogLevel",
    "LoggerProxy",
    "PALETTES",
    "Palette",
    "RichStyledWriter",
    "SeparatorFormatProvider",
    "build_sink",
    "configure",
    "demo",
    "enable_dotenv",
    "literate_console",
    "summary_info",
]
