"""Console adapters: styled writer, renderers, and the literate sink."""

from __future__ import annotations

from .levels import LevelFormat, level_format, render_level
from .literate_console import DEFAULT_OUTPUT_TEMPLATE, LiterateConsoleSink
from .routing import StreamRouter
from .styled_writer import RichStyledWriter
from .values import classify, render_value

__all__ = [
    "DEFAULT_OUTPUT_TEMPLATE",
    "LevelFormat",
    "LiterateConsoleSink",
    "RichStyledWriter",
    "StreamRouter",
    "classify",
    "level_format",
    "render_level",
    "render_value",
]
