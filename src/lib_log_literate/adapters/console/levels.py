"""Level formatter: three-letter codes and colours per severity.

Purpose
-------
Map a severity to its short code and colour, degrading gracefully for
severities this package does not know, and paint the level onto a styled
writer (with the filled "badge" look for errors).

Contents
--------
* :class:`LevelFormat` - short code and colour.
* :func:`level_format` - lookup with the warning fallback.
* :func:`render_level` - writes the level token.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from lib_log_literate.application.ports.console import StyledWriterPort
from lib_log_literate.domain.levels import LogLevel
from lib_log_literate.domain.palettes import LITERATE_PALETTE, Palette

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LevelFormat:
    """Short code and colour rendered for one severity."""

    short_code: str
    color: str


_SHORT_CODES: dict[LogLevel, str] = {
    LogLevel.VERBOSE: "VRB",
    LogLevel.DEBUG: "DBG",
    LogLevel.INFORMATION: "INF",
    LogLevel.WARNING: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.FATAL: "FTL",
}

_BADGE_LEVELS = frozenset({LogLevel.ERROR, LogLevel.FATAL})


def _resolve(level: Any) -> LogLevel:
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, int) and not isinstance(level, bool):
        try:
            return LogLevel.from_numeric(level)
        except ValueError:
            pass
    LOGGER.debug("Unrecognised severity %r rendered as WARNING", level)
    return LogLevel.WARNING


def level_format(level: Any, palette: Palette = LITERATE_PALETTE) -> LevelFormat:
    """Return the :class:`LevelFormat` for ``level``; never raises.

    Examples
    --------
    >>> level_format(LogLevel.INFORMATION).short_code
    'INF'
    >>> level_format(42).short_code
    'WRN'
    """
    resolved = _resolve(level)
    return LevelFormat(_SHORT_CODES[resolved], palette.level_color(resolved))


def render_level(writer: StyledWriterPort, level: Any, palette: Palette = LITERATE_PALETTE) -> None:
    """Write the level code, then return the writer to its default colours.

    Error and fatal levels are drawn as a badge: the level colour fills the
    background and the code is written in the palette's text colour.
    """
    resolved = _resolve(level)
    fmt = LevelFormat(_SHORT_CODES[resolved], palette.level_color(resolved))
    if resolved in _BADGE_LEVELS:
        writer.set_background(fmt.color)
        writer.set_foreground(palette.text)
    else:
        writer.set_foreground(fmt.color)
    writer.write(fmt.short_code)
    writer.set_background(None)
    writer.set_foreground(None)


__all__ = ["LevelFormat", "level_format", "render_level"]
