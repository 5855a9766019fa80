"""Console ports describing terminal emission contracts.

Purpose
-------
Define the abstractions between the rendering logic and the terminal: a
sink that accepts whole events, and the styled writer the renderers paint on.

Contents
--------
* :class:`Stream` - the two output streams a console sink can target.
* :class:`StyledWriterPort` - colour-aware text destination with a scoped
  session that always ends with a colour reset.
* :class:`ConsolePort` - runtime-checkable protocol with a single ``emit``.

System Role
-----------
Clarifies the console-facing boundary so the Rich-backed writer (or a test
double) can plug in without leaking implementation details into renderers.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from enum import Enum
from typing import Protocol, runtime_checkable

from lib_log_literate.domain.events import LogEvent


class Stream(Enum):
    """Output stream selected per event."""

    PRIMARY = "stdout"
    SECONDARY = "stderr"


@runtime_checkable
class StyledWriterPort(Protocol):
    """Destination for rendered text supporting colour changes and reset."""

    def session(self, stream: Stream) -> AbstractContextManager["StyledWriterPort"]:
        """Direct writes to ``stream`` until the context exits, then :meth:`reset`."""

    def set_foreground(self, color: str | None) -> None:
        """Set the colour of subsequent text; ``None`` restores the default."""

    def set_background(self, color: str | None) -> None:
        """Set the background of subsequent text; ``None`` restores the default."""

    def write(self, text: str) -> None:
        """Write ``text`` with the current colours."""

    def reset(self) -> None:
        """Restore default colours and flush the active stream."""


@runtime_checkable
class ConsolePort(Protocol):
    """Render a log event to an interactive console."""

    def emit(self, event: LogEvent) -> None:
        """Render ``event``."""


__all__ = ["ConsolePort", "Stream", "StyledWriterPort"]
