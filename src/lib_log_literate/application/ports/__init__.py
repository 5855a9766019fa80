"""Protocols the application layer depends on."""

from __future__ import annotations

from .console import ConsolePort, Stream, StyledWriterPort
from .time import ClockPort

__all__ = ["ClockPort", "ConsolePort", "Stream", "StyledWriterPort"]
