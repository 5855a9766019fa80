"""Stream router: stdout or stderr by severity."""

from __future__ import annotations

from lib_log_literate.application.ports.console import Stream
from lib_log_literate.domain.levels import LogLevel, severity_rank


class StreamRouter:
    """Pick the output stream of an event.

    Without a threshold every event goes to the primary stream. With one,
    severities below it stay on the primary stream and severities at or
    above it move to the secondary stream.

    Examples
    --------
    >>> router = StreamRouter(LogLevel.WARNING)
    >>> router.select(LogLevel.INFORMATION), router.select(LogLevel.WARNING)
    (<Stream.PRIMARY: 'stdout'>, <Stream.SECONDARY: 'stderr'>)
    """

    def __init__(self, standard_error_threshold: LogLevel | None = None) -> None:
        self._threshold = standard_error_threshold

    @property
    def threshold(self) -> LogLevel | None:
        return self._threshold

    def select(self, level: LogLevel | int) -> Stream:
        if self._threshold is None:
            return Stream.PRIMARY
        if severity_rank(level) < severity_rank(self._threshold):
            return Stream.PRIMARY
        return Stream.SECONDARY


__all__ = ["StreamRouter"]
