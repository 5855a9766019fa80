"""Use case gating and dispatching a single log event.

Purpose
-------
Turn a log call (level, message template, properties) into a
:class:`~lib_log_literate.domain.events.LogEvent`, drop it when it is below
the configured minimum level, and hand it to the console sink otherwise.

Contents
--------
* :func:`create_process_log_event` factory returning the runtime callable.
* :data:`ProcessResult` - diagnostic dictionary returned for every call.

System Role
-----------
Application-layer orchestrator invoked by :func:`lib_log_literate.literate_console`
so the minimum-level filter runs before any rendering work happens.
"""

from __future__ import annotations

from typing import Any

from lib_log_literate.application.ports import ClockPort, ConsolePort
from lib_log_literate.domain import LogEvent, LogLevel, severity_rank

ProcessResult = dict[str, Any]


def create_process_log_event(
    *,
    console: ConsolePort,
    minimum_level: LogLevel,
    clock: ClockPort,
) -> "ProcessLogEvent":
    """Build the orchestrator capturing the sink and its minimum level.

    Parameters
    ----------
    console:
        Sink implementing :class:`ConsolePort`.
    minimum_level:
        Events below this severity are suppressed before rendering.
    clock:
        Provider of timezone-aware timestamps for events built from log calls.

    Returns
    -------
    ProcessLogEvent
        Callable accepting ``level``, ``template``, an optional ``exception``
        and keyword properties; its :meth:`ProcessLogEvent.emit` accepts
        ready-made events.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> class DummyConsole(ConsolePort):
    ...     def __init__(self):
    ...         self.events = []
    ...     def emit(self, event: LogEvent) -> None:
    ...         self.events.append(event.render_message())
    >>> class DummyClock(ClockPort):
    ...     def now(self):
    ...         return datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> console = DummyConsole()
    >>> process = create_process_log_event(console=console, minimum_level=LogLevel.INFORMATION, clock=DummyClock())
    >>> process(LogLevel.DEBUG, "hidden")
    {'ok': False, 'reason': 'below_minimum_level'}
    >>> process(LogLevel.WARNING, "Disk {Percent}% full", Percent=91)
    {'ok': True}
    >>> console.events
    ['Disk 91% full']
    """

    return ProcessLogEvent(console=console, minimum_level=minimum_level, clock=clock)


class ProcessLogEvent:
    """Callable pipeline: build the event, apply the level gate, emit."""

    def __init__(self, *, console: ConsolePort, minimum_level: LogLevel, clock: ClockPort) -> None:
        self._console = console
        self._minimum_level = minimum_level
        self._clock = clock

    @property
    def minimum_level(self) -> LogLevel:
        """Return the configured minimum severity."""

        return self._minimum_level

    def is_enabled(self, level: LogLevel | int) -> bool:
        """Return ``True`` when events at ``level`` pass the gate."""

        return severity_rank(level) >= severity_rank(self._minimum_level)

    def __call__(
        self,
        level: LogLevel | int,
        template: str,
        /,
        *,
        exception: BaseException | str | None = None,
        **properties: Any,
    ) -> ProcessResult:
        if not self.is_enabled(level):
            return _reject_below_minimum()
        event = LogEvent.create(level, template, exception=exception, timestamp=self._clock.now(), **properties)
        return self._dispatch(event)

    def emit(self, event: LogEvent) -> ProcessResult:
        """Gate and dispatch a pre-built ``event``."""

        if event is None:
            raise ValueError("event must not be None")
        if not self.is_enabled(event.level):
            return _reject_below_minimum()
        return self._dispatch(event)

    def _dispatch(self, event: LogEvent) -> ProcessResult:
        self._console.emit(event)
        return {"ok": True}


def _reject_below_minimum() -> ProcessResult:
    return {"ok": False, "reason": "below_minimum_level"}


__all__ = ["ProcessLogEvent", "ProcessResult", "create_process_log_event"]
