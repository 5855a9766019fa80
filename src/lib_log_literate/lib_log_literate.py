"""Logging façade that wires domain, application, and adapter layers together.

Purpose
-------
Expose a small, ergonomic API for host applications: build a literate console
logger, bridge the stdlib :mod:`logging` module into it, or run a demo of the
colour themes.

Contents
--------
* :class:`LoggerProxy` - level-specific helpers over the processing pipeline.
* Public API: :func:`literate_console`, :func:`configure`, :func:`demo`,
  :func:`summary_info`.
* Support helpers: :func:`build_sink` and the system clock.

System Role
-----------
Composition root. Configuration (keyword arguments, :class:`LiterateConsoleConfig`
and ``LOG_*`` environment overrides) is translated into concrete adapters here
so the inner layers never read the environment or pick adapters themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from .adapters import LiterateConsoleHandler, LiterateConsoleSink, RichStyledWriter
from .application.ports import ClockPort, StyledWriterPort
from .application.use_cases.process_event import ProcessLogEvent, ProcessResult, create_process_log_event
from .config import LiterateConsoleConfig, apply_environment
from .domain import LogEvent, LogLevel


class _SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware local timestamps."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class LoggerProxy:
    """Serilog-style level helpers over a :class:`ProcessLogEvent` pipeline.

    Every helper takes a message template followed by keyword properties and
    returns the diagnostic dictionary of the pipeline.

    Examples
    --------
    >>> from io import StringIO
    >>> from rich.console import Console
    >>> buffer = StringIO()
    >>> log = literate_console(
    ...     output_template="{Level} {Message}{NewLine}",
    ...     writer=RichStyledWriter(stdout=Console(file=buffer, color_system=None)),
    ...     use_environment=False,
    ... )
    >>> log.information("Processed {Count} items in {Elapsed} ms", Count=3, Elapsed=12)
    {'ok': True}
    >>> buffer.getvalue()
    'INF Processed 3 items in 12 ms\\n'
    """

    def __init__(self, process: ProcessLogEvent, sink: LiterateConsoleSink) -> None:
        self._process = process
        self._sink = sink

    @property
    def sink(self) -> LiterateConsoleSink:
        return self._sink

    @property
    def minimum_level(self) -> LogLevel:
        return self._process.minimum_level

    def is_enabled(self, level: LogLevel | int) -> bool:
        return self._process.is_enabled(level)

    def write(
        self,
        level: LogLevel | int,
        template: str,
        /,
        *,
        exception: BaseException | str | None = None,
        **properties: Any,
    ) -> ProcessResult:
        """Log ``template`` at ``level``; the helpers below delegate here."""

        return self._process(level, template, exception=exception, **properties)

    def emit(self, event: LogEvent) -> ProcessResult:
        """Gate and render a pre-built event."""

        return self._process.emit(event)

    def verbose(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.VERBOSE, template, exception=exception, **properties)

    def debug(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.DEBUG, template, exception=exception, **properties)

    def information(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.INFORMATION, template, exception=exception, **properties)

    def warning(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.WARNING, template, exception=exception, **properties)

    def error(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.ERROR, template, exception=exception, **properties)

    def fatal(self, template: str, /, *, exception: BaseException | str | None = None, **properties: Any) -> ProcessResult:
        return self.write(LogLevel.FATAL, template, exception=exception, **properties)


def build_sink(config: LiterateConsoleConfig, writer: StyledWriterPort | None = None) -> LiterateConsoleSink:
    """Create the console sink described by ``config``.

    ``writer`` replaces the Rich writer (tests pass recording writers); when
    omitted the colour flags of ``config`` configure a :class:`RichStyledWriter`.
    """
    if writer is None:
        writer = RichStyledWriter(force_color=config.force_color, no_color=config.no_color)
    return LiterateConsoleSink(
        config.output_template,
        format_provider=config.format_provider,
        standard_error_threshold=config.standard_error_threshold,
        palette=config.palette(),
        writer=writer,
    )


def _resolve_config(
    config: LiterateConsoleConfig | None,
    overrides: dict[str, Any],
    use_environment: bool,
) -> LiterateConsoleConfig:
    resolved = config if config is not None else LiterateConsoleConfig()
    if overrides:
        resolved = replace(resolved, **overrides)
    if use_environment:
        resolved = apply_environment(resolved)
    return resolved


def literate_console(
    config: LiterateConsoleConfig | None = None,
    /,
    *,
    writer: StyledWriterPort | None = None,
    use_environment: bool = True,
    **overrides: Any,
) -> LoggerProxy:
    """Build a literate console logger.

    Why
    ---
    One call gives host applications a ready logger: the sink renders events,
    the minimum-level gate in front of it drops disabled events before any
    rendering work happens.

    Parameters
    ----------
    config:
        Base configuration; defaults to :class:`LiterateConsoleConfig()`.
    writer:
        Optional styled writer replacing the Rich consoles.
    use_environment:
        Apply ``LOG_*`` environment overrides (default ``True``); environment
        values take precedence over ``config`` and ``overrides``.
    **overrides:
        Field overrides for :class:`LiterateConsoleConfig` (for example
        ``minimum_level="debug"`` or ``standard_error_threshold=LogLevel.ERROR``).

    Returns
    -------
    LoggerProxy
        Logger exposing ``verbose`` … ``fatal`` helpers.

    Raises
    ------
    ValueError
        When the output template is ``None`` or a level/theme name is unknown.
    TypeError
        When ``overrides`` name an unknown configuration field.
    """
    resolved = _resolve_config(config, overrides, use_environment)
    sink = build_sink(resolved, writer)
    process = create_process_log_event(console=sink, minimum_level=resolved.minimum_level, clock=_SystemClock())
    return LoggerProxy(process, sink)


def configure(
    config: LiterateConsoleConfig | None = None,
    /,
    *,
    logger: logging.Logger | None = None,
    writer: StyledWriterPort | None = None,
    use_environment: bool = True,
    **overrides: Any,
) -> LiterateConsoleHandler:
    """Route stdlib :mod:`logging` records through a literate console.

    A :class:`LiterateConsoleHandler` is attached to ``logger`` (the root
    logger by default) replacing any handler installed by an earlier call, and
    the logger level is set to the configured minimum level.

    Examples
    --------
    >>> from io import StringIO
    >>> from rich.console import Console
    >>> buffer = StringIO()
    >>> target = logging.getLogger("doctest.configure")
    >>> target.propagate = False
    >>> handler = configure(
    ...     logger=target,
    ...     output_template="{Level} {Message}{NewLine}",
    ...     writer=RichStyledWriter(stdout=Console(file=buffer, color_system=None)),
    ...     use_environment=False,
    ... )
    >>> target.warning("Disk {Percent} full", {"Percent": 91})
    >>> buffer.getvalue()
    'WRN Disk 91 full\\n'
    >>> target.removeHandler(handler)
    """
    log = literate_console(config, writer=writer, use_environment=use_environment, **overrides)
    target = logger if logger is not None else logging.getLogger()
    for existing in list(target.handlers):
        if isinstance(existing, LiterateConsoleHandler):
            target.removeHandler(existing)
    handler = LiterateConsoleHandler(log.emit, level=log.minimum_level.to_python_level())
    target.addHandler(handler)
    target.setLevel(log.minimum_level.to_python_level())
    return handler


@dataclass(slots=True)
class _DemoCart:
    """Sample structure rendered by :func:`demo`."""

    customer: str
    items: list[str] = field(default_factory=list)
    total: float = 0.0


def demo(
    *,
    theme: str = "literate",
    standard_error_threshold: LogLevel | str | None = None,
    force_color: bool = False,
    writer: StyledWriterPort | None = None,
) -> list[ProcessResult]:
    """Emit one sample event per level to preview a theme.

    Why
    ---
    Gives operators a turnkey preview of palettes and stream routing without
    writing code.

    Returns
    -------
    list[ProcessResult]
        Diagnostic dictionaries, one per emitted event.

    Raises
    ------
    ValueError
        When ``theme`` or ``standard_error_threshold`` is unknown.
    """
    log = literate_console(
        writer=writer,
        use_environment=False,
        theme=theme,
        standard_error_threshold=standard_error_threshold,
        force_color=force_color,
    )
    cart = _DemoCart(customer="alice", items=["apple", "pear"], total=12.5)
    try:
        raise RuntimeError("Payment gateway unavailable")
    except RuntimeError as exc:
        failure = exc

    return [
        log.verbose("Starting {Service} with {Workers} workers", Service="checkout", Workers=4),
        log.debug("Feature flags {Flags}", Flags={"fast_path": True, "beta": False}),
        log.information("Processed {@Cart} for {Customer}", Cart=cart, Customer="alice"),
        log.warning("Retrying request {Attempt,3} of {Limit}", Attempt=2, Limit=5),
        log.error("Checkout failed for {Customer}", Customer="alice", exception=failure),
        log.fatal("Shutting down after {Elapsed:0.00} seconds", Elapsed=3.14159),
    ]


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> banner = summary_info()
    >>> "version" in banner
    True
    """
    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = [
    "LoggerProxy",
    "build_sink",
    "configure",
    "demo",
    "literate_console",
    "summary_info",
]
