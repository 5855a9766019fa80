"""Bridge from the stdlib :mod:`logging` module to the literate console.

Purpose
-------
Let applications keep calling ``logging.getLogger(...).info(...)`` while the
output is rendered by :class:`LiterateConsoleSink`.

Contents
--------
* :func:`record_to_event` - converts a :class:`logging.LogRecord`.
* :class:`LiterateConsoleHandler` - :class:`logging.Handler` forwarding to a
  console port or a process pipeline.

Conversion rules
----------------
* ``logger.info("Hello {Name}", {"Name": "World"})`` - a single mapping
  argument supplies the template properties.
* ``logger.info("Hello {Name}", extra={"properties": {"Name": "World"}})`` -
  properties travel in ``extra``.
* ``logger.info("Hello %s", "World")`` - percent-style calls are rendered by
  :mod:`logging` first and shown as literal text.
* ``SourceContext`` carries the logger name; exceptions come from
  ``exc_info`` (or ``exc_text``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from lib_log_literate.application.ports.console import ConsolePort
from lib_log_literate.domain.events import LogEvent
from lib_log_literate.domain.levels import LogLevel

SOURCE_CONTEXT_PROPERTY = "SourceContext"
_OWN_LOGGER_PREFIX = "lib_log_literate"


def record_to_event(record: logging.LogRecord) -> LogEvent:
    """Return the :class:`LogEvent` equivalent of ``record``.

    Examples
    --------
    >>> record = logging.LogRecord("app", logging.INFO, __file__, 1, "Hello {Name}", ({"Name": "World"},), None)
    >>> record_to_event(record).render_message()
    'Hello World'
    """
    properties: dict[str, Any] = {SOURCE_CONTEXT_PROPERTY: record.name}
    extra_properties = getattr(record, "properties", None)
    if isinstance(extra_properties, Mapping):
        properties.update(extra_properties)

    args = record.args
    if isinstance(args, Mapping):
        properties.update(args)
        template = str(record.msg)
    elif args:
        template = record.getMessage().replace("{", "{{").replace("}", "}}")
    else:
        template = str(record.msg)

    exception: BaseException | str | None = None
    if record.exc_info and record.exc_info[1] is not None:
        exception = record.exc_info[1]
    elif record.exc_text:
        exception = record.exc_text

    return LogEvent.create(
        LogLevel.from_python_level(record.levelno),
        template,
        exception=exception,
        timestamp=datetime.fromtimestamp(record.created).astimezone(),
        **{str(name): value for name, value in properties.items()},
    )


class LiterateConsoleHandler(logging.Handler):
    """Forward stdlib log records to a literate console sink.

    ``target`` is either a :class:`ConsolePort` (for example
    :class:`~lib_log_literate.adapters.console.LiterateConsoleSink`) or a
    callable accepting a :class:`LogEvent`, such as the ``emit`` method of the
    minimum-level pipeline.
    """

    def __init__(self, target: ConsolePort | Callable[[LogEvent], Any], level: int = logging.NOTSET) -> None:
        super().__init__(level)
        if target is None:
            raise ValueError("target must not be None")
        self._emit_event: Callable[[LogEvent], Any] = target.emit if isinstance(target, ConsolePort) else target

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith(_OWN_LOGGER_PREFIX):
            # Diagnostics of this package would re-enter the sink.
            return
        try:
            self._emit_event(record_to_event(record))
        except Exception:
            self.handleError(record)


__all__ = ["LiterateConsoleHandler", "SOURCE_CONTEXT_PROPERTY", "record_to_event"]
