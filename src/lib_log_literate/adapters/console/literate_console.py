"""Literate console sink implementing :class:`ConsolePort`.

Purpose
-------
Render one log event through an output template: literal text in the
punctuation colour, the level as a coloured code, the message with
pretty-printed property values, the exception with dimmed stack frames, and
any other output property as subtext.

Contents
--------
* :data:`DEFAULT_OUTPUT_TEMPLATE` - the layout used when none is configured.
* :class:`LiterateConsoleSink` - the emitter.

System Role
-----------
Primary human-facing sink. Events from concurrent threads are serialised by a
lock held for the whole event, and the styled writer's session guarantees a
colour reset on every exit path before that lock is released.
"""

from __future__ import annotations

import threading
from typing import Mapping

from lib_log_literate.application.ports.console import ConsolePort, StyledWriterPort
from lib_log_literate.domain.events import (
    EXCEPTION_PROPERTY,
    LEVEL_PROPERTY,
    MESSAGE_PROPERTY,
    LogEvent,
    output_properties,
)
from lib_log_literate.domain.levels import LogLevel
from lib_log_literate.domain.palettes import LITERATE_PALETTE, Palette
from lib_log_literate.domain.rendering import INVARIANT, FormatProvider, render_property_token
from lib_log_literate.domain.templates import MessageTemplate, PropertyToken, parse_template
from lib_log_literate.domain.values import PropertyValue, ScalarKind, ScalarValue

from .exceptions import render_exception
from .levels import render_level
from .message import render_message
from .routing import StreamRouter
from .styled_writer import RichStyledWriter

DEFAULT_OUTPUT_TEMPLATE = "[{Timestamp:HH:mm:ss} {Level}] {Message}{NewLine}{Exception}"

UPPERCASE_FORMAT = "u"
LOWERCASE_FORMAT = "l"


class LiterateConsoleSink(ConsolePort):
    """Write events to the console with pretty-printed, colourised data.

    Examples
    --------
    >>> from io import StringIO
    >>> from datetime import datetime, timezone
    >>> from rich.console import Console
    >>> buffer = StringIO()
    >>> sink = LiterateConsoleSink(writer=RichStyledWriter(stdout=Console(file=buffer, color_system=None)))
    >>> event = LogEvent.create(
    ...     LogLevel.INFORMATION, "Hello {Name}", Name="World",
    ...     timestamp=datetime(2025, 9, 30, 12, 0, 5, tzinfo=timezone.utc),
    ... )
    >>> sink.emit(event)
    >>> buffer.getvalue()
    '[12:00:05 INF] Hello World\\n'
    """

    def __init__(
        self,
        output_template: str = DEFAULT_OUTPUT_TEMPLATE,
        *,
        format_provider: FormatProvider | None = None,
        standard_error_threshold: LogLevel | None = None,
        palette: Palette | None = None,
        writer: StyledWriterPort | None = None,
    ) -> None:
        """Parse the output template once and wire the collaborators.

        Parameters
        ----------
        output_template:
            Layout of every line; parsed here and never re-parsed.
        format_provider:
            Culture-like formatting for numbers and dates; invariant by default.
        standard_error_threshold:
            Severity at or above which events go to stderr. ``None`` keeps
            every event on stdout.
        palette:
            Colour roles; :data:`LITERATE_PALETTE` by default.
        writer:
            Styled writer; a :class:`RichStyledWriter` over stdout/stderr by
            default.

        Raises
        ------
        ValueError
            When ``output_template`` is ``None``.
        """
        if output_template is None:
            raise ValueError("output_template must not be None")
        self._output_template: MessageTemplate = parse_template(output_template)
        self._format_provider = format_provider or INVARIANT
        self._router = StreamRouter(standard_error_threshold)
        self._palette = palette or LITERATE_PALETTE
        self._writer = writer if writer is not None else RichStyledWriter()
        self._lock = threading.Lock()

    @property
    def output_template(self) -> MessageTemplate:
        return self._output_template

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def router(self) -> StreamRouter:
        return self._router

    def emit(self, event: LogEvent) -> None:
        """Render ``event`` as one uninterrupted sequence of writes.

        Raises
        ------
        ValueError
            When ``event`` is ``None``; nothing is written.
        """
        if event is None:
            raise ValueError("event must not be None")

        properties = output_properties(event, self._format_provider)
        stream = self._router.select(event.level)

        with self._lock:
            with self._writer.session(stream) as writer:
                for token in self._output_template.tokens:
                    if not isinstance(token, PropertyToken):
                        writer.set_foreground(self._palette.punctuation)
                        writer.write(token.text)
                    elif token.name == LEVEL_PROPERTY:
                        render_level(writer, event.level, self._palette)
                    elif token.name == MESSAGE_PROPERTY:
                        render_message(writer, event, palette=self._palette, provider=self._format_provider)
                    elif token.name == EXCEPTION_PROPERTY:
                        render_exception(writer, token, properties, palette=self._palette, provider=self._format_provider)
                    else:
                        self._render_output_property(writer, token, properties)

    def _render_output_property(
        self,
        writer: StyledWriterPort,
        token: PropertyToken,
        properties: Mapping[str, PropertyValue],
    ) -> None:
        value = properties.get(token.name)
        if value is None:
            return

        writer.set_foreground(self._palette.subtext)
        if isinstance(value, ScalarValue) and value.kind is ScalarKind.STRING:
            # Casing overrides ignore the format provider.
            text = value.raw
            if token.format_spec == UPPERCASE_FORMAT:
                text = text.upper()
            elif token.format_spec == LOWERCASE_FORMAT:
                text = text.lower()
            if token.alignment is not None:
                text = token.alignment.apply(text)
            writer.write(text)
            return

        writer.write(render_property_token(token, properties, self._format_provider))


__all__ = ["DEFAULT_OUTPUT_TEMPLATE", "LiterateConsoleSink"]
