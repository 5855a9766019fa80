"""Domain event describing a structured log message.

Purpose
-------
Provide an immutable representation of one log event: when it happened, how
severe it is, the message template, the captured property values, and an
optional exception.

Contents
--------
* :class:`LogEvent` dataclass with the :meth:`LogEvent.create` factory.
* :func:`output_properties` - the synthetic view consumed by output templates.
* Reserved output property names (``TIMESTAMP_PROPERTY`` and friends).
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer, ensuring adapters manipulate pure data objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping

from .levels import LogLevel
from .rendering import FormatProvider, format_exception, render_template
from .templates import MessageTemplate, parse_template
from .values import PropertyValue, ScalarValue, capture

TIMESTAMP_PROPERTY = "Timestamp"
LEVEL_PROPERTY = "Level"
MESSAGE_PROPERTY = "Message"
NEW_LINE_PROPERTY = "NewLine"
EXCEPTION_PROPERTY = "Exception"

NEW_LINE = "\n"


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event handed to sinks.

    Attributes
    ----------
    timestamp:
        Time of the event, timezone-aware. Rendered in its own offset.
    level:
        :class:`LogLevel` severity, or a raw integer for severities foreign to
        this package (rendered with the warning treatment).
    message_template:
        Parsed template of the log call.
    properties:
        Read-only mapping from property name to :data:`PropertyValue`.
    exception:
        Optional exception object or pre-rendered exception text.
    """

    timestamp: datetime
    level: LogLevel | int
    message_template: MessageTemplate
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)
    exception: BaseException | str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        if self.message_template is None:
            raise ValueError("message_template must not be None")
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def create(
        cls,
        level: LogLevel | int,
        template: str | MessageTemplate,
        /,
        *,
        exception: BaseException | str | None = None,
        timestamp: datetime | None = None,
        **properties: Any,
    ) -> "LogEvent":
        """Build an event, parsing ``template`` and capturing ``properties``.

        Properties named with an ``@`` hint in the template are destructured
        (plain objects become structures); ``$`` hints force ``str``.

        Examples
        --------
        >>> event = LogEvent.create(LogLevel.INFORMATION, "Hello {Name}", Name="World")
        >>> event.render_message()
        'Hello World'
        """
        parsed = template if isinstance(template, MessageTemplate) else parse_template(template)
        hints = {token.name: token.destructuring.value for token in parsed.property_tokens}
        captured: dict[str, PropertyValue] = {}
        for name, value in properties.items():
            hint = hints.get(name, "")
            if hint == "$":
                captured[name] = ScalarValue.of(str(value))
            else:
                captured[name] = capture(value, destructure=hint == "@")
        return cls(
            timestamp=timestamp or datetime.now().astimezone(),
            level=level,
            message_template=parsed,
            properties=captured,
            exception=exception,
        )

    def render_message(self, provider: FormatProvider | None = None) -> str:
        """Return the message template rendered as plain text."""

        return render_template(self.message_template, self.properties, provider)


def output_properties(event: LogEvent, provider: FormatProvider | None = None) -> Mapping[str, PropertyValue]:
    """Return the properties visible to output templates.

    All event properties are included; the reserved names ``Timestamp``,
    ``Level``, ``Message``, ``NewLine`` and ``Exception`` are added on top and
    win over event properties with the same name.
    """
    if event is None:
        raise ValueError("event must not be None")
    view: dict[str, PropertyValue] = dict(event.properties)
    view[TIMESTAMP_PROPERTY] = ScalarValue.of(event.timestamp)
    level_name = event.level.name.title() if isinstance(event.level, LogLevel) else str(event.level)
    view[LEVEL_PROPERTY] = ScalarValue.literal_string(level_name)
    view[MESSAGE_PROPERTY] = ScalarValue.literal_string(event.render_message(provider))
    view[NEW_LINE_PROPERTY] = ScalarValue.literal_string(NEW_LINE)
    view[EXCEPTION_PROPERTY] = ScalarValue.literal_string(format_exception(event.exception))
    return MappingProxyType(view)


__all__ = [
    "EXCEPTION_PROPERTY",
    "LEVEL_PROPERTY",
    "MESSAGE_PROPERTY",
    "NEW_LINE",
    "NEW_LINE_PROPERTY",
    "TIMESTAMP_PROPERTY",
    "LogEvent",
    "output_properties",
]
