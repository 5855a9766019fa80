"""Message renderer: the event's own message template, coloured.

Purpose
-------
Walk the message template of an event and paint literal text, resolved
properties and unresolved placeholders in their respective colours.
"""

from __future__ import annotations

from lib_log_literate.application.ports.console import StyledWriterPort
from lib_log_literate.domain.events import LogEvent
from lib_log_literate.domain.palettes import LITERATE_PALETTE, Palette
from lib_log_literate.domain.rendering import FormatProvider, render_property_token
from lib_log_literate.domain.templates import PropertyToken
from lib_log_literate.domain.values import ScalarKind, ScalarValue

from .values import classify, render_value


def render_message(
    writer: StyledWriterPort,
    event: LogEvent,
    *,
    palette: Palette = LITERATE_PALETTE,
    provider: FormatProvider | None = None,
) -> None:
    """Write the message of ``event``.

    * Literal text uses the text colour.
    * Placeholders without a property are echoed verbatim (``{Missing}``) in
      the raw-text colour, making template/data mismatches visible.
    * Strings without format or alignment are written verbatim and booleans
      as ``true``/``false``; other scalars use the generic formatter. The
      colour always follows the scalar kind.
    * Composite values go through :func:`render_value`.
    """
    properties = event.properties
    for token in event.message_template.tokens:
        if not isinstance(token, PropertyToken):
            writer.set_foreground(palette.text)
            writer.write(token.text)
            continue

        value = properties.get(token.name)
        if value is None:
            writer.set_foreground(palette.raw_text)
            writer.write(token.raw_text)
            continue

        if not isinstance(value, ScalarValue):
            render_value(writer, value, token.format_spec, palette=palette, provider=provider)
            continue

        writer.set_foreground(classify(value, palette))
        plain = token.format_spec is None and token.alignment is None
        if plain and value.kind is ScalarKind.STRING:
            writer.write(value.raw)
        elif plain and value.kind is ScalarKind.BOOLEAN:
            writer.write("true" if value.raw else "false")
        else:
            writer.write(render_property_token(token, properties, provider))


__all__ = ["render_message"]
