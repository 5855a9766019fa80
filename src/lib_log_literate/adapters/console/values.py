"""Value renderer: colourised pretty-printing of property value trees.

Purpose
-------
Paint scalars, sequences, structures and dictionaries onto a styled writer,
choosing the colour of every scalar from its kind and drawing all structural
characters in the punctuation colour.

Contents
--------
* :func:`classify` - scalar colour by :class:`~lib_log_literate.domain.values.ScalarKind`.
* :func:`render_value` - recursive renderer over :data:`PropertyValue`.
"""

from __future__ import annotations

from lib_log_literate.application.ports.console import StyledWriterPort
from lib_log_literate.domain.palettes import LITERATE_PALETTE, Palette
from lib_log_literate.domain.rendering import FormatProvider, render_scalar
from lib_log_literate.domain.values import (
    DictionaryValue,
    PropertyValue,
    ScalarKind,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

_KIND_ROLES = {
    ScalarKind.NULL: "keyword",
    ScalarKind.BOOLEAN: "keyword",
    ScalarKind.STRING: "string",
    ScalarKind.NUMERIC: "numeric",
    ScalarKind.OTHER: "other",
}


def classify(scalar: ScalarValue, palette: Palette = LITERATE_PALETTE) -> str:
    """Return the colour for ``scalar``.

    Examples
    --------
    >>> classify(ScalarValue.of(None)) == LITERATE_PALETTE.keyword
    True
    >>> classify(ScalarValue.of(3.5)) == LITERATE_PALETTE.numeric
    True
    """
    return getattr(palette, _KIND_ROLES[scalar.kind])


def render_value(
    writer: StyledWriterPort,
    value: PropertyValue,
    format_spec: str | None = None,
    *,
    palette: Palette = LITERATE_PALETTE,
    provider: FormatProvider | None = None,
) -> None:
    """Write ``value`` to ``writer``.

    ``format_spec`` only applies when ``value`` itself is a scalar; nested
    elements are always rendered without one.
    """
    if isinstance(value, ScalarValue):
        writer.set_foreground(classify(value, palette))
        writer.write(render_scalar(value, format_spec, provider))
        return

    if isinstance(value, SequenceValue):
        _punctuation(writer, palette, "[")
        for index, element in enumerate(value.elements):
            if index:
                _punctuation(writer, palette, ", ")
            render_value(writer, element, palette=palette, provider=provider)
        _punctuation(writer, palette, "]")
        return

    if isinstance(value, StructureValue):
        if value.type_tag is not None:
            writer.set_foreground(palette.subtext)
            writer.write(value.type_tag)
            writer.write(" ")
        if not value.properties:
            _punctuation(writer, palette, "{}")
            return
        _punctuation(writer, palette, "{ ")
        for index, prop in enumerate(value.properties):
            if index:
                _punctuation(writer, palette, ", ")
            writer.set_foreground(palette.name)
            writer.write(prop.name)
            _punctuation(writer, palette, "=")
            render_value(writer, prop.value, palette=palette, provider=provider)
        _punctuation(writer, palette, " }")
        return

    if isinstance(value, DictionaryValue):
        _punctuation(writer, palette, "{")
        for index, (key, item) in enumerate(value.entries):
            if index:
                _punctuation(writer, palette, ", ")
            _punctuation(writer, palette, "[")
            render_value(writer, key, palette=palette, provider=provider)
            _punctuation(writer, palette, "]=")
            render_value(writer, item, palette=palette, provider=provider)
        _punctuation(writer, palette, "}")
        return

    raise TypeError(f"Unsupported property value: {type(value).__name__}")


def _punctuation(writer: StyledWriterPort, palette: Palette, text: str) -> None:
    writer.set_foreground(palette.punctuation)
    writer.write(text)


__all__ = ["classify", "render_value"]
