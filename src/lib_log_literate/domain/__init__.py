"""Domain entities and value objects used by the literate console."""

from __future__ import annotations

from .events import LogEvent, output_properties
from .levels import LogLevel, severity_rank
from .palettes import LITERATE_PALETTE, PALETTES, Palette, resolve_palette
from .rendering import FormatProvider, InvariantFormatProvider, SeparatorFormatProvider
from .templates import MessageTemplate, PropertyToken, TextToken, parse_template
from .values import (
    DictionaryValue,
    PropertyValue,
    ScalarKind,
    ScalarValue,
    SequenceValue,
    StructureProperty,
    StructureValue,
    capture,
)

__all__ = [
    "DictionaryValue",
    "FormatProvider",
    "InvariantFormatProvider",
    "LITERATE_PALETTE",
    "LogEvent",
    "LogLevel",
    "MessageTemplate",
    "PALETTES",
    "Palette",
    "PropertyToken",
    "PropertyValue",
    "ScalarKind",
    "ScalarValue",
    "SeparatorFormatProvider",
    "SequenceValue",
    "StructureProperty",
    "StructureValue",
    "TextToken",
    "capture",
    "output_properties",
    "parse_template",
    "resolve_palette",
    "severity_rank",
]
