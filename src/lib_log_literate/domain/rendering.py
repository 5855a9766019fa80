"""Plain-text rendering of property values and templates.

Purpose
-------
Provide the colour-free formatting every sink relies on: the generic scalar
formatter (honouring a format provider), plain renderings of composite values,
whole message templates, and Python exceptions.

Contents
--------
* :class:`FormatProvider` - protocol for culture-like formatting strategies.
* :class:`InvariantFormatProvider` / :class:`SeparatorFormatProvider`.
* :func:`render_scalar`, :func:`render_value_text`, :func:`render_property_token`,
  :func:`render_template` - plain renderers.
* :func:`format_exception` - traceback text with frame lines indented by
  :data:`STACK_FRAME_LINE_PREFIX`.

System Role
-----------
Domain services shared by the event model (``Message`` output property) and
the console adapters (exception buffers, output-template metadata).
"""

from __future__ import annotations

import math
import re
import traceback
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Mapping, Protocol, runtime_checkable

from .templates import MessageTemplate, PropertyToken
from .values import (
    DictionaryValue,
    PropertyValue,
    ScalarKind,
    ScalarValue,
    SequenceValue,
    StructureValue,
)


STACK_FRAME_LINE_PREFIX = "   "
"""Indentation that marks a stack-frame line inside rendered exception text."""

_DATE_TOKEN_RE = re.compile(r"yyyy|yy|MMMM|MMM|MM|dddd|ddd|dd|HH|hh|mm|ss|fff|ff|f|tt|zzz|'[^']*'|\"[^\"]*\"")
_STANDARD_DATE_FORMATS = {
    "d": "MM/dd/yyyy",
    "D": "dddd, dd MMMM yyyy",
    "t": "HH:mm",
    "T": "HH:mm:ss",
    "s": "yyyy-MM-ddTHH:mm:ss",
    "u": "yyyy-MM-dd HH:mm:ssZ",
    "g": "MM/dd/yyyy HH:mm",
    "G": "MM/dd/yyyy HH:mm:ss",
}
_STANDARD_NUMERIC_RE = re.compile(r"^(?P<code>[NnFfDdXxPpEeGg])(?P<precision>[0-9]{0,2})$")
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@runtime_checkable
class FormatProvider(Protocol):
    """Turn a non-string scalar into text according to ``format_spec``."""

    def format(self, value: Any, format_spec: str | None) -> str:
        """Return the textual form of ``value``."""


class InvariantFormatProvider:
    """Culture-neutral formatting.

    * ``datetime``/``date``/``time`` accept .NET-style patterns
      (``HH:mm:ss``, ``yyyy-MM-dd``, ``fff``, ``zzz``, ``tt``), the standard
      single-letter forms (``d``, ``T``, ``s``, ``u``, ``o``...), or ``strftime``
      patterns containing ``%``.
    * Numbers accept ``N2``, ``F3``, ``D5``, ``X``, ``P1``, ``E2``, ``G``,
      zero-padding masks like ``000`` or ``0.00``, and any Python format spec.
    * Anything that cannot honour the spec falls back to ``str(value)``.

    Examples
    --------
    >>> provider = InvariantFormatProvider()
    >>> provider.format(datetime(2026, 1, 2, 3, 4, 5), "HH:mm:ss")
    '03:04:05'
    >>> provider.format(1234.5, "N2")
    '1,234.50'
    >>> provider.format(7, "000")
    '007'
    """

    def format(self, value: Any, format_spec: str | None) -> str:
        if isinstance(value, (datetime, date, time)):
            return self._format_temporal(value, format_spec)
        if not format_spec:
            return str(value)
        if isinstance(value, bool):
            # Booleans ignore format strings.
            return str(value)
        try:
            if isinstance(value, (int, float, Decimal)):
                numeric = _format_numeric(value, format_spec)
                if numeric is not None:
                    return numeric
            return format(value, format_spec)
        except (TypeError, ValueError, OverflowError):
            return str(value)

    @staticmethod
    def _format_temporal(value: datetime | date | time, format_spec: str | None) -> str:
        if not format_spec:
            if isinstance(value, datetime):
                return value.isoformat(sep=" ")
            return value.isoformat()
        if format_spec in ("o", "O"):
            return value.isoformat()
        if "%" in format_spec:
            return value.strftime(format_spec)
        pattern = _STANDARD_DATE_FORMATS.get(format_spec, format_spec)
        return _format_date_pattern(value, pattern)


class SeparatorFormatProvider(InvariantFormatProvider):
    """Invariant formatting with custom decimal and thousands separators.

    Examples
    --------
    >>> SeparatorFormatProvider(decimal_point=",", thousands_separator=".").format(1234.5, "N2")
    '1.234,50'
    """

    def __init__(self, *, decimal_point: str = ".", thousands_separator: str = ",") -> None:
        self._table = str.maketrans({".": decimal_point, ",": thousands_separator})

    def format(self, value: Any, format_spec: str | None) -> str:
        text = super().format(value, format_spec)
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return text.translate(self._table)
        return text


INVARIANT = InvariantFormatProvider()


def _format_numeric(value: int | float | Decimal, format_spec: str) -> str | None:
    standard = _STANDARD_NUMERIC_RE.match(format_spec)
    if standard is not None:
        code = standard.group("code")
        precision = standard.group("precision")
        upper = code.upper()
        if upper == "N":
            return f"{value:,.{precision or 2}f}"
        if upper == "F":
            return f"{value:.{precision or 2}f}"
        if upper == "E":
            text = f"{value:.{precision or 6}e}"
            return text.upper() if code == "E" else text
        if upper == "P":
            return f"{value * 100:.{precision or 2}f} %"
        if upper == "G":
            return f"{value:.{precision}g}" if precision else str(value)
        if isinstance(value, int):
            if upper == "D":
                return f"{value:0{precision or 1}d}"
            text = f"{value:0{precision or 1}x}"
            return text.upper() if code == "X" else text
        return None
    if set(format_spec) <= set("0#.,"):
        if not _is_finite(value):
            return str(value)
        integral, _, fraction = format_spec.partition(".")
        digits = len(fraction)
        grouping = "," if "," in integral else ""
        width = integral.count("0") + (digits + 1 if digits else 0)
        return f"{value:0{width}{grouping}.{digits}f}" if digits else f"{int(round(value)):0{integral.count('0')}{grouping}d}"
    return None


def _is_finite(value: int | float | Decimal) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def _format_date_pattern(value: datetime | date | time, pattern: str) -> str:
    def field(name: str, default: int = 0) -> int:
        return getattr(value, name, default)

    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token[0] in "'\"":
            return token[1:-1]
        if token == "yyyy":
            return f"{field('year', 1):04d}"
        if token == "yy":
            return f"{field('year', 1) % 100:02d}"
        if token == "MMMM":
            return _MONTH_NAMES[field("month", 1) - 1]
        if token == "MMM":
            return _MONTH_NAMES[field("month", 1) - 1][:3]
        if token == "MM":
            return f"{field('month', 1):02d}"
        if token in ("dddd", "ddd"):
            if not isinstance(value, date):
                return ""
            name = _DAY_NAMES[value.weekday()]
            return name if token == "dddd" else name[:3]
        if token == "dd":
            return f"{field('day', 1):02d}"
        if token == "HH":
            return f"{field('hour'):02d}"
        if token == "hh":
            return f"{(field('hour') % 12) or 12:02d}"
        if token == "mm":
            return f"{field('minute'):02d}"
        if token == "ss":
            return f"{field('second'):02d}"
        if token == "tt":
            return "PM" if field("hour") >= 12 else "AM"
        if token == "zzz":
            offset = value.utcoffset() if isinstance(value, (datetime, time)) else None
            if offset is None:
                return ""
            minutes = int(offset.total_seconds() // 60)
            sign = "-" if minutes < 0 else "+"
            hours, minutes = divmod(abs(minutes), 60)
            return f"{sign}{hours:02d}:{minutes:02d}"
        # Fractional seconds: f, ff, fff.
        micro = f"{field('microsecond'):06d}"
        return micro[: len(token)]

    return _DATE_TOKEN_RE.sub(replace, pattern)


def render_scalar(scalar: ScalarValue, format_spec: str | None = None, provider: FormatProvider | None = None) -> str:
    """Return the generic textual form of ``scalar``.

    ``None`` renders as ``null``; strings are double-quoted unless the scalar is
    a literal or ``format_spec`` is ``"l"``; everything else goes through the
    format provider.

    Examples
    --------
    >>> render_scalar(ScalarValue.of('say "hi"'))
    '"say \\\\"hi\\\\""'
    >>> render_scalar(ScalarValue.of("x"), "l")
    'x'
    >>> render_scalar(ScalarValue.of(None))
    'null'
    """
    if scalar.kind is ScalarKind.NULL:
        return "null"
    if scalar.kind is ScalarKind.STRING:
        if scalar.literal or format_spec == "l":
            return scalar.raw
        return '"' + scalar.raw.replace('"', '\\"') + '"'
    return (provider or INVARIANT).format(scalar.raw, format_spec)


def render_value_text(value: PropertyValue, format_spec: str | None = None, provider: FormatProvider | None = None) -> str:
    """Return a colour-free rendering of ``value`` using the console layout.

    Examples
    --------
    >>> from .values import capture
    >>> render_value_text(capture([1, {"a": True}]))
    '[1, {["a"]=True}]'
    """
    if isinstance(value, ScalarValue):
        return render_scalar(value, format_spec, provider)
    if isinstance(value, SequenceValue):
        return "[" + ", ".join(render_value_text(element, None, provider) for element in value.elements) + "]"
    if isinstance(value, StructureValue):
        prefix = f"{value.type_tag} " if value.type_tag is not None else ""
        if not value.properties:
            return prefix + "{}"
        members = ", ".join(f"{prop.name}={render_value_text(prop.value, None, provider)}" for prop in value.properties)
        return prefix + "{ " + members + " }"
    if isinstance(value, DictionaryValue):
        entries = ", ".join(
            f"[{render_value_text(key, None, provider)}]={render_value_text(item, None, provider)}" for key, item in value.entries
        )
        return "{" + entries + "}"
    raise TypeError(f"Unsupported property value: {type(value).__name__}")


def render_property_token(
    token: PropertyToken,
    properties: Mapping[str, PropertyValue],
    provider: FormatProvider | None = None,
) -> str:
    """Render ``token`` against ``properties``; unknown names yield the raw token text."""

    value = properties.get(token.name)
    if value is None:
        return token.raw_text
    text = render_value_text(value, token.format_spec, provider)
    if token.alignment is not None:
        return token.alignment.apply(text)
    return text


def render_template(
    template: MessageTemplate,
    properties: Mapping[str, PropertyValue],
    provider: FormatProvider | None = None,
) -> str:
    """Render a message template to plain text.

    Strings and booleans without format or alignment follow the console
    shortcuts (verbatim strings, lowercase booleans) so the plain message reads
    the same as the coloured one.

    Examples
    --------
    >>> from .templates import parse_template
    >>> from .values import capture
    >>> render_template(parse_template("Hello {Name}, ok={Ok} {Missing}"), {"Name": capture("World"), "Ok": capture(True)})
    'Hello World, ok=true {Missing}'
    """
    parts: list[str] = []
    for token in template.tokens:
        if not isinstance(token, PropertyToken):
            parts.append(token.text)
            continue
        value = properties.get(token.name)
        plain = token.format_spec is None and token.alignment is None
        if isinstance(value, ScalarValue) and plain and value.kind is ScalarKind.STRING:
            parts.append(value.raw)
        elif isinstance(value, ScalarValue) and plain and value.kind is ScalarKind.BOOLEAN:
            parts.append(str(value.raw).lower())
        else:
            parts.append(render_property_token(token, properties, provider))
    return "".join(parts)


def format_exception(exception: BaseException | str | None) -> str:
    """Return the text of ``exception`` followed by a newline.

    Traceback frame lines are indented with :data:`STACK_FRAME_LINE_PREFIX`;
    the header and summary lines stay flush left. Pre-rendered strings are used
    as they are. ``None`` yields an empty string.
    """
    if exception is None:
        return ""
    if isinstance(exception, str):
        text = exception
    else:
        chunks = traceback.format_exception(type(exception), exception, exception.__traceback__)
        lines: list[str] = []
        for line in "".join(chunks).splitlines():
            if line.startswith("  ") and not line.startswith(STACK_FRAME_LINE_PREFIX):
                line = " " + line
            lines.append(line)
        text = "\n".join(lines)
    if text and not text.endswith("\n"):
        text += "\n"
    return text


__all__ = [
    "INVARIANT",
    "STACK_FRAME_LINE_PREFIX",
    "FormatProvider",
    "InvariantFormatProvider",
    "SeparatorFormatProvider",
    "format_exception",
    "render_property_token",
    "render_scalar",
    "render_template",
    "render_value_text",
]
