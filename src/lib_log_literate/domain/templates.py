"""Message and output templates parsed into immutable token sequences.

Purpose
-------
Turn brace templates such as ``"Hello {Name}"`` or
``"[{Timestamp:HH:mm:ss} {Level}] {Message}{NewLine}{Exception}"`` into
ordered text/property tokens that renderers can walk without re-parsing.

Contents
--------
* :class:`TextToken`, :class:`PropertyToken`, :class:`Alignment`.
* :class:`MessageTemplate` - the parsed template.
* :func:`parse_template` - cached parser.

System Role
-----------
Domain layer. Output templates are parsed once when a sink is configured;
message templates are parsed when events are created.

Syntax
------
``{Name}``, ``{Name:format}``, ``{Name,-10}``, ``{Name,8:000}``, with optional
``@``/``$`` capture hints before the name; ``{{`` and ``}}`` escape literal
braces. Malformed placeholders stay in the output as literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Union


_PROPERTY_RE = re.compile(
    r"^(?P<hint>[@$])?(?P<name>[A-Za-z0-9_]+)(?:,(?P<alignment>-?[0-9]+))?(?::(?P<format>[^{}]*))?$"
)


class AlignmentDirection(Enum):
    """Which side the rendered value sticks to inside its padded width."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(slots=True, frozen=True)
class Alignment:
    """Padding request attached to a property token (``{Name,-10}``)."""

    direction: AlignmentDirection
    width: int

    def apply(self, text: str) -> str:
        """Pad ``text`` to :attr:`width`; longer text is never truncated.

        Examples
        --------
        >>> Alignment(AlignmentDirection.RIGHT, 5).apply("ab")
        '   ab'
        >>> Alignment(AlignmentDirection.LEFT, 5).apply("ab")
        'ab   '
        """
        if self.direction is AlignmentDirection.LEFT:
            return text.ljust(self.width)
        return text.rjust(self.width)


class Destructuring(Enum):
    """Capture hint written before a property name."""

    DEFAULT = ""
    DESTRUCTURE = "@"
    STRINGIFY = "$"


@dataclass(slots=True, frozen=True)
class TextToken:
    """Literal text between placeholders."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(slots=True, frozen=True)
class PropertyToken:
    """Named placeholder with optional format specifier and alignment."""

    name: str
    raw_text: str
    format_spec: str | None = None
    alignment: Alignment | None = None
    destructuring: Destructuring = Destructuring.DEFAULT

    def __str__(self) -> str:
        return self.raw_text


TemplateToken = Union[TextToken, PropertyToken]


@dataclass(slots=True, frozen=True)
class MessageTemplate:
    """Parsed template: the source text and its ordered tokens."""

    text: str
    tokens: tuple[TemplateToken, ...]

    @property
    def property_tokens(self) -> tuple[PropertyToken, ...]:
        """Return only the placeholder tokens, in template order."""

        return tuple(token for token in self.tokens if isinstance(token, PropertyToken))

    def __str__(self) -> str:
        return self.text


def parse_template(text: str) -> MessageTemplate:
    """Parse ``text`` into a :class:`MessageTemplate`.

    Raises
    ------
    ValueError
        When ``text`` is ``None``.

    Examples
    --------
    >>> [str(token) for token in parse_template("Hi {Name}!").tokens]
    ['Hi ', '{Name}', '!']
    >>> parse_template("{{literal}}").tokens
    (TextToken(text='{literal}'),)
    >>> parse_template("{Count,5:000}").tokens[0].format_spec
    '000'
    """
    if text is None:
        raise ValueError("template must not be None")
    return _parse_cached(text)


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> MessageTemplate:
    tokens: list[TemplateToken] = []
    buffer: list[str] = []
    index = 0
    length = len(text)

    def flush_text() -> None:
        if buffer:
            tokens.append(TextToken("".join(buffer)))
            buffer.clear()

    while index < length:
        char = text[index]
        if char == "{":
            if index + 1 < length and text[index + 1] == "{":
                buffer.append("{")
                index += 2
                continue
            closing = text.find("}", index + 1)
            nested = text.find("{", index + 1)
            if closing == -1 or (nested != -1 and nested < closing):
                # Unterminated placeholder; keep the brace as text.
                stop = nested if nested != -1 else length
                buffer.append(text[index:stop])
                index = stop
                continue
            raw = text[index : closing + 1]
            token = _parse_property(raw)
            if token is None:
                buffer.append(raw)
            else:
                flush_text()
                tokens.append(token)
            index = closing + 1
            continue
        if char == "}" and index + 1 < length and text[index + 1] == "}":
            buffer.append("}")
            index += 2
            continue
        buffer.append(char)
        index += 1

    flush_text()
    return MessageTemplate(text, tuple(tokens))


def _parse_property(raw: str) -> PropertyToken | None:
    match = _PROPERTY_RE.match(raw[1:-1])
    if match is None:
        return None
    alignment: Alignment | None = None
    if match.group("alignment") is not None:
        width = int(match.group("alignment"))
        if width == 0:
            return None
        direction = AlignmentDirection.LEFT if width < 0 else AlignmentDirection.RIGHT
        alignment = Alignment(direction, abs(width))
    return PropertyToken(
        name=match.group("name"),
        raw_text=raw,
        format_spec=match.group("format") or None,
        alignment=alignment,
        destructuring=Destructuring(match.group("hint") or ""),
    )


__all__ = [
    "Alignment",
    "AlignmentDirection",
    "Destructuring",
    "MessageTemplate",
    "PropertyToken",
    "TemplateToken",
    "TextToken",
    "parse_template",
]
