"""Property values attached to log events.

Purpose
-------
Represent every value a log event can carry as one closed, immutable variant
so renderers switch on an explicit tag instead of inspecting arbitrary Python
objects at render time.

Contents
--------
* :class:`ScalarKind` - closed classification assigned when a scalar is built.
* :class:`ScalarValue`, :class:`SequenceValue`, :class:`StructureValue`,
  :class:`DictionaryValue` - the four value shapes (:data:`PropertyValue`).
* :func:`capture` - converts arbitrary Python objects into property values.

System Role
-----------
Domain layer; events store these values, and the console adapters render them.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Union


MAX_CAPTURE_DEPTH = 10
"""Nesting depth beyond which :func:`capture` stops descending."""


class ScalarKind(Enum):
    """Classification of a scalar payload, fixed at construction time."""

    NULL = "null"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMERIC = "numeric"
    OTHER = "other"


def _classify(raw: Any) -> ScalarKind:
    if raw is None:
        return ScalarKind.NULL
    if isinstance(raw, bool):
        return ScalarKind.BOOLEAN
    if isinstance(raw, str):
        return ScalarKind.STRING
    if isinstance(raw, (int, float, complex, Decimal, Fraction)):
        return ScalarKind.NUMERIC
    return ScalarKind.OTHER


@dataclass(slots=True, frozen=True)
class ScalarValue:
    """A single value with its :class:`ScalarKind` tag.

    ``literal`` marks strings that render verbatim in generic formatting
    (no quoting); the output-template metadata (``Message``, ``NewLine``,
    ``Exception``) uses it.
    """

    raw: Any
    kind: ScalarKind
    literal: bool = False

    @classmethod
    def of(cls, raw: Any) -> "ScalarValue":
        """Build a scalar, classifying ``raw`` once.

        Examples
        --------
        >>> ScalarValue.of(True).kind
        <ScalarKind.BOOLEAN: 'boolean'>
        >>> ScalarValue.of(2.5).kind
        <ScalarKind.NUMERIC: 'numeric'>
        """
        return cls(raw, _classify(raw))

    @classmethod
    def literal_string(cls, text: str) -> "ScalarValue":
        """Build a string scalar that renders without quotes."""

        return cls(text, ScalarKind.STRING, literal=True)


@dataclass(slots=True, frozen=True)
class SequenceValue:
    """Ordered collection of property values."""

    elements: tuple["PropertyValue", ...] = ()


@dataclass(slots=True, frozen=True)
class StructureProperty:
    """Named member of a :class:`StructureValue`."""

    name: str
    value: "PropertyValue"


@dataclass(slots=True, frozen=True)
class StructureValue:
    """Object-like value with an optional type tag and ordered members."""

    properties: tuple[StructureProperty, ...] = ()
    type_tag: str | None = None


@dataclass(slots=True, frozen=True)
class DictionaryValue:
    """Ordered key/value pairs whose keys are scalars."""

    entries: tuple[tuple[ScalarValue, "PropertyValue"], ...] = ()


PropertyValue = Union[ScalarValue, SequenceValue, StructureValue, DictionaryValue]
"""The closed set of shapes a logged property value may take."""


def capture(obj: Any, *, destructure: bool = False, _depth: int = 0) -> PropertyValue:
    """Convert ``obj`` into a :data:`PropertyValue`.

    Parameters
    ----------
    obj:
        Arbitrary Python object. Existing property values pass through.
    destructure:
        When ``True`` plain objects exposing ``__dict__`` become structures
        tagged with their class name. Dataclass instances always do.

    Examples
    --------
    >>> [element.raw for element in capture((1, "a")).elements]
    [1, 'a']
    >>> capture({"k": None}).entries[0][1].kind
    <ScalarKind.NULL: 'null'>
    """
    if isinstance(obj, (ScalarValue, SequenceValue, StructureValue, DictionaryValue)):
        return obj
    scalar = ScalarValue.of(obj)
    if scalar.kind is not ScalarKind.OTHER or isinstance(obj, (bytes, bytearray)):
        return scalar
    if _depth >= MAX_CAPTURE_DEPTH:
        return ScalarValue.of(repr(obj))

    depth = _depth + 1
    if isinstance(obj, Mapping):
        return DictionaryValue(
            tuple((_capture_key(key), capture(value, destructure=destructure, _depth=depth)) for key, value in obj.items())
        )
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        members = tuple(
            StructureProperty(field.name, capture(getattr(obj, field.name), destructure=destructure, _depth=depth))
            for field in dataclasses.fields(obj)
        )
        return StructureValue(members, type(obj).__name__)
    if isinstance(obj, Iterable) and not isinstance(obj, type):
        return SequenceValue(tuple(capture(item, destructure=destructure, _depth=depth) for item in obj))
    if destructure and hasattr(obj, "__dict__") and not isinstance(obj, type):
        members = tuple(
            StructureProperty(name, capture(value, destructure=destructure, _depth=depth))
            for name, value in vars(obj).items()
            if not name.startswith("_")
        )
        return StructureValue(members, type(obj).__name__)
    return scalar


def _capture_key(key: Any) -> ScalarValue:
    """Dictionary keys are always scalars; composite keys fall back to ``str``."""
    scalar = ScalarValue.of(key)
    if scalar.kind is ScalarKind.OTHER and isinstance(key, (tuple, frozenset)):
        return ScalarValue.of(str(key))
    return scalar


__all__ = [
    "MAX_CAPTURE_DEPTH",
    "DictionaryValue",
    "PropertyValue",
    "ScalarKind",
    "ScalarValue",
    "SequenceValue",
    "StructureProperty",
    "StructureValue",
    "capture",
]
