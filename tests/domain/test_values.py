from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from fractions import Fraction

import pytest

from lib_log_literate.domain.values import (
    MAX_CAPTURE_DEPTH,
    DictionaryValue,
    ScalarKind,
    ScalarValue,
    SequenceValue,
    StructureProperty,
    StructureValue,
    capture,
)
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@dataclass
class Point:
    x: int
    y: int


class Customer:
    def __init__(self) -> None:
        self.name = "ada"
        self.tier = 2
        self._secret = "hidden"


@pytest.mark.parametrize(
    "raw, kind",
    [
        (None, ScalarKind.NULL),
        (True, ScalarKind.BOOLEAN),
        (False, ScalarKind.BOOLEAN),
        ("text", ScalarKind.STRING),
        (3, ScalarKind.NUMERIC),
        (2.5, ScalarKind.NUMERIC),
        (Decimal("1.10"), ScalarKind.NUMERIC),
        (Fraction(1, 3), ScalarKind.NUMERIC),
        (1 + 2j, ScalarKind.NUMERIC),
        (datetime(2025, 1, 1, tzinfo=timezone.utc), ScalarKind.OTHER),
        (b"bytes", ScalarKind.OTHER),
    ],
)
def test_scalars_are_tagged_once_by_kind(raw: object, kind: ScalarKind) -> None:
    value = capture(raw)

    assert isinstance(value, ScalarValue)
    assert value.kind is kind
    assert value.raw is raw


def test_sequences_keep_element_order() -> None:
    value = capture([3, "a", None])

    assert isinstance(value, SequenceValue)
    assert [element.raw for element in value.elements] == [3, "a", None]


def test_mappings_become_dictionaries_with_scalar_keys() -> None:
    value = capture({"a": 1, 2: [True]})

    assert isinstance(value, DictionaryValue)
    keys = [key.raw for key, _ in value.entries]
    assert keys == ["a", 2]
    assert isinstance(value.entries[1][1], SequenceValue)


def test_composite_dictionary_keys_are_stringified() -> None:
    value = capture({(1, 2): "pair"})

    key, _ = value.entries[0]
    assert key == ScalarValue("(1, 2)", ScalarKind.STRING)


def test_dataclasses_become_tagged_structures() -> None:
    value = capture(Point(1, 2))

    assert value == StructureValue(
        properties=(
            StructureProperty("x", ScalarValue.of(1)),
            StructureProperty("y", ScalarValue.of(2)),
        ),
        type_tag="Point",
    )


def test_plain_objects_are_only_destructured_on_request() -> None:
    customer = Customer()

    kept = capture(customer)
    destructured = capture(customer, destructure=True)

    assert isinstance(kept, ScalarValue)
    assert kept.kind is ScalarKind.OTHER
    assert isinstance(destructured, StructureValue)
    assert destructured.type_tag == "Customer"
    assert [prop.name for prop in destructured.properties] == ["name", "tier"]


def test_existing_property_values_pass_through() -> None:
    value = SequenceValue((ScalarValue.of(1),))

    assert capture(value) is value


def test_deep_nesting_is_cut_off_with_a_string() -> None:
    nested: list[object] = [1]
    for _ in range(MAX_CAPTURE_DEPTH + 5):
        nested = [nested]

    value = capture(nested)
    depth = 0
    while isinstance(value, SequenceValue):
        depth += 1
        value = value.elements[0]

    assert depth == MAX_CAPTURE_DEPTH
    assert isinstance(value, ScalarValue)
    assert value.kind is ScalarKind.STRING


def test_literal_strings_are_flagged() -> None:
    value = ScalarValue.literal_string("as is")

    assert value.kind is ScalarKind.STRING
    assert value.literal is True
    assert ScalarValue.of("as is").literal is False
