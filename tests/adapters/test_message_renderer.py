from __future__ import annotations

from datetime import datetime, timezone

from lib_log_literate.adapters.console.message import render_message
from lib_log_literate.application.ports.console import Stream
from lib_log_literate.domain.events import LogEvent
from lib_log_literate.domain.levels import LogLevel
from lib_log_literate.domain.palettes import LITERATE_PALETTE as P
from lib_log_literate.domain.rendering import SeparatorFormatProvider
from tests.os_markers import OS_AGNOSTIC
from tests.recording import RecordingWriter

pytestmark = [OS_AGNOSTIC]

MOMENT = datetime(2025, 9, 30, 12, 0, 5, tzinfo=timezone.utc)


def _render(template: str, provider: object | None = None, **properties: object) -> RecordingWriter:
    event = LogEvent.create(LogLevel.INFORMATION, template, timestamp=MOMENT, **properties)
    writer = RecordingWriter()
    with writer.session(Stream.PRIMARY):
        render_message(writer, event, provider=provider)  # type: ignore[arg-type]
    return writer


def test_text_strings_and_numbers_take_their_colours() -> None:
    writer = _render("Hello {Name}, you have {Count} items", Name="World", Count=3)

    assert writer.pairs() == [
        (P.text, "Hello "),
        (P.string, "World"),
        (P.text, ", you have "),
        (P.numeric, "3"),
        (P.text, " items"),
    ]


def test_missing_property_shows_raw_token() -> None:
    writer = _render("Value {Missing} here")

    assert writer.text() == "Value {Missing} here"
    assert writer.colour_of("{Missing}") == P.raw_text


def test_missing_property_keeps_format_and_alignment_text() -> None:
    assert _render("{Missing,-4:000}").text() == "{Missing,-4:000}"


def test_booleans_without_format_are_lowercase() -> None:
    writer = _render("{Yes}/{No}", Yes=True, No=False)

    assert writer.pairs() == [(P.keyword, "true"), (P.text, "/"), (P.keyword, "false")]


def test_booleans_with_a_format_use_the_generic_formatter() -> None:
    writer = _render("{Yes:l}", Yes=True)

    assert writer.pairs() == [(P.keyword, "True")]


def test_strings_with_alignment_go_through_the_generic_formatter() -> None:
    writer = _render("[{Name,8}]", Name="ada")

    assert writer.text() == '[   "ada"]'
    assert writer.colour_of('   "ada"') == P.string


def test_formatted_numbers_honour_format_and_provider() -> None:
    provider = SeparatorFormatProvider(decimal_point=",", thousands_separator=".")

    writer = _render("{Total:N2}", provider=provider, Total=1234.5)

    assert writer.pairs() == [(P.numeric, "1.234,50")]


def test_null_renders_as_keyword() -> None:
    assert _render("{Nothing}", Nothing=None).pairs() == [(P.keyword, "null")]


def test_composite_values_use_the_value_renderer() -> None:
    writer = _render("Items {Items}", Items=["a", 1])

    assert writer.text() == 'Items ["a", 1]'
    assert writer.colour_of("[") == P.punctuation
    assert writer.colour_of('"a"') == P.string


def test_escaped_braces_are_plain_text() -> None:
    assert _render("{{literal}}").pairs() == [(P.text, "{literal}")]
