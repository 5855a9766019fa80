from __future__ import annotations

from lib_log_literate.adapters.console.exceptions import render_exception
from lib_log_literate.application.ports.console import Stream
from lib_log_literate.domain.palettes import LITERATE_PALETTE as P
from lib_log_literate.domain.templates import parse_template
from lib_log_literate.domain.values import ScalarValue
from tests.os_markers import OS_AGNOSTIC
from tests.recording import RecordingWriter

pytestmark = [OS_AGNOSTIC]

TOKEN = parse_template("{Exception}").tokens[0]


def _render(text: str) -> RecordingWriter:
    writer = RecordingWriter()
    with writer.session(Stream.PRIMARY):
        render_exception(writer, TOKEN, {"Exception": ScalarValue.literal_string(text)})
    return writer


def test_frame_lines_are_subtext_and_summary_lines_are_text() -> None:
    writer = _render("System.Exception: Boom\n   at Program.Main()\n   at Program.Run()\n")

    assert writer.pairs() == [
        (P.text, "System.Exception: Boom"),
        (P.text, "\n"),
        (P.subtext, "   at Program.Main()"),
        (P.subtext, "\n"),
        (P.subtext, "   at Program.Run()"),
        (P.subtext, "\n"),
    ]


def test_two_space_indentation_is_not_a_frame() -> None:
    writer = _render("  inner detail\n")

    assert writer.colour_of("  inner detail") == P.text


def test_every_line_is_terminated_even_without_final_newline() -> None:
    assert _render("a\nb").text() == "a\nb\n"


def test_empty_exception_writes_nothing() -> None:
    assert _render("").segments == []


def test_only_carriage_returns_and_newlines_split_lines() -> None:
    writer = _render("Boom\r\n   at A()\rform\x0cfeed sep\n\n   at B()")

    assert writer.text() == "Boom\n   at A()\nform\x0cfeed sep\n\n   at B()\n"
    assert writer.colour_of("form\x0cfeed sep") == P.text
