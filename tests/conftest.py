from __future__ import annotations

import io
import os

import pytest
from rich.console import Console

from tests.recording import RecordingWriter


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def record_console() -> Console:
    """Rich console writing ANSI colour codes into an in-memory buffer."""

    return Console(file=io.StringIO(), force_terminal=True, color_system="standard", width=200)


@pytest.fixture(autouse=True)
def _clean_log_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ``LOG_*`` variables of the developer shell out of the tests."""

    for name in list(os.environ):
        if name.startswith("LOG_"):
            monkeypatch.delenv(name, raising=False)
