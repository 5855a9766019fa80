"""CLI behaviour coverage for the click adapter."""

from __future__ import annotations

import re
import sys
from typing import Callable

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from lib_log_literate import __init__conf__
from lib_log_literate import cli as cli_mod
from lib_log_literate.lib_log_literate import summary_info
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI colour codes.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click command with ``CliRunner`` and capture output."""

    runner = CliRunner()
    original_argv = sys.argv
    sys.argv = [__init__conf__.shell_command]
    try:
        result = runner.invoke(
            cli_mod.cli,
            args or [],
            prog_name=__init__conf__.shell_command,
        )
    finally:
        sys.argv = original_argv
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output == summary_info()


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == f"{__init__conf__.shell_command} version {__init__conf__.version}"


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_cli_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)

    exit_code, _stdout, _exception = run_cli(["--traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_cli_leaves_traceback_preferences_alone_without_the_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is True


def test_cli_demo_runs_for_single_theme() -> None:
    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, ["demo", "--theme", "dark"])

    assert result.exit_code == 0
    plain_output = strip_ansi(result.output)
    assert "=== Theme: dark (6 events emitted) ===" in plain_output
    assert "Checkout failed for alice" in plain_output
    assert "RuntimeError: Payment gateway unavailable" in plain_output


def test_cli_demo_rejects_unknown_theme() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["demo", "--theme", "neon"])

    assert result.exit_code == 2
    assert "neon" in result.output


def test_cli_demo_forwards_options(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, object] = {}

    def fake_demo(**kwargs: object) -> list[dict[str, object]]:
        recorded.update(kwargs)
        return [{"ok": True}, {"ok": False, "reason": "below_minimum_level"}]

    monkeypatch.setattr(cli_mod, "_demo", fake_demo)

    result = CliRunner().invoke(cli_mod.cli, ["demo", "--theme", "PASTEL", "--stderr-level", "warning", "--force-color"])

    assert result.exit_code == 0
    assert recorded == {"theme": "pastel", "standard_error_threshold": "warning", "force_color": True}
    assert "=== Theme: pastel (1 events emitted) ===" in result.output


def test_cli_render_writes_one_event() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli_mod.cli,
        ["render", "Hello {Name}, {Count} left", "-p", "Name=World", "-p", "Count=3", "--output-template", "{Level} {Message}{NewLine}"],
    )

    assert result.exit_code == 0
    assert strip_ansi(result.output) == "INF Hello World, 3 left\n"


def test_cli_render_honours_the_level() -> None:
    result = CliRunner().invoke(
        cli_mod.cli,
        ["render", "Disk full", "--level", "fatal", "--output-template", "{Level:u3}|{Message}"],
    )

    assert result.exit_code == 0
    assert strip_ansi(result.output) == "FTL|Disk full"


def test_cli_render_rejects_malformed_properties() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["render", "Hello {Name}", "-p", "Name"])

    assert result.exit_code == 2
    assert "expected NAME=VALUE" in result.output


@pytest.mark.parametrize(
    "raw, expected",
    [("3", 3), ("-2", -2), ("0.5", 0.5), ("TRUE", True), ("false", False), ("null", None), ("ada", "ada")],
)
def test_property_values_are_coerced(raw: str, expected: object) -> None:
    assert cli_mod._parse_properties([f"Value={raw}"]) == {"Value": expected}


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, bool] = {}

    def fake_run_cli(command: Callable[..., int], argv: list[str] | None = None, *, prog_name: str | None = None, **_: object) -> int:
        runner = CliRunner()
        result = runner.invoke(command, ["info"] if argv is None else argv)
        if result.exception is not None:
            raise result.exception
        recorded["traceback"] = lib_cli_exit_tools.config.traceback
        recorded["traceback_force_color"] = lib_cli_exit_tools.config.traceback_force_color
        return result.exit_code

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    exit_code = cli_mod.main(["--no-traceback", "info"])

    assert exit_code == 0
    assert recorded == {"traceback": False, "traceback_force_color": False}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True


def test_main_consumes_sys_argv(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", False, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", False, raising=False)
    monkeypatch.setattr(sys, "argv", [__init__conf__.shell_command, "info"], raising=False)

    exit_code = cli_mod.main()
    captured = capsys.readouterr()

    assert exit_code == 0
    assert f"Info for {__init__conf__.name}" in captured.out
