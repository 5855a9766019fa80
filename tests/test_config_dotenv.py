from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_literate import cli as cli_module
from lib_log_literate import config as log_config
from lib_log_literate.domain import LITERATE_PALETTE, LogLevel
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    log_config._reset_dotenv_state_for_testing()
    yield
    log_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Loading the nearest .env injects values found in parent directories."""

    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_CONSOLE_THEME=pastel\n")
    monkeypatch.chdir(nested)

    loaded = log_config.enable_dotenv()

    assert loaded == env_file.resolve()
    assert os.environ["LOG_CONSOLE_THEME"] == "pastel"

    os.environ.pop("LOG_CONSOLE_THEME", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Existing environment variables keep precedence over .env entries."""

    nested = tmp_path / "nested"
    nested.mkdir()
    (tmp_path / ".env").write_text("LOG_CONSOLE_THEME=pastel\n")
    monkeypatch.chdir(nested)
    monkeypatch.setenv("LOG_CONSOLE_THEME", "dark")

    result = log_config.enable_dotenv()

    assert result is not None
    assert os.environ["LOG_CONSOLE_THEME"] == "dark"


def test_enable_dotenv_loads_the_file_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_CONSOLE_LEVEL=debug\n")
    monkeypatch.chdir(tmp_path)

    first = log_config.enable_dotenv()
    env_file.write_text("LOG_CONSOLE_LEVEL=error\n")
    os.environ.pop("LOG_CONSOLE_LEVEL", None)
    second = log_config.enable_dotenv()

    assert first == second == env_file.resolve()
    assert "LOG_CONSOLE_LEVEL" not in os.environ


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI flag wins over environment toggle when deciding whether to load .env."""

    runner = CliRunner()

    calls: list[tuple[tuple[object, ...], dict[str, object]]] = []

    def record_enable(*args: object, **kwargs: object) -> None:
        calls.append((args, kwargs))

    monkeypatch.setattr(log_config, "enable_dotenv", record_enable)

    result = runner.invoke(cli_module.cli, ["--use-dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    env = {log_config.DOTENV_ENV_VAR: "1"}
    result = runner.invoke(cli_module.cli, ["info"], env=env)
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-use-dotenv", "info"], env=env)
    assert result.exit_code == 0
    assert calls == []

    result = runner.invoke(cli_module.cli, ["info"])
    assert result.exit_code == 0
    assert calls == []


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("YES", True), (" on ", True), ("0", False), ("false", False), ("Off", False)],
)
def test_env_bool_understands_common_flags(value: str, expected: bool) -> None:
    assert log_config.env_bool("LOG_FLAG", not expected, {"LOG_FLAG": value}) is expected


def test_env_bool_falls_back_for_missing_or_blank_values() -> None:
    assert log_config.env_bool("LOG_FLAG", True, {}) is True
    assert log_config.env_bool("LOG_FLAG", False, {"LOG_FLAG": "  "}) is False


def test_env_bool_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="LOG_FLAG must be a boolean flag"):
        log_config.env_bool("LOG_FLAG", False, {"LOG_FLAG": "maybe"})


def test_parse_console_styles_ignores_empty_chunks() -> None:
    assert log_config.parse_console_styles("string=green,,  , name=cyan") == {"string": "green", "name": "cyan"}


@pytest.mark.parametrize("raw", ["string", "=green", "string="])
def test_parse_console_styles_rejects_malformed_entries(raw: str) -> None:
    with pytest.raises(ValueError, match="Malformed console style entry"):
        log_config.parse_console_styles(raw)


def test_config_converts_level_names() -> None:
    config = log_config.LiterateConsoleConfig(minimum_level="info", standard_error_threshold="warn")  # type: ignore[arg-type]

    assert config.minimum_level is LogLevel.INFORMATION
    assert config.standard_error_threshold is LogLevel.WARNING


def test_config_rejects_missing_output_template() -> None:
    with pytest.raises(ValueError, match="output_template must not be None"):
        log_config.LiterateConsoleConfig(output_template=None)  # type: ignore[arg-type]


def test_config_rejects_unknown_level_names() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        log_config.LiterateConsoleConfig(minimum_level="loud")  # type: ignore[arg-type]


def test_config_palette_applies_overrides() -> None:
    config = log_config.LiterateConsoleConfig(palette_overrides={"string": "green"})

    palette = config.palette()

    assert palette.string == "green"
    assert palette.numeric == LITERATE_PALETTE.numeric


def test_environment_overrides_win_over_configured_values() -> None:
    base = log_config.LiterateConsoleConfig(
        minimum_level=LogLevel.DEBUG,
        output_template="{Message}",
        theme="dark",
        palette_overrides={"string": "green", "name": "cyan"},
    )
    environ = {
        "LOG_CONSOLE_LEVEL": "error",
        "LOG_CONSOLE_FORMAT_TEMPLATE": "{Level} {Message}",
        "LOG_CONSOLE_THEME": "pastel",
        "LOG_CONSOLE_STYLES": "string=red",
        "LOG_FORCE_COLOR": "1",
        "LOG_NO_COLOR": "yes",
    }

    resolved = log_config.apply_environment(base, environ)

    assert resolved.minimum_level is LogLevel.ERROR
    assert resolved.output_template == "{Level} {Message}"
    assert resolved.theme == "pastel"
    assert resolved.palette_overrides == {"string": "red", "name": "cyan"}
    assert resolved.force_color is True
    assert resolved.no_color is True


def test_environment_without_log_variables_keeps_the_config() -> None:
    base = log_config.LiterateConsoleConfig(theme="dark", force_color=True)

    assert log_config.apply_environment(base, {}) == base


@pytest.mark.parametrize("value", ["", "none", "OFF"])
def test_stderr_threshold_can_be_disabled_from_the_environment(value: str) -> None:
    base = log_config.LiterateConsoleConfig(standard_error_threshold=LogLevel.WARNING)

    resolved = log_config.apply_environment(base, {"LOG_CONSOLE_STDERR_LEVEL": value})

    assert resolved.standard_error_threshold is None


def test_apply_environment_reads_os_environ_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_CONSOLE_LEVEL", "fatal")

    resolved = log_config.apply_environment(log_config.LiterateConsoleConfig())

    assert resolved.minimum_level is LogLevel.FATAL
