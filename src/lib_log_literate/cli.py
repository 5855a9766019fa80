"""Command-line interface for the literate console.

Purpose
-------
Expose the package from the shell: print metadata, preview colour themes, and
render one ad-hoc event through the literate sink.

Contents
--------
* :func:`cli` - Click group with the global ``--traceback`` and
  ``--use-dotenv`` switches.
* Commands ``info``, ``demo`` and ``render``.
* :func:`main` - entry point run through :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer. Exit codes and traceback printing are delegated to
``lib_cli_exit_tools``; everything else calls the public façade.
"""

from __future__ import annotations

import os
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .domain import PALETTES, LogLevel
from .lib_log_literate import demo as _demo
from .lib_log_literate import literate_console, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = [level.name.lower() for level in LogLevel]
_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None, "none": None}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (default: ${config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command; prints the metadata banner when no command is given."""

    if _given(ctx, "traceback"):
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit_dotenv = use_dotenv if _given(ctx, "use_dotenv") else None
    if config_module.should_use_dotenv(explicit=explicit_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


def _given(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) is not click.core.ParameterSource.DEFAULT


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--theme",
    type=click.Choice(sorted(PALETTES), case_sensitive=False),
    default="literate",
    show_default=True,
    help="Colour palette to preview.",
)
@click.option(
    "--stderr-level",
    type=click.Choice(_LEVEL_CHOICES, case_sensitive=False),
    default=None,
    help="Send events at or above this level to stderr.",
)
@click.option("--force-color", is_flag=True, default=False, help="Emit ANSI colours even when not attached to a terminal.")
def cli_demo(theme: str, stderr_level: str | None, force_color: bool) -> None:
    """Emit one sample event per level."""

    results = _demo(theme=theme, standard_error_threshold=stderr_level, force_color=force_color)
    emitted = sum(1 for result in results if result.get("ok"))
    click.echo(f"=== Theme: {theme.lower()} ({emitted} events emitted) ===")


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("template")
@click.option(
    "--level",
    type=click.Choice(_LEVEL_CHOICES, case_sensitive=False),
    default="information",
    show_default=True,
    help="Severity of the rendered event.",
)
@click.option(
    "--property",
    "-p",
    "properties",
    multiple=True,
    metavar="NAME=VALUE",
    help="Template property; numbers, true/false and null are converted.",
)
@click.option("--output-template", default=None, help="Override the output template.")
def cli_render(template: str, level: str, properties: tuple[str, ...], output_template: str | None) -> None:
    """Render TEMPLATE as one log event."""

    values = _parse_properties(properties)
    overrides: dict[str, Any] = {}
    if output_template is not None:
        overrides["output_template"] = output_template
    log = literate_console(minimum_level=LogLevel.VERBOSE, **overrides)
    log.write(LogLevel.from_name(level), template, **values)


def _parse_properties(entries: Sequence[str]) -> dict[str, Any]:
    """Turn ``NAME=VALUE`` pairs into typed properties.

    Examples
    --------
    >>> _parse_properties(["Count=3", "Ratio=0.5", "Ok=true", "Name=ada"])
    {'Count': 3, 'Ratio': 0.5, 'Ok': True, 'Name': 'ada'}
    """
    values: dict[str, Any] = {}
    for entry in entries:
        name, separator, raw = entry.partition("=")
        name = name.strip()
        if not separator or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {entry!r}", param_hint="--property")
        values[name] = _coerce_value(raw)
    return values


def _coerce_value(raw: str) -> Any:
    lowered = raw.strip().lower()
    if lowered in _LITERALS:
        return _LITERALS[lowered]
    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            continue
    return raw


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    so embedding callers keep their own settings.
    """
    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
