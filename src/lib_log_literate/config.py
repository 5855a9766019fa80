"""Configuration helpers: ``.env`` loading and ``LOG_*`` environment overrides.

Purpose
-------
Collect everything that decides how the literate console is configured
outside of code: the nearest ``.env`` file (through ``python-dotenv``) and the
``LOG_*`` environment variables that override keyword arguments.

Contents
--------
* :func:`enable_dotenv` / :func:`should_use_dotenv` - opt-in ``.env`` loading.
* :class:`LiterateConsoleConfig` - immutable configuration record.
* :func:`apply_environment` - returns a config with ``LOG_*`` overrides applied.
* Parsing helpers :func:`env_bool` and :func:`parse_console_styles`.

System Role
-----------
Edge-of-system module used by the façade and the CLI. Domain and adapter
layers never read the environment themselves.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .adapters.console.literate_console import DEFAULT_OUTPUT_TEMPLATE
from .domain.levels import LogLevel
from .domain.palettes import Palette, resolve_palette
from .domain.rendering import FormatProvider

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
ENV_CONSOLE_LEVEL = "LOG_CONSOLE_LEVEL"
ENV_CONSOLE_FORMAT_TEMPLATE = "LOG_CONSOLE_FORMAT_TEMPLATE"
ENV_CONSOLE_STDERR_LEVEL = "LOG_CONSOLE_STDERR_LEVEL"
ENV_CONSOLE_THEME = "LOG_CONSOLE_THEME"
ENV_CONSOLE_STYLES = "LOG_CONSOLE_STYLES"
ENV_FORCE_COLOR = "LOG_FORCE_COLOR"
ENV_NO_COLOR = "LOG_NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}
_DISABLED_THRESHOLD = {"", "none", "off"}

_DOTENV_PATH: Path | None = None


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` file, searching upward from the working directory.

    Values already present in :data:`os.environ` win over the file. The
    resolved path is remembered so repeated calls do not re-read the file.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when no file was found.
    """
    global _DOTENV_PATH
    if _DOTENV_PATH is not None:
        return _DOTENV_PATH

    candidate = find_dotenv(usecwd=True)
    if not candidate:
        LOGGER.debug("No .env file found above %s", Path.cwd())
        return None

    path = Path(candidate).resolve()
    load_dotenv(path, override=False)
    LOGGER.debug("Loaded environment from %s", path)
    _DOTENV_PATH = path
    return path


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is enabled.

    An explicit CLI flag wins; otherwise the ``LOG_USE_DOTENV`` value decides.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH
    _DOTENV_PATH = None


def env_bool(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Raises
    ------
    ValueError
        When the variable holds something other than a recognised flag.

    Examples
    --------
    >>> env_bool("LOG_EXAMPLE", True, {})
    True
    >>> env_bool("LOG_EXAMPLE", True, {"LOG_EXAMPLE": "off"})
    False
    """
    source = os.environ if environ is None else environ
    value = source.get(name)
    if value is None or not value.strip():
        return default
    normalised = value.strip().lower()
    if normalised in _TRUTHY:
        return True
    if normalised in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def parse_console_styles(raw: str | None) -> dict[str, str]:
    """Convert ``role=style`` comma-separated strings into a dictionary.

    Examples
    --------
    >>> parse_console_styles("string=green, numeric = bold magenta")
    {'string': 'green', 'numeric': 'bold magenta'}
    >>> parse_console_styles(None)
    {}
    """
    if not raw:
        return {}
    result: dict[str, str] = {}
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        key, separator, value = chunk.partition("=")
        key = key.strip()
        value = value.strip()
        if not separator or not key or not value:
            raise ValueError(f"Malformed console style entry: {chunk.strip()!r}")
        result[key] = value
    return result


@dataclass(slots=True, frozen=True)
class LiterateConsoleConfig:
    """Settings for :func:`lib_log_literate.literate_console`.

    Attributes
    ----------
    minimum_level:
        Events below this severity are dropped before rendering.
    output_template:
        Layout of each console line.
    format_provider:
        Number/date formatting; invariant when ``None``.
    standard_error_threshold:
        Severity at or above which events go to stderr; ``None`` keeps stdout.
    theme:
        Name of a built-in palette (``literate``, ``dark``, ``pastel``).
    palette_overrides:
        ``role -> colour`` replacements applied on top of ``theme``.
    force_color, no_color:
        Terminal colour overrides handed to Rich.
    """

    minimum_level: LogLevel = LogLevel.VERBOSE
    output_template: str = DEFAULT_OUTPUT_TEMPLATE
    format_provider: FormatProvider | None = None
    standard_error_threshold: LogLevel | None = None
    theme: str = "literate"
    palette_overrides: Mapping[str, str] = field(default_factory=dict)
    force_color: bool = False
    no_color: bool = False

    def __post_init__(self) -> None:
        if self.output_template is None:
            raise ValueError("output_template must not be None")
        if isinstance(self.minimum_level, str):
            object.__setattr__(self, "minimum_level", LogLevel.from_name(self.minimum_level))
        if isinstance(self.standard_error_threshold, str):
            object.__setattr__(self, "standard_error_threshold", LogLevel.from_name(self.standard_error_threshold))
        object.__setattr__(self, "palette_overrides", dict(self.palette_overrides))

    def palette(self) -> Palette:
        """Resolve the theme and overrides into a :class:`Palette`."""

        return resolve_palette(self.theme, self.palette_overrides)


def apply_environment(config: LiterateConsoleConfig, environ: Mapping[str, str] | None = None) -> LiterateConsoleConfig:
    """Return ``config`` with ``LOG_*`` environment overrides applied.

    Environment values take precedence over the configured ones; style
    overrides from ``LOG_CONSOLE_STYLES`` merge over ``palette_overrides``.

    Examples
    --------
    >>> base = LiterateConsoleConfig()
    >>> apply_environment(base, {"LOG_CONSOLE_LEVEL": "warn"}).minimum_level
    <LogLevel.WARNING: 30>
    >>> apply_environment(base, {"LOG_CONSOLE_STDERR_LEVEL": "error"}).standard_error_threshold
    <LogLevel.ERROR: 40>
    """
    source = os.environ if environ is None else environ
    changes: dict[str, object] = {}

    level = source.get(ENV_CONSOLE_LEVEL)
    if level:
        changes["minimum_level"] = LogLevel.from_name(level)

    template = source.get(ENV_CONSOLE_FORMAT_TEMPLATE)
    if template:
        changes["output_template"] = template

    stderr_level = source.get(ENV_CONSOLE_STDERR_LEVEL)
    if stderr_level is not None:
        if stderr_level.strip().lower() in _DISABLED_THRESHOLD:
            changes["standard_error_threshold"] = None
        else:
            changes["standard_error_threshold"] = LogLevel.from_name(stderr_level)

    theme = source.get(ENV_CONSOLE_THEME)
    if theme:
        changes["theme"] = theme

    styles = parse_console_styles(source.get(ENV_CONSOLE_STYLES))
    if styles:
        changes["palette_overrides"] = {**config.palette_overrides, **styles}

    changes["force_color"] = env_bool(ENV_FORCE_COLOR, config.force_color, source)
    changes["no_color"] = env_bool(ENV_NO_COLOR, config.no_color, source)

    resolved = replace(config, **changes)
    LOGGER.debug("Resolved console configuration: %s", resolved)
    return resolved


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_CONSOLE_FORMAT_TEMPLATE",
    "ENV_CONSOLE_LEVEL",
    "ENV_CONSOLE_STDERR_LEVEL",
    "ENV_CONSOLE_STYLES",
    "ENV_CONSOLE_THEME",
    "ENV_FORCE_COLOR",
    "ENV_NO_COLOR",
    "LiterateConsoleConfig",
    "apply_environment",
    "enable_dotenv",
    "env_bool",
    "parse_console_styles",
    "should_use_dotenv",
]
