"""Colour palettes mapping semantic roles to Rich colour names.

Purpose
-------
Keep the colour decisions of the literate console in one immutable value so
renderers ask for a *role* (punctuation, string literal, error level, ...) and
never for a concrete colour.

Contents
--------
* :class:`Palette` - frozen role-to-colour mapping.
* :data:`LITERATE_PALETTE` - default palette mirroring the classic literate
  console colours.
* :data:`PALETTES` - built-in themes addressable by name.

System Role
-----------
Consumed by the console adapters; configuration resolves ``theme`` names and
``LOG_CONSOLE_STYLES`` overrides into a single :class:`Palette`.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Mapping

from .levels import LogLevel


@dataclass(slots=True, frozen=True)
class Palette:
    """Immutable mapping of rendering roles to Rich colour names.

    Attributes
    ----------
    text, subtext, punctuation:
        Plain message text, secondary metadata, and structural characters.
    verbose, debug, information, warning, error, fatal:
        Colour of each severity's level code.
    keyword, numeric, string, other:
        Scalar colours chosen by the scalar kind (``null``/booleans, numbers,
        strings, everything else).
    name:
        Structure property names.
    raw_text:
        Message placeholders that have no matching property.
    """

    text: str = "bright_white"
    subtext: str = "white"
    punctuation: str = "bright_black"
    verbose: str = "white"
    debug: str = "white"
    information: str = "bright_white"
    warning: str = "bright_yellow"
    error: str = "bright_red"
    fatal: str = "bright_red"
    keyword: str = "bright_blue"
    numeric: str = "bright_magenta"
    string: str = "bright_cyan"
    other: str = "bright_green"
    name: str = "white"
    raw_text: str = "bright_yellow"

    def level_color(self, level: LogLevel) -> str:
        """Return the colour assigned to ``level``."""

        return getattr(self, level.severity)

    def with_overrides(self, overrides: Mapping[str, str] | None) -> "Palette":
        """Return a copy with ``overrides`` applied.

        Keys are role names, case-insensitive; unknown roles raise
        :class:`ValueError` so typos in configuration surface early.

        Examples
        --------
        >>> LITERATE_PALETTE.with_overrides({"STRING": "green"}).string
        'green'
        """
        if not overrides:
            return self
        known = {field.name for field in fields(self)}
        changes: dict[str, str] = {}
        for key, value in overrides.items():
            role = key.strip().lower()
            if role not in known:
                raise ValueError(f"Unknown palette role: {key!r}")
            changes[role] = value.strip()
        return replace(self, **changes)


LITERATE_PALETTE = Palette()

PALETTES: dict[str, Palette] = {
    "literate": LITERATE_PALETTE,
    "dark": Palette(
        text="bright_white",
        subtext="grey70",
        punctuation="grey42",
        verbose="grey42",
        debug="grey70",
        information="bright_white",
        warning="gold3",
        error="red3",
        fatal="red3",
        keyword="dodger_blue2",
        numeric="orchid",
        string="dark_cyan",
        other="green3",
        name="grey70",
        raw_text="gold3",
    ),
    "pastel": Palette(
        text="white",
        subtext="grey85",
        punctuation="grey58",
        verbose="aquamarine1",
        debug="aquamarine1",
        information="light_sky_blue1",
        warning="khaki1",
        error="light_salmon1",
        fatal="plum1",
        keyword="light_steel_blue",
        numeric="plum2",
        string="light_cyan1",
        other="pale_green1",
        name="grey85",
        raw_text="khaki1",
    ),
}
"""Built-in palettes keyed by theme name."""


def resolve_palette(theme: str | None = None, overrides: Mapping[str, str] | None = None) -> Palette:
    """Return the palette for ``theme`` with ``overrides`` applied.

    Examples
    --------
    >>> resolve_palette().error
    'bright_red'
    >>> resolve_palette("dark").warning
    'gold3'
    """
    key = (theme or "literate").strip().lower()
    try:
        palette = PALETTES[key]
    except KeyError as exc:
        raise ValueError(f"Unknown console theme: {theme!r}") from exc
    return palette.with_overrides(overrides)


__all__ = ["LITERATE_PALETTE", "PALETTES", "Palette", "resolve_palette"]
