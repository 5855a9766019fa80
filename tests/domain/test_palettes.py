from __future__ import annotations

import pytest

from lib_log_literate.domain.levels import LogLevel
from lib_log_literate.domain.palettes import LITERATE_PALETTE, PALETTES, resolve_palette
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_default_palette_is_literate() -> None:
    assert resolve_palette() is LITERATE_PALETTE
    assert resolve_palette(None) is PALETTES["literate"]


def test_theme_lookup_is_case_insensitive() -> None:
    assert resolve_palette(" DARK ") is PALETTES["dark"]


def test_unknown_theme_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown console theme"):
        resolve_palette("sepia")


def test_overrides_replace_single_roles() -> None:
    palette = resolve_palette("literate", {"String": "green", "numeric": " magenta "})

    assert palette.string == "green"
    assert palette.numeric == "magenta"
    assert palette.keyword == LITERATE_PALETTE.keyword


def test_unknown_override_role_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown palette role"):
        LITERATE_PALETTE.with_overrides({"strng": "green"})


@pytest.mark.parametrize("level", list(LogLevel))
def test_every_level_has_a_colour(level: LogLevel) -> None:
    for palette in PALETTES.values():
        assert palette.level_color(level)


def test_error_and_fatal_share_the_literate_colour() -> None:
    assert LITERATE_PALETTE.level_color(LogLevel.ERROR) == LITERATE_PALETTE.level_color(LogLevel.FATAL)
