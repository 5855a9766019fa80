"""Exception renderer: summary lines versus stack-frame lines.

Purpose
-------
Render the ``Exception`` output property line by line, dimming stack-frame
lines (those starting with :data:`STACK_FRAME_LINE_PREFIX`) so the summary
lines stand out.
"""

from __future__ import annotations

import re
from typing import Mapping

from lib_log_literate.application.ports.console import StyledWriterPort
from lib_log_literate.domain.palettes import LITERATE_PALETTE, Palette
from lib_log_literate.domain.rendering import STACK_FRAME_LINE_PREFIX, FormatProvider, render_property_token
from lib_log_literate.domain.templates import PropertyToken
from lib_log_literate.domain.values import PropertyValue

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def render_exception(
    writer: StyledWriterPort,
    token: PropertyToken,
    properties: Mapping[str, PropertyValue],
    *,
    palette: Palette = LITERATE_PALETTE,
    provider: FormatProvider | None = None,
) -> None:
    """Write the exception text for ``token``, one terminated line at a time."""

    buffer = render_property_token(token, properties, provider)
    lines = _LINE_BREAK_RE.split(buffer)
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        writer.set_foreground(palette.subtext if line.startswith(STACK_FRAME_LINE_PREFIX) else palette.text)
        writer.write(line)
        writer.write("\n")


__all__ = ["render_exception"]
