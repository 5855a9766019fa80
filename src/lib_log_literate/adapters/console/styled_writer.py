"""Rich-powered styled writer implementing :class:`StyledWriterPort`.

Purpose
-------
Give the literate renderers a terminal abstraction with "current foreground",
"current background" and "reset" semantics while Rich takes care of colour
systems, ``NO_COLOR``/``FORCE_COLOR`` and non-terminal output.

Contents
--------
* :class:`RichStyledWriter` - writer over two Rich consoles (stdout, stderr).

System Role
-----------
Default writer owned by :class:`~lib_log_literate.adapters.console.literate_console.LiterateConsoleSink`.
Every write goes to the console file immediately. Rich renders the ANSI
codes of each styled segment, closing it with its own reset sequence, so the
terminal is never left coloured between segments. Text is written as given:
no tab expansion, wrapping or markup.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager, suppress

from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from lib_log_literate.application.ports.console import Stream, StyledWriterPort


class RichStyledWriter(StyledWriterPort):
    """Write coloured segments to one of two Rich consoles.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> writer = RichStyledWriter(stdout=Console(file=buffer, color_system=None))
    >>> with writer.session(Stream.PRIMARY) as out:
    ...     out.set_foreground("red")
    ...     out.write("boom")
    >>> buffer.getvalue()
    'boom'
    """

    def __init__(
        self,
        *,
        stdout: Console | None = None,
        stderr: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        """Configure the consoles; explicit consoles win over colour flags."""
        force_terminal = True if force_color else None
        self._consoles = {
            Stream.PRIMARY: stdout or Console(force_terminal=force_terminal, no_color=no_color, highlight=False),
            Stream.SECONDARY: stderr or Console(stderr=True, force_terminal=force_terminal, no_color=no_color, highlight=False),
        }
        self._active: Console | None = None
        self._foreground: str | None = None
        self._background: str | None = None

    def console(self, stream: Stream) -> Console:
        """Return the Rich console backing ``stream``."""

        return self._consoles[stream]

    @contextmanager
    def session(self, stream: Stream) -> Iterator["RichStyledWriter"]:
        """Route writes to ``stream``; the exit path always runs :meth:`reset`.

        When the body fails, a failing flush during the reset is ignored so the
        original error reaches the caller.
        """
        self._active = self._consoles[stream]
        try:
            yield self
        except BaseException:
            with suppress(OSError, ValueError):
                self.reset()
            raise
        else:
            self.reset()
        finally:
            self._active = None

    def set_foreground(self, color: str | None) -> None:
        self._foreground = color

    def set_background(self, color: str | None) -> None:
        self._background = color

    def write(self, text: str) -> None:
        if not text:
            return
        if self._active is None:
            raise RuntimeError("write() called outside of a writer session")
        console = self._active
        if (self._foreground or self._background) and not console.no_color:
            style = Style(color=self._foreground, bgcolor=self._background)
            text = style.render(
                text,
                color_system=COLOR_SYSTEMS.get(console.color_system or ""),
                legacy_windows=console.legacy_windows,
            )
        console.file.write(text)

    def reset(self) -> None:
        self._foreground = None
        self._background = None
        if self._active is not None:
            self._active.file.flush()


__all__ = ["RichStyledWriter"]
