"""Distribution metadata and the ``info`` banner.

Values are read from the installed distribution when available so the banner
always matches ``pyproject.toml``; the constants below are used when running
from a source checkout without installation.
"""

from __future__ import annotations

from importlib import metadata as _metadata
from typing import Callable

name = "lib_log_literate"
title = "Literate console sink: colourised, pretty-printed structured log events"
shell_command = "lib_log_literate"

_FALLBACK_VERSION = "0.1.0"
_FALLBACK_HOMEPAGE = "https://github.com/bitranox/lib_log_literate"
_FALLBACK_AUTHOR = "bitranox"
_FALLBACK_AUTHOR_EMAIL = "bitranox@gmail.com"


def _distribution_meta() -> _metadata.PackageMetadata | None:
    try:
        return _metadata.metadata(name)
    except _metadata.PackageNotFoundError:
        return None


def _meta_value(key: str, fallback: str) -> str:
    meta = _distribution_meta()
    if meta is None:
        return fallback
    return meta.get(key) or fallback


def _homepage() -> str:
    meta = _distribution_meta()
    if meta is not None:
        for entry in meta.get_all("Project-URL") or []:
            label, _, url = entry.partition(",")
            if label.strip().lower() == "homepage" and url.strip():
                return url.strip()
    return _FALLBACK_HOMEPAGE


version = _meta_value("Version", _FALLBACK_VERSION)
homepage = _homepage()
author = _FALLBACK_AUTHOR
author_email = _FALLBACK_AUTHOR_EMAIL


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Print the metadata banner, or hand it to ``writer``.

    Examples
    --------
    >>> chunks = []
    >>> print_info(writer=chunks.append)
    >>> "Info for lib_log_literate:" in "".join(chunks)
    True
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


__all__ = ["author", "author_email", "homepage", "name", "print_info", "shell_command", "title", "version"]
