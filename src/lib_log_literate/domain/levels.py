"""Log level abstraction mirroring the six literate-console severities.

Purpose
-------
Offer a domain-specific representation of log severities that keeps the
ordering used for stream routing and minimum-level gating, while still
converting to and from the stdlib :mod:`logging` numbers.

Contents
--------
* :class:`LogLevel` enum with conversion helpers.
* :func:`severity_rank` - ordering key for known and unknown severities.

System Role
-----------
Used by the application layer to gate events by minimum level and by the
console adapters to pick level codes, colours, and the output stream.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels used throughout the system."""

    VERBOSE = 5
    DEBUG = 10
    INFORMATION = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    def to_python_level(self) -> int:
        """Return the :mod:`logging` number matching this level.

        ``VERBOSE`` has no stdlib counterpart and maps to ``5``; ``FATAL``
        maps to :data:`logging.CRITICAL`.
        """

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a case-insensitive level name, accepting common aliases.

        Examples
        --------
        >>> LogLevel.from_name("warn") is LogLevel.WARNING
        True
        >>> LogLevel.from_name(" Info ") is LogLevel.INFORMATION
        True
        """
        normalized = name.strip().upper()
        normalized = _NAME_ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value equals ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging number into the nearest lower :class:`LogLevel`.

        Custom stdlib levels (for example ``25``) resolve to the closest
        defined severity below them; anything under ``DEBUG`` is ``VERBOSE``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.CRITICAL) is LogLevel.FATAL
        True
        >>> LogLevel.from_python_level(25) is LogLevel.INFORMATION
        True
        """
        resolved = cls.VERBOSE
        for member, python_level in _PYTHON_LEVELS.items():
            if python_level <= level:
                resolved = member
        return resolved


def severity_rank(level: LogLevel | int) -> int:
    """Return the ordering key of ``level``.

    Raw integers are accepted so severities outside the enum (for example a
    value handed over by a foreign logging bridge) still compare sensibly
    against configured thresholds. Anything else ranks as ``WARNING``, the
    same treatment unknown severities get when they are rendered.

    Examples
    --------
    >>> severity_rank(LogLevel.WARNING)
    30
    >>> severity_rank(35)
    35
    >>> severity_rank("Custom")
    30
    """
    if isinstance(level, LogLevel):
        return level.value
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    return LogLevel.WARNING.value


_PYTHON_LEVELS = {
    LogLevel.VERBOSE: 5,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFORMATION: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}

_NAME_ALIASES = {
    "TRACE": "VERBOSE",
    "INFO": "INFORMATION",
    "WARN": "WARNING",
    "CRITICAL": "FATAL",
}


__all__ = ["LogLevel", "severity_rank"]
