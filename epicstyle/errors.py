"""Error kinds raised by the analysis engine."""

from __future__ import annotations


class EpicStyleError(Exception):
    """Base class for epicstyle errors."""


class TargetNotFoundError(EpicStyleError):
    """Raised when the analysis target path does not exist."""


class UnsupportedTargetError(EpicStyleError):
    """Raised when a single-file target is not a C source or header."""


class SourceReadError(EpicStyleError, OSError):
    """Raised when a source file cannot be opened or read."""
