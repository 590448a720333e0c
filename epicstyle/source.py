"""Source file primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from epicstyle.errors import SourceReadError

SOURCE_SUFFIX = ".c"
HEADER_SUFFIX = ".h"
C_SUFFIXES = (SOURCE_SUFFIX, HEADER_SUFFIX)


@dataclass(frozen=True, slots=True)
class FileContext:
    """Read-only view of one C file handed to every rule."""

    filename: str
    lines: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_header(self) -> bool:
        return self.filename.endswith(HEADER_SUFFIX)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @classmethod
    def from_text(cls, filename: str, text: str) -> FileContext:
        """Build a context from raw file content."""
        return cls(filename=filename, lines=tuple(split_lines(text)))


def split_lines(text: str) -> list[str]:
    """Split content on line terminators, dropping the final empty remainder."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_c_file(path: str | Path) -> bool:
    """Return True for paths with a C source or header extension."""
    return Path(path).suffix in C_SUFFIXES


def read_source_file(path: str | Path) -> FileContext:
    """Read a file from disk into a FileContext.

    Undecodable bytes are replaced rather than rejected so that a stray
    Latin-1 comment never prevents analysis.
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(f"cannot read {path}: {exc.strerror or exc}") from exc
    return FileContext.from_text(str(path), text)
