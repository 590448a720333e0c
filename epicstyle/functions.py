"""Heuristic function boundary extraction.

This is line-local pattern matching over brace depth, not a C grammar:
multi-line parameter lists are not recognized, and a function whose closing
brace is never found is left out of ``extract_functions``. Its signature is
still reported by ``iter_signatures``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

CONTROL_KEYWORD_RE = re.compile(r"\b(?:if|while|for|switch)\b")
# Comments and preprocessor directives never start a function.
SKIPPED_PREFIXES = ("//", "/*", "#")


@dataclass(frozen=True, slots=True)
class Signature:
    """A line recognized as the start of a function definition."""

    name: str
    line: int
    param_count: int

    @property
    def is_main(self) -> bool:
        return self.name == "main"


@dataclass(frozen=True, slots=True)
class FunctionInfo:
    """An approximately detected function definition."""

    name: str
    start_line: int
    end_line: int
    param_count: int

    @property
    def length(self) -> int:
        return self.end_line - self.start_line + 1

    @property
    def is_main(self) -> bool:
        return self.name == "main"


def detect_signature(lines: Sequence[str], index: int) -> Signature | None:
    """Return the signature starting on ``lines[index]`` if the line looks like one."""
    line = lines[index]
    trimmed = line.strip()
    if trimmed.startswith(SKIPPED_PREFIXES):
        return None
    if CONTROL_KEYWORD_RE.search(trimmed):
        return None

    open_pos = trimmed.find("(")
    if open_pos < 0:
        return None
    close_pos = trimmed.find(")", open_pos + 1)
    if close_pos < 0:
        return None

    next_line = lines[index + 1] if index + 1 < len(lines) else ""
    if "{" not in trimmed and "{" not in next_line:
        return None

    head = trimmed[:open_pos].split()
    if not head:
        return None
    name = head[-1].lstrip("*")
    if not name:
        return None

    return Signature(
        name=name,
        line=index + 1,
        param_count=count_parameters(trimmed[open_pos + 1 : close_pos]),
    )


def count_parameters(params: str) -> int:
    """Count comma-separated parameter groups; empty or ``void`` is zero."""
    stripped = params.strip()
    if not stripped or stripped == "void":
        return 0
    return stripped.count(",") + 1


def iter_signatures(lines: Sequence[str]) -> Iterator[Signature]:
    """Yield every signature the extractor opens, including an unclosed last one."""
    for signature, _ in _scan(lines):
        yield signature


def iter_functions(lines: Sequence[str]) -> Iterator[FunctionInfo]:
    """Yield closed functions in source order."""
    for signature, end_line in _scan(lines):
        if end_line is None:
            continue
        yield FunctionInfo(
            name=signature.name,
            start_line=signature.line,
            end_line=end_line,
            param_count=signature.param_count,
        )


def extract_functions(lines: Sequence[str]) -> list[FunctionInfo]:
    """Return every closed function found in ``lines``."""
    return list(iter_functions(lines))


def line_depths(lines: Sequence[str]) -> list[int]:
    """Return the brace depth in effect at the start of each line."""
    depths: list[int] = []
    depth = 0
    for line in lines:
        depths.append(depth)
        depth += line.count("{") - line.count("}")
    return depths


def _scan(lines: Sequence[str]) -> Iterator[tuple[Signature, int | None]]:
    # One signature is open at a time; it closes when depth returns to 0.
    depth = 0
    current: Signature | None = None

    for index, line in enumerate(lines):
        if current is None:
            current = detect_signature(lines, index)

        depth += line.count("{") - line.count("}")

        if current is not None and depth == 0 and "}" in line:
            yield current, index + 1
            current = None

    if current is not None:
        yield current, None
