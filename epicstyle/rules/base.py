"""Base rule protocol and violation model."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from epicstyle.functions import FunctionInfo
from epicstyle.source import FileContext


class Severity(StrEnum):
    """Violation weight used by scoring."""

    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single norm violation emitted by a rule."""

    rule: str
    message: str
    line: int
    severity: Severity
    description: str = ""

    def __post_init__(self) -> None:
        if not self.rule:
            raise ValueError("Violation rule code must not be empty")
        if self.line < 0:
            raise ValueError(f"Violation line must be >= 0, got {self.line}")

    @property
    def is_file_level(self) -> bool:
        return self.line == 0

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "message": self.message,
            "line": self.line,
            "severity": str(self.severity),
            "description": self.description,
        }


class Rule(Protocol):
    """Protocol for stateless norm rules."""

    code: str
    name: str
    level: int
    severity: Severity
    description: str

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        """Inspect one file and return its violations."""
