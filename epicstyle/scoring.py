"""Per-file scoring and global aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from epicstyle.rules.base import Severity, Violation

MAX_SCORE = 100.0
SEVERITY_PENALTIES = {
    Severity.MAJOR: 5.0,
    Severity.MINOR: 2.0,
}


@dataclass(slots=True)
class FileResult:
    """Analysis outcome for a single file."""

    filename: str
    violations: list[Violation] = field(default_factory=list)
    score: float = MAX_SCORE
    line_count: int = 0
    path: str = ""

    @property
    def is_clean(self) -> bool:
        return not self.violations

    def violations_by_rule(self) -> dict[str, list[Violation]]:
        """Group violations by rule code, keeping first-seen order."""
        grouped: dict[str, list[Violation]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.rule, []).append(violation)
        return grouped


@dataclass(slots=True)
class SkippedFile:
    """A discovered file that could not be read."""

    path: str
    reason: str


@dataclass(slots=True)
class Report:
    """Aggregate results for one analysis run."""

    files: list[FileResult] = field(default_factory=list)
    total_score: float = 0.0
    total_files: int = 0
    total_lines: int = 0
    total_violations: int = 0
    clean_files: int = 0
    skipped: list[SkippedFile] = field(default_factory=list)

    @property
    def has_violations(self) -> bool:
        return self.total_violations > 0


def score_violations(violations: Iterable[Violation]) -> float:
    """Start at 100, subtract a fixed penalty per violation, clamp to [0, 100]."""
    score = MAX_SCORE
    for violation in violations:
        score -= SEVERITY_PENALTIES[Severity(violation.severity)]
    return _clamp(score)


def calculate_global_results(
    results: Sequence[FileResult],
    *,
    skipped: Sequence[SkippedFile] = (),
) -> Report:
    """Reduce per-file results into global totals."""
    files = list(results)
    total_score = sum(item.score for item in files) / len(files) if files else 0.0
    return Report(
        files=files,
        total_score=total_score,
        total_files=len(files),
        total_lines=sum(item.line_count for item in files),
        total_violations=sum(len(item.violations) for item in files),
        clean_files=sum(1 for item in files if item.is_clean),
        skipped=list(skipped),
    )


def _clamp(value: float, lower: float = 0.0, upper: float = MAX_SCORE) -> float:
    return max(lower, min(upper, value))
