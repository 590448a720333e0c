"""Analysis orchestration."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from epicstyle.errors import SourceReadError, TargetNotFoundError, UnsupportedTargetError
from epicstyle.functions import extract_functions
from epicstyle.rules import BASIC_LEVEL, LEVELS, RuleSet, default_rule_set
from epicstyle.scoring import (
    FileResult,
    Report,
    SkippedFile,
    calculate_global_results,
    score_violations,
)
from epicstyle.source import C_SUFFIXES, FileContext, is_c_file, read_source_file

logger = logging.getLogger(__name__)


class Analyzer:
    """Runs a rule set over C files and scores the outcome."""

    def __init__(self, rule_set: RuleSet | None = None, *, level: int = BASIC_LEVEL) -> None:
        if level not in LEVELS:
            choices = ", ".join(str(item) for item in LEVELS)
            raise ValueError(f"level must be one of: {choices}, got {level}")
        self.rule_set = rule_set if rule_set is not None else default_rule_set()
        self.level = level

    def analyze_context(self, context: FileContext, level: int | None = None) -> FileResult:
        """Score an already loaded file."""
        functions = extract_functions(context.lines)
        violations = self.rule_set.evaluate(context, functions, self._level(level))
        return FileResult(
            filename=Path(context.filename).name,
            violations=violations,
            score=score_violations(violations),
            line_count=context.line_count,
            path=context.filename,
        )

    def analyze_file(self, path: str | Path, level: int | None = None) -> FileResult:
        """Read and score one file.

        Raises ``SourceReadError`` when the file cannot be read.
        """
        return self.analyze_context(read_source_file(path), level)

    def analyze_files(
        self, paths: Iterable[str | Path], level: int | None = None
    ) -> Report:
        """Score each path, skipping unreadable files, and aggregate."""
        results: list[FileResult] = []
        skipped: list[SkippedFile] = []
        for path in paths:
            try:
                results.append(self.analyze_file(path, level))
            except SourceReadError as exc:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
                skipped.append(SkippedFile(path=str(path), reason=str(exc)))
        return calculate_global_results(results, skipped=skipped)

    def analyze_path(
        self,
        path: str | Path,
        level: int | None = None,
        *,
        include: list[str] | None = None,
        exclude: list[str] | None = None,
    ) -> Report:
        """Resolve a file or directory target and analyze every C file in it."""
        files = discover_files(path, include=include, exclude=exclude)
        logger.debug("Discovered %d C files under %s", len(files), path)
        return self.analyze_files(files, level)

    def _level(self, level: int | None) -> int:
        return self.level if level is None else level


def discover_files(
    path: str | Path,
    *,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[Path]:
    """Return C sources and headers for a file or directory target.

    Directory walks are sorted so that results come back in a stable order.
    Glob filters match paths relative to the target directory.
    """
    target = Path(path)
    if not target.exists():
        raise TargetNotFoundError(f"Path does not exist: {target}")

    if not target.is_dir():
        if not is_c_file(target):
            suffixes = ", ".join(C_SUFFIXES)
            raise UnsupportedTargetError(f"File must have one of the extensions: {suffixes}")
        return [target]

    found: list[Path] = []
    for root, dirnames, filenames in os.walk(target):
        dirnames.sort()
        for filename in sorted(filenames):
            candidate = Path(root) / filename
            if not is_c_file(candidate):
                continue
            relative = candidate.relative_to(target).as_posix()
            if _matches_filters(relative, includes=include or [], excludes=exclude or []):
                found.append(candidate)
    return found


def _matches_filters(path: str, *, includes: list[str], excludes: list[str]) -> bool:
    if includes and not any(fnmatch.fnmatch(path, pattern) for pattern in includes):
        return False
    if excludes and any(fnmatch.fnmatch(path, pattern) for pattern in excludes):
        return False
    return True
