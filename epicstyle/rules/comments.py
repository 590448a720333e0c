"""Comment rules."""

from __future__ import annotations

from collections.abc import Sequence

from epicstyle.functions import FunctionInfo
from epicstyle.rules.base import Severity, Violation
from epicstyle.source import FileContext


class CommentFormatRule:
    """Only ``/* */`` comments are allowed.

    Any ``//`` on a line is flagged, including inside string literals such as
    URLs.
    """

    code = "C-C1"
    name = "Comment format"
    level = 2
    severity = Severity.MINOR
    description = "Use /* */ comments only."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Invalid comment format",
                line=lineno,
                severity=self.severity,
                description="Use /* */ comments, not //",
            )
            for lineno, line in enumerate(context.lines, start=1)
            if "//" in line
        ]


class FunctionCommentRule:
    """Every function except ``main`` needs a block comment right above it.

    Only a previous line opening with ``/*`` counts, so the closing line of a
    multi-line block or a trailing comment after code does not.
    """

    code = "C-C2"
    name = "Function comment"
    level = 2
    severity = Severity.MINOR
    description = "Functions other than main must be preceded by a block comment."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        violations: list[Violation] = []
        for function in functions:
            if function.is_main or _has_comment_above(context.lines, function.start_line):
                continue
            violations.append(
                Violation(
                    rule=self.code,
                    message="Missing function comment",
                    line=function.start_line,
                    severity=self.severity,
                    description=f"Function '{function.name}' must be preceded by a comment",
                )
            )
        return violations


def _has_comment_above(lines: Sequence[str], start_line: int) -> bool:
    if start_line < 2:
        return False
    return lines[start_line - 2].strip().startswith("/*")
