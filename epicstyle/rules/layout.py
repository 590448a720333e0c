"""Line layout rules: length, blank lines and indentation."""

from __future__ import annotations

from collections.abc import Sequence

from epicstyle.functions import FunctionInfo
from epicstyle.rules.base import Severity, Violation
from epicstyle.rules.patterns import is_blank
from epicstyle.source import FileContext

MAX_LINE_LENGTH = 80
SPACE_INDENT = "    "


class LineLengthRule:
    """A line must not exceed 80 characters."""

    code = "C-L1"
    name = "Line length"
    level = 1
    severity = Severity.MAJOR
    description = "A line must not exceed 80 characters."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        violations: list[Violation] = []
        for lineno, line in enumerate(context.lines, start=1):
            # Raw length: tabs count as one character.
            if len(line) > MAX_LINE_LENGTH:
                violations.append(
                    Violation(
                        rule=self.code,
                        message="Line too long",
                        line=lineno,
                        severity=self.severity,
                        description=(
                            f"Line contains {len(line)} characters (max {MAX_LINE_LENGTH})"
                        ),
                    )
                )
        return violations


class EmptyLinesRule:
    """No blank line at the start or end of a file, and no consecutive blank lines.

    A file made of one blank line gets a single violation, at line 1, rather
    than one for the first line and another for the last.
    """

    code = "C-L2"
    name = "Empty lines"
    level = 1
    severity = Severity.MINOR
    description = "No blank line at the start or end of a file, nor two in a row."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        lines = context.lines
        violations: list[Violation] = []
        if not lines:
            return violations

        if is_blank(lines[0]):
            violations.append(
                self._violation(
                    1, "Empty line at beginning of file", "File starts with a blank line"
                )
            )

        # A single blank line is already reported as the first line.
        if len(lines) > 1 and is_blank(lines[-1]):
            violations.append(
                self._violation(
                    len(lines), "Empty line at end of file", "File ends with a blank line"
                )
            )

        for index in range(1, len(lines)):
            if is_blank(lines[index]) and is_blank(lines[index - 1]):
                violations.append(
                    self._violation(
                        index + 1,
                        "Consecutive empty lines",
                        "Multiple consecutive blank lines are forbidden",
                    )
                )
        return violations

    def _violation(self, line: int, message: str, description: str) -> Violation:
        return Violation(
            rule=self.code,
            message=message,
            line=line,
            severity=self.severity,
            description=description,
        )


class IndentationRule:
    """Indentation must use tabs; four consecutive spaces are flagged."""

    code = "C-L3"
    name = "Indentation"
    level = 1
    severity = Severity.MAJOR
    description = "Indent with tabs only."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Space indentation",
                line=lineno,
                severity=self.severity,
                description="Use tabs for indentation, not spaces",
            )
            for lineno, line in enumerate(context.lines, start=1)
            if SPACE_INDENT in line
        ]
