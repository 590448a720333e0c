"""Variable declaration rules."""

from __future__ import annotations

from collections.abc import Sequence

from epicstyle.functions import FunctionInfo, line_depths
from epicstyle.rules.base import Severity, Violation
from epicstyle.rules.patterns import (
    CONST_RE,
    DECLARATION_RE,
    FOR_DECLARATION_RE,
    GLOBAL_DECLARATION_RE,
    MULTI_DECLARATION_RE,
)
from epicstyle.source import FileContext

BRACE_LINES = {"{", "}"}
COMMENT_OPENERS = ("/*", "//")


class MultipleDeclarationRule:
    """Only one variable may be declared per line."""

    code = "C-L4"
    name = "Multiple variable declaration"
    level = 1
    severity = Severity.MAJOR
    description = "Declare one variable per line."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Multiple variable declaration",
                line=lineno,
                severity=self.severity,
                description="Declare only one variable per line",
            )
            for lineno, line in enumerate(context.lines, start=1)
            if MULTI_DECLARATION_RE.match(line)
        ]


class DeclarationPlacementRule:
    """Variables must be declared at the top of a function body."""

    code = "C-V1"
    name = "Variable declaration placement"
    level = 1
    severity = Severity.MAJOR
    description = "Declare variables at the beginning of the function."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        violations: list[Violation] = []
        lines = context.lines
        for function in functions:
            seen_statement = False
            # Body runs from the line after the signature to the closing brace.
            last_line = min(function.end_line, len(lines))
            for lineno in range(function.start_line + 1, last_line + 1):
                line = lines[lineno - 1]
                trimmed = line.strip()
                if not trimmed or trimmed.startswith(COMMENT_OPENERS):
                    continue
                if DECLARATION_RE.match(line):
                    if seen_statement:
                        violations.append(
                            Violation(
                                rule=self.code,
                                message="Variable declared after executable code",
                                line=lineno,
                                severity=self.severity,
                                description=(
                                    f"In function '{function.name}', declarations must "
                                    "come first"
                                ),
                            )
                        )
                elif trimmed not in BRACE_LINES:
                    seen_statement = True
        return violations


class GlobalConstRule:
    """Global variables must be const."""

    code = "C-G1"
    name = "Global variable constness"
    level = 2
    severity = Severity.MAJOR
    description = "Global variables must be declared const."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        inside: set[int] = set()
        for function in functions:
            inside.update(range(function.start_line, function.end_line + 1))

        violations: list[Violation] = []
        depths = line_depths(context.lines)
        for lineno, line in enumerate(context.lines, start=1):
            if depths[lineno - 1] != 0 or lineno in inside:
                continue
            if GLOBAL_DECLARATION_RE.match(line) and not CONST_RE.search(line):
                violations.append(
                    Violation(
                        rule=self.code,
                        message="Non-const global variable",
                        line=lineno,
                        severity=self.severity,
                        description="Global variables must be const",
                    )
                )
        return violations


class ForLoopDeclarationRule:
    """Loop counters must not be declared in a for header."""

    code = "C-L5"
    name = "For-loop declaration"
    level = 2
    severity = Severity.MAJOR
    description = "Do not declare variables inside a for loop header."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Variable declaration in for loop",
                line=lineno,
                severity=self.severity,
                description="Declare loop variables before the loop",
            )
            for lineno, line in enumerate(context.lines, start=1)
            if FOR_DECLARATION_RE.search(line)
        ]
