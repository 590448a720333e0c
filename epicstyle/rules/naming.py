"""Naming convention rules for files, functions and macros."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath

from epicstyle.functions import FunctionInfo
from epicstyle.rules.base import Severity, Violation
from epicstyle.rules.patterns import DEFINE_RE, is_screaming_snake_case, is_snake_case
from epicstyle.source import FileContext


class FilenameRule:
    """File names must be snake_case."""

    code = "C-O1"
    name = "Filename casing"
    level = 1
    severity = Severity.MAJOR
    description = "File names must be in snake_case."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        stem = PurePath(context.filename).stem
        if is_snake_case(stem):
            return []
        return [
            Violation(
                rule=self.code,
                message="Invalid filename format",
                line=0,
                severity=self.severity,
                description=f"File name '{stem}' must be in snake_case",
            )
        ]


class FunctionNamingRule:
    """Function names must be snake_case; ``main`` is exempt."""

    code = "C-F1"
    name = "Function naming"
    level = 1
    severity = Severity.MAJOR
    description = "Function names must be in snake_case."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message=f"Invalid function name '{function.name}'",
                line=function.start_line,
                severity=self.severity,
                description=f"Function '{function.name}' must be in snake_case",
            )
            for function in functions
            if not function.is_main and not is_snake_case(function.name)
        ]


class MacroNamingRule:
    """Macro names must be SCREAMING_SNAKE_CASE."""

    code = "C-F2"
    name = "Macro naming"
    level = 1
    severity = Severity.MAJOR
    description = "Macro names must be in SCREAMING_SNAKE_CASE."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        violations: list[Violation] = []
        for lineno, line in enumerate(context.lines, start=1):
            match = DEFINE_RE.match(line)
            if match is None:
                continue
            macro = match.group(1)
            if is_screaming_snake_case(macro):
                continue
            violations.append(
                Violation(
                    rule=self.code,
                    message=f"Invalid macro name '{macro}'",
                    line=lineno,
                    severity=self.severity,
                    description=f"Macro '{macro}' must be in SCREAMING_SNAKE_CASE",
                )
            )
        return violations
