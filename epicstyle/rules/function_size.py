"""Function size rules: count per file, length and arity."""

from __future__ import annotations

from collections.abc import Sequence

from epicstyle.functions import FunctionInfo, iter_signatures
from epicstyle.rules.base import Severity, Violation
from epicstyle.source import FileContext

MAX_FUNCTIONS = 3
MAX_FUNCTION_LINES = 25
MAX_PARAMETERS = 4


class FunctionCountRule:
    """A file may hold at most three functions besides ``main``."""

    code = "C-O2"
    name = "Function count"
    level = 1
    severity = Severity.MAJOR
    description = "At most 3 functions per file, main excluded."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        # Unclosed functions still count; only their signature line is needed.
        count = sum(1 for signature in iter_signatures(context.lines) if not signature.is_main)
        if count <= MAX_FUNCTIONS:
            return []
        return [
            Violation(
                rule=self.code,
                message="Too many functions",
                line=0,
                severity=self.severity,
                description=(
                    f"File contains {count} functions (max {MAX_FUNCTIONS} excluding main)"
                ),
            )
        ]


class FunctionLengthRule:
    """A function body must not exceed 25 lines."""

    code = "C-F3"
    name = "Function length"
    level = 1
    severity = Severity.MAJOR
    description = "A function must not exceed 25 lines."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Function too long",
                line=function.start_line,
                severity=self.severity,
                description=(
                    f"Function '{function.name}' has {function.length} lines "
                    f"(max {MAX_FUNCTION_LINES})"
                ),
            )
            for function in functions
            if function.length > MAX_FUNCTION_LINES
        ]


class FunctionParametersRule:
    """A function takes at most four parameters."""

    code = "C-F4"
    name = "Function parameters"
    level = 2
    severity = Severity.MAJOR
    description = "A function must not take more than 4 parameters."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        return [
            Violation(
                rule=self.code,
                message="Too many parameters",
                line=function.start_line,
                severity=self.severity,
                description=(
                    f"Function '{function.name}' has {function.param_count} parameters "
                    f"(max {MAX_PARAMETERS})"
                ),
            )
            for function in functions
            if function.param_count > MAX_PARAMETERS
        ]
