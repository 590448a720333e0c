"""Rules package."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from epicstyle.functions import FunctionInfo
from epicstyle.rules.base import Rule, Severity, Violation
from epicstyle.rules.comments import CommentFormatRule, FunctionCommentRule
from epicstyle.rules.declarations import (
    DeclarationPlacementRule,
    ForLoopDeclarationRule,
    GlobalConstRule,
    MultipleDeclarationRule,
)
from epicstyle.rules.function_size import (
    FunctionCountRule,
    FunctionLengthRule,
    FunctionParametersRule,
)
from epicstyle.rules.layout import EmptyLinesRule, IndentationRule, LineLengthRule
from epicstyle.rules.naming import FilenameRule, FunctionNamingRule, MacroNamingRule
from epicstyle.source import FileContext

BASIC_LEVEL = 1
ADVANCED_LEVEL = 2
LEVELS = (BASIC_LEVEL, ADVANCED_LEVEL)

__all__ = [
    "ADVANCED_LEVEL",
    "BASIC_LEVEL",
    "LEVELS",
    "Rule",
    "RuleInfo",
    "RuleSet",
    "Severity",
    "Violation",
    "build_rule_set",
    "default_rule_set",
    "list_rule_info",
]


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    code: str
    name: str
    description: str
    level: int
    severity: str


@dataclass(slots=True)
class RuleSet:
    """Ordered collection of rules evaluated against one file at a time."""

    rules: list[Rule] = field(default_factory=list)

    def register(self, rule: Rule) -> None:
        """Append a rule; codes are not de-duplicated."""
        self.rules.append(rule)

    def rules_for_level(self, level: int) -> list[Rule]:
        return [rule for rule in self.rules if rule.level <= level]

    def evaluate(
        self,
        context: FileContext,
        functions: Sequence[FunctionInfo],
        level: int,
    ) -> list[Violation]:
        """Run every rule at or below ``level`` in registration order."""
        violations: list[Violation] = []
        for rule in self.rules_for_level(level):
            violations.extend(rule.check(context, functions))
        return violations

    @property
    def codes(self) -> list[str]:
        return [rule.code for rule in self.rules]


_RULE_FACTORIES: tuple[Callable[[], Rule], ...] = (
    LineLengthRule,
    EmptyLinesRule,
    IndentationRule,
    MultipleDeclarationRule,
    DeclarationPlacementRule,
    FilenameRule,
    FunctionCountRule,
    FunctionNamingRule,
    MacroNamingRule,
    FunctionLengthRule,
    CommentFormatRule,
    FunctionCommentRule,
    GlobalConstRule,
    FunctionParametersRule,
    ForLoopDeclarationRule,
)


def default_rule_set() -> RuleSet:
    """Return a fresh rule set holding every known rule."""
    return build_rule_set()


def build_rule_set(
    *,
    enabled_codes: list[str] | None = None,
    disabled_codes: list[str] | None = None,
) -> RuleSet:
    """Build a rule set applying enable/disable filters by rule code."""
    rules = [factory() for factory in _RULE_FACTORIES]
    known = {rule.code for rule in rules}
    requested = set(enabled_codes or []) | set(disabled_codes or [])

    unknown = [code for code in requested if code not in known]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule codes: {joined}")

    enabled_set = set(enabled_codes) if enabled_codes is not None else known
    disabled_set = set(disabled_codes or [])

    rule_set = RuleSet()
    for rule in rules:
        if rule.code in enabled_set and rule.code not in disabled_set:
            rule_set.register(rule)
    return rule_set


def list_rule_info(level: int = ADVANCED_LEVEL) -> list[RuleInfo]:
    """Return metadata for all known rules at or below ``level``."""
    return [
        RuleInfo(
            code=rule.code,
            name=rule.name,
            description=rule.description,
            level=rule.level,
            severity=str(rule.severity),
        )
        for rule in default_rule_set().rules_for_level(level)
    ]
