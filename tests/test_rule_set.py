"""Tests for rule registration and level filtering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from epicstyle.functions import FunctionInfo
from epicstyle.rules import (
    RuleSet,
    build_rule_set,
    default_rule_set,
    list_rule_info,
)
from epicstyle.rules.base import Severity, Violation
from epicstyle.source import FileContext

ALL_CODES = [
    "C-L1",
    "C-L2",
    "C-L3",
    "C-L4",
    "C-V1",
    "C-O1",
    "C-O2",
    "C-F1",
    "C-F2",
    "C-F3",
    "C-C1",
    "C-C2",
    "C-G1",
    "C-F4",
    "C-L5",
]


def test_default_rule_set_order_and_levels() -> None:
    rule_set = default_rule_set()
    assert rule_set.codes == ALL_CODES
    assert [rule.code for rule in rule_set.rules_for_level(1)] == ALL_CODES[:10]
    assert [rule.code for rule in rule_set.rules_for_level(2)] == ALL_CODES


def test_default_rule_set_is_fresh_each_time() -> None:
    first = default_rule_set()
    second = default_rule_set()
    assert first is not second
    assert first.rules is not second.rules


def test_evaluate_filters_by_level_in_registration_order() -> None:
    rule_set = RuleSet()
    rule_set.register(_StaticRule(code="X-2", level=2))
    rule_set.register(_StaticRule(code="X-1", level=1))
    rule_set.register(_StaticRule(code="X-1", level=1))

    context = FileContext(filename="any.c", lines=("line",))
    assert [v.rule for v in rule_set.evaluate(context, [], 1)] == ["X-1", "X-1"]
    assert [v.rule for v in rule_set.evaluate(context, [], 2)] == ["X-2", "X-1", "X-1"]


def test_build_rule_set_enable_and_disable() -> None:
    enabled = build_rule_set(enabled_codes=["C-F3", "C-L1"])
    assert enabled.codes == ["C-L1", "C-F3"]

    disabled = build_rule_set(disabled_codes=["C-C1", "C-L3"])
    assert "C-C1" not in disabled.codes
    assert "C-L3" not in disabled.codes
    assert len(disabled.codes) == len(ALL_CODES) - 2


def test_build_rule_set_rejects_unknown_codes() -> None:
    with pytest.raises(ValueError, match="Unknown rule codes: C-Z9"):
        build_rule_set(disabled_codes=["C-Z9"])


def test_list_rule_info_metadata() -> None:
    info = list_rule_info(1)
    assert [item.code for item in info] == ALL_CODES[:10]
    first = info[0]
    assert first.name == "Line length"
    assert first.level == 1
    assert first.severity == "major"
    assert first.description

    assert len(list_rule_info()) == len(ALL_CODES)


@dataclass(slots=True)
class _StaticRule:
    code: str
    level: int
    name: str = "static"
    severity: Severity = Severity.MINOR
    description: str = "Always reports line 1."

    def check(
        self, context: FileContext, functions: Sequence[FunctionInfo]
    ) -> list[Violation]:
        _ = functions
        return [
            Violation(rule=self.code, message="static", line=1, severity=self.severity)
        ]
