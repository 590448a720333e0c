"""Shared line heuristics used by several rules."""

from __future__ import annotations

import re

PRIMITIVE_TYPES = ("int", "char", "float", "double", "long", "short", "unsigned")
_TYPES = "|".join(PRIMITIVE_TYPES)

DECLARATION_RE = re.compile(rf"^\s*(?:{_TYPES})\s+\**\w+")
MULTI_DECLARATION_RE = re.compile(rf"^\s*(?:(?:{_TYPES})\s+)+\**\w+\s*,\s*\**\w+")
GLOBAL_DECLARATION_RE = re.compile(
    r"^\s*(?:(?:static|extern|const|volatile)\s+)*"
    rf"(?:(?:{_TYPES})\s+)+\**\w+\s*(?:\[[^\]]*\]\s*)?[=;]"
)
FOR_DECLARATION_RE = re.compile(rf"\bfor\s*\(\s*(?:{_TYPES})\s+\w+")
DEFINE_RE = re.compile(r"^\s*#\s*define\s+(\w+)")
CONST_RE = re.compile(r"\bconst\b")


def is_blank(line: str) -> bool:
    return line.strip() == ""


def is_snake_case(value: str) -> bool:
    """Lowercase letters, digits and underscores, no edge underscore."""
    if not value:
        return False
    if value.startswith("_") or value.endswith("_"):
        return False
    return value.isascii() and all(
        char.islower() or char.isdigit() or char == "_" for char in value
    )


def is_screaming_snake_case(value: str) -> bool:
    """Uppercase letters, digits and underscores, no edge underscore."""
    if not value:
        return False
    if value.startswith("_") or value.endswith("_"):
        return False
    return value.isascii() and all(
        char.isupper() or char.isdigit() or char == "_" for char in value
    )
