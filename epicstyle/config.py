"""Configuration loading for epicstyle."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from epicstyle.rules import BASIC_LEVEL, LEVELS

CONFIG_FILENAMES = (".epicstyle.toml", "epicstyle.toml")
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_TABLE = "epicstyle"
OUTPUT_FORMATS = {"human", "json"}


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    level: int = BASIC_LEVEL
    format: str = "human"
    verbose: bool = False
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "format": self.format,
            "verbose": self.verbose,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "source": self.source,
        }


def load_app_config(directory: Path, config_path: Path | None = None) -> AppConfig:
    """Resolve configuration for ``directory``.

    An explicit ``config_path`` wins. Otherwise the first existing file among
    ``.epicstyle.toml``, ``epicstyle.toml`` and ``pyproject.toml`` is used; a
    pyproject without a ``[tool.epicstyle]`` table is skipped.
    """
    directory = directory.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (directory / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        return _from_mapping(_config_table(resolved) or {}, source=str(resolved))

    for filename in (*CONFIG_FILENAMES, PYPROJECT_FILENAME):
        candidate = directory / filename
        if not candidate.exists():
            continue
        table = _config_table(candidate)
        if table is not None:
            return _from_mapping(table, source=str(candidate))
    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            "# 1 = basic rules, 2 = basic + advanced rules",
            "level = 1",
            'format = "human"',
            "verbose = false",
            'include = ["src/**", "include/**"]',
            'exclude = ["tests/**"]',
            "",
            "[rules]",
            "# enable = [",
            '#   "C-L1", "C-L2", "C-L3", "C-L4", "C-V1", "C-O1", "C-O2", "C-F1",',
            '#   "C-F2", "C-F3", "C-C1", "C-C2", "C-G1", "C-F4", "C-L5",',
            "# ]",
            "disable = []",
            "",
        ]
    )


def _config_table(path: Path) -> dict[str, Any] | None:
    """Return the epicstyle settings held by ``path``.

    A ``[tool.epicstyle]`` table is preferred in any file. Dedicated files
    fall back to their top level; a ``pyproject.toml`` without it yields ``None``.
    """
    try:
        document = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc

    tool = document.get("tool")
    section = tool.get(TOOL_TABLE) if isinstance(tool, dict) else None
    if isinstance(section, dict):
        return section
    if path.name == PYPROJECT_FILENAME:
        return None
    return document


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in OUTPUT_FORMATS:
        format_value = "human"

    return AppConfig(
        level=_as_level(mapping.get("level", BASIC_LEVEL), "level"),
        format=format_value,
        verbose=_as_bool(mapping.get("verbose", False), "verbose"),
        include=_as_str_list(mapping.get("include"), "include"),
        exclude=_as_str_list(mapping.get("exclude"), "exclude"),
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
        rule_disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
        source=source,
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_level(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    if raw not in LEVELS:
        choices = ", ".join(str(item) for item in LEVELS)
        raise ValueError(f"{field_name} must be one of: {choices}")
    return raw


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw
