"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from epicstyle import __version__
from epicstyle.rules.base import Severity, Violation
from epicstyle.scoring import FileResult, Report

BAR_WIDTH = 50
SEVERITY_MARKERS = {
    Severity.MAJOR: ("MAJOR", "red"),
    Severity.MINOR: ("minor", "yellow"),
}


def render_human(report: Report, *, verbose: bool = False) -> str:
    """Render a colorized summary with per-file details."""
    lines: list[str] = [click.style("EpicStyle analysis report", bold=True), ""]

    lines.append(click.style("Summary:", bold=True))
    lines.append(f"- files analyzed: {report.total_files}")
    lines.append(f"- lines of code: {report.total_lines}")
    lines.append(f"- total violations: {report.total_violations}")
    lines.append(f"- clean files: {report.clean_files}/{report.total_files}")
    cleanliness = (
        report.clean_files / report.total_files * 100.0 if report.total_files else 0.0
    )
    lines.append(f"- cleanliness: {progress_bar(cleanliness)}")

    if report.files:
        lines.append("")
        lines.append(click.style("Files:", bold=True))
        # Best score first; ties keep discovery order.
        for file_result in sorted(report.files, key=lambda item: item.score, reverse=True):
            lines.extend(_render_file(file_result, verbose=verbose))

    label, color = score_band(report.total_score)
    lines.append("")
    lines.append(click.style(f"Global score: {report.total_score:.1f}%", fg=color, bold=True))
    lines.append(progress_bar(report.total_score))
    lines.append(click.style(label, fg=color))
    return "\n".join(lines)


def _render_file(file_result: FileResult, *, verbose: bool) -> list[str]:
    if file_result.is_clean:
        return [
            click.style("OK  ", fg="green")
            + f"{file_result.filename} ({file_result.score:.1f}% - "
            f"{file_result.line_count} lines)"
        ]

    lines = [
        click.style("FAIL", fg="red")
        + f" {file_result.filename} ({file_result.score:.1f}% - "
        f"{file_result.line_count} lines - {len(file_result.violations)} violations)"
    ]
    if not verbose:
        return lines

    for rule, violations in file_result.violations_by_rule().items():
        lines.append(f"   {rule} ({len(violations)} violations)")
        for violation in violations:
            lines.append(
                f"      {_severity_marker(violation)} {_location(violation)}: "
                f"{violation.message}"
            )
            if violation.description:
                lines.append(f"         {violation.description}")
    return lines


def _severity_marker(violation: Violation) -> str:
    label, color = SEVERITY_MARKERS[Severity(violation.severity)]
    return click.style(f"[{label}]", fg=color)


def _location(violation: Violation) -> str:
    if violation.is_file_level:
        return "file"
    return f"line {violation.line}"


def progress_bar(percentage: float, width: int = BAR_WIDTH) -> str:
    """Return a text bar such as ``[#####-----] 50.0%``."""
    bounded = max(0.0, min(100.0, percentage))
    filled = int(bounded * width / 100)
    return "[" + "#" * filled + "-" * (width - filled) + f"] {bounded:.1f}%"


def score_band(score: float) -> tuple[str, str]:
    if score >= 95:
        return ("EXCELLENT! Code fully conforms to the norm.", "green")
    if score >= 85:
        return ("VERY GOOD! A few details left to fix.", "green")
    if score >= 70:
        return ("GOOD. Keep improving.", "yellow")
    if score >= 50:
        return ("AVERAGE. Several points need work.", "yellow")
    return ("INSUFFICIENT. A major revision is needed.", "red")


def render_json(report: Report, *, target: str, level: int) -> str:
    """Render stable JSON output for CI and automation."""
    payload = build_json_payload(report, target=target, level=level)
    return json.dumps(payload, indent=2, sort_keys=True)


def build_json_payload(report: Report, *, target: str, level: int) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    meta: dict[str, Any] = {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "level": level,
        "target": target,
        "version": __version__,
        "skipped": [{"path": item.path, "reason": item.reason} for item in report.skipped],
    }
    return {
        "files": [_serialize_file(item) for item in report.files],
        "total_score": report.total_score,
        "total_files": report.total_files,
        "total_lines": report.total_lines,
        "total_violations": report.total_violations,
        "clean_files": report.clean_files,
        "meta": meta,
    }


def _serialize_file(file_result: FileResult) -> dict[str, Any]:
    return {
        "filename": file_result.filename,
        "violations": [item.to_dict() for item in file_result.violations],
        "score": file_result.score,
        "line_count": file_result.line_count,
    }
