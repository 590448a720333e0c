"""CLI entrypoint for epicstyle."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from epicstyle import __version__
from epicstyle.analyzer import Analyzer
from epicstyle.config import AppConfig, default_config_template, load_app_config
from epicstyle.errors import EpicStyleError
from epicstyle.output import render_human, render_json
from epicstyle.rules import LEVELS, RuleSet, build_rule_set, list_rule_info
from epicstyle.scoring import Report

app = typer.Typer(
    name="epicstyle",
    no_args_is_help=True,
    help="Check C sources against the Epitech coding norm.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version


@app.command("check")
def check_command(
    target: Annotated[
        Path | None, typer.Argument(help="C file or directory to analyze.", show_default=False)
    ] = None,
    path: Annotated[Path | None, typer.Option("--path", help="C file or directory.")] = None,
    level: Annotated[
        int | None, typer.Option(help="Verification level: 1=basic, 2=advanced.")
    ] = None,
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", help="Shortcut for --format json.")
    ] = False,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--no-verbose", help="List every violation grouped by rule."),
    ] = None,
    silent: Annotated[
        bool, typer.Option("--silent", help="Print nothing; only set the exit code.")
    ] = False,
    include: Annotated[list[str] | None, typer.Option(help="Include glob pattern.")] = None,
    exclude: Annotated[list[str] | None, typer.Option(help="Exclude glob pattern.")] = None,
    root: Annotated[Path, typer.Option(help="Directory holding the config file.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Analyze C files and report norm violations.

    Exits with code 1 when any violation is found or the target is invalid.
    """
    app_config = _load_config_or_raise(root, config_file)
    resolved_target = target or path
    if resolved_target is None:
        raise typer.BadParameter("Provide a file or directory to analyze.", param_hint="PATH")

    output_format = "json" if json_output else (format or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    resolved_level = level if level is not None else app_config.level
    _validate_level(resolved_level)
    resolved_verbose = verbose if verbose is not None else app_config.verbose

    analyzer = Analyzer(_build_configured_rules_or_raise(app_config), level=resolved_level)
    try:
        report = analyzer.analyze_path(
            resolved_target,
            include=include if include is not None else app_config.include,
            exclude=exclude if exclude is not None else app_config.exclude,
        )
    except EpicStyleError as exc:
        if not silent:
            typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not silent:
        _echo_skipped(report)
        if output_format == "json":
            typer.echo(render_json(report, target=str(resolved_target), level=resolved_level))
        else:
            typer.echo(render_human(report, verbose=resolved_verbose))

    if report.has_violations:
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    level: Annotated[int, typer.Option(help="Show rules up to this level.")] = max(LEVELS),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    root: Annotated[Path, typer.Option(help="Directory holding the config file.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available norm rules."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    _validate_level(level)

    app_config = _load_config_or_raise(root, config_file)
    active_codes = set(_build_configured_rules_or_raise(app_config).codes)
    rule_info = list_rule_info(level)

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "code": item.code,
                    "name": item.name,
                    "description": item.description,
                    "level": item.level,
                    "severity": item.severity,
                    "enabled": item.code in active_codes,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source, "level": level},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.code in active_codes else "disabled"
        lines.append(
            f"- {item.code} [level {item.level}, {item.severity}, {status}] "
            f"{item.name}: {item.description}"
        )
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    root: Annotated[Path, typer.Option(help="Directory holding the config file.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(root, config_file)
    payload = app_config.to_dict()
    payload["active_rules"] = _build_configured_rules_or_raise(app_config).codes

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- level: {payload['level']}",
        f"- format: {payload['format']}",
        f"- verbose: {payload['verbose']}",
        f"- include: {payload['include']}",
        f"- exclude: {payload['exclude']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- active_rules: {payload['active_rules']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".epicstyle.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    root: Annotated[Path, typer.Option(help="Directory holding the config file.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".epicstyle.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report active rules."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(root, config_file)
    payload = {
        "ok": True,
        "source": app_config.source,
        "active_rules": _build_configured_rules_or_raise(app_config).codes,
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- active_rules: {payload['active_rules']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _load_config_or_raise(root: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(root, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> RuleSet:
    try:
        return build_rule_set(
            enabled_codes=app_config.rule_enable,
            disabled_codes=app_config.rule_disable,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _validate_level(level: int) -> None:
    if level not in LEVELS:
        choices = ", ".join(str(item) for item in LEVELS)
        raise typer.BadParameter(f"level must be one of: {choices}", param_hint="--level")


def _echo_skipped(report: Report) -> None:
    for item in report.skipped:
        typer.echo(f"warning: skipped {item.path}: {item.reason}", err=True)
