"""CLI entrypoint for drift-audit."""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from drift_audit import __version__
from drift_audit.checks import build_checks, list_check_info
from drift_audit.checks.base import Check
from drift_audit.config import AppConfig, load_app_config
from drift_audit.engine import run_audit
from drift_audit.output import has_errors, render_human, render_json

app = typer.Typer(
    name="drift",
    help=(
        "Repo drift auditor - checks for stale configs, version mismatches, "
        "dead code markers, and CI/local drift."
    ),
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log check progress to stderr."),
    ] = False,
) -> None:
    """Audit the current directory when no command is given."""
    _ = version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
    if ctx.invoked_subcommand is None:
        _audit(Path("."), json_output=False, format=None, config_file=None)


@app.command("audit")
def audit_command(
    path: Annotated[Path, typer.Argument(help="Directory to audit.")] = Path("."),
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output results as JSON.")
    ] = False,
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Config TOML path, relative to the audited directory."),
    ] = None,
) -> None:
    """Audit a directory for drift and report findings."""
    _audit(path, json_output=json_output, format=format, config_file=config_file)


@app.command("checks")
def checks_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List available drift checks."""
    output_format = _resolve_format(format, AppConfig())
    app_config = _load_config_or_raise(repo, config_file)
    active_ids = {check.check_id for check in _build_configured_checks_or_raise(app_config)}
    check_info = list_check_info()

    if output_format == "json":
        payload = {
            "checks": [
                {
                    "check_id": item.check_id,
                    "name": item.name,
                    "description": item.description,
                    "severities": list(item.severities),
                    "default_enabled": item.default_enabled,
                    "enabled": item.check_id in active_ids,
                }
                for item in check_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available checks:"]
    for item in check_info:
        status = "enabled" if item.check_id in active_ids else "disabled"
        severities = ", ".join(item.severities)
        lines.append(
            f"- {item.check_id} [{status}] {item.name} ({severities}) - {item.description}"
        )
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = _resolve_format(format, AppConfig())
    app_config = _load_config_or_raise(repo, config_file)
    active_checks = _build_configured_checks_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_check_ids"] = [check.check_id for check in active_checks]

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- exclude_dirs: {payload['exclude_dirs']}",
        f"- checks.enable: {payload['checks']['enable']}",
        f"- checks.disable: {payload['checks']['disable']}",
        f"- active_check_ids: {payload['active_check_ids']}",
    ]
    typer.echo("\n".join(lines))


def main() -> None:
    """Console script entrypoint."""
    app()


def _audit(
    path: Path,
    *,
    json_output: bool,
    format: str | None,
    config_file: Path | None,
) -> None:
    with _audit_root(path):
        app_config = _load_config_or_raise(Path("."), config_file)
        output_format = "json" if json_output else _resolve_format(format, app_config)
        checks = _build_configured_checks_or_raise(app_config)
        findings = run_audit(checks=checks)

    if output_format == "json":
        typer.echo(render_json(findings))
    else:
        typer.echo(render_human(findings))

    if has_errors(findings):
        raise typer.Exit(code=1)


@contextmanager
def _audit_root(path: Path) -> Iterator[None]:
    origin = Path.cwd()
    try:
        os.chdir(path)
    except OSError as exc:
        typer.echo(f'Error: Cannot access directory "{path}": {exc}', err=True)
        raise typer.Exit(code=1) from exc
    try:
        yield
    finally:
        os.chdir(origin)


def _resolve_format(value: str | None, app_config: AppConfig) -> str:
    output_format = (value or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_checks_or_raise(app_config: AppConfig) -> list[Check]:
    try:
        return build_checks(
            enabled_check_ids=app_config.check_enable,
            disabled_check_ids=app_config.check_disable,
            exclude_dirs=app_config.exclude_dirs,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.checks") from exc
