"""CLI end-to-end tests for audit rendering and exit status."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from drift_audit.checks.base import Finding
from drift_audit.cli import app
from tests.helpers_git import write_file

runner = CliRunner()


@pytest.fixture(autouse=True)
def _without_git(monkeypatch) -> None:
    monkeypatch.setenv("PATH", "")


def test_audit_empty_directory_prints_no_drift(tmp_path: Path) -> None:
    result = runner.invoke(app, ["audit", str(tmp_path)])
    assert result.exit_code == 0
    assert result.stdout == "✓ No drift detected\n"


def test_audit_json_reports_findings_relative_to_target(tmp_path: Path) -> None:
    write_file(tmp_path, "conf/app.toml.bak", "")
    write_file(tmp_path, "src/main.py", "x = 1  # HACK\n")

    result = runner.invoke(app, ["audit", str(tmp_path), "--json"])
    assert result.exit_code == 0

    payload = json.loads(result.stdout)
    assert payload == [
        {
            "category": "stale_config",
            "severity": "warning",
            "message": "Stale configuration or backup file",
            "path": "conf/app.toml.bak",
            "line": None,
        },
        {
            "category": "dead_code",
            "severity": "info",
            "message": "HACK marker found",
            "path": "src/main.py",
            "line": 1,
        },
    ]


def test_audit_human_report_warnings_do_not_fail(tmp_path: Path) -> None:
    write_file(tmp_path, "a.swp", "")

    result = runner.invoke(app, ["audit", str(tmp_path)])
    assert result.exit_code == 0
    assert "Drift Audit Results" in result.stdout
    assert "⚠ [stale_config] Stale configuration or backup file (a.swp)" in result.stdout
    assert "Summary: 0 errors, 1 warnings" in result.stdout


def test_audit_restores_working_directory(tmp_path: Path) -> None:
    before = os.getcwd()
    runner.invoke(app, ["audit", str(tmp_path)])
    assert os.getcwd() == before


def test_audit_missing_directory_fails_before_checks(tmp_path: Path) -> None:
    missing = tmp_path / "absent"
    result = runner.invoke(app, ["audit", str(missing)])
    assert result.exit_code == 1
    assert f'Cannot access directory "{missing}"' in result.output


def test_audit_exits_nonzero_on_error_findings(tmp_path: Path, monkeypatch) -> None:
    def fake_run_audit(root=None, checks=None):
        return [Finding(category="stale_config", severity="error", message="boom")]

    monkeypatch.setattr("drift_audit.cli.run_audit", fake_run_audit)
    result = runner.invoke(app, ["audit", str(tmp_path)])
    assert result.exit_code == 1
    assert "✗ [stale_config] boom" in result.stdout
    assert "Summary: 1 errors, 0 warnings" in result.stdout


def test_audit_uses_format_and_checks_from_config(tmp_path: Path) -> None:
    write_file(tmp_path, "old.orig", "")
    write_file(tmp_path, "main.go", "// TODO\n")
    write_file(
        tmp_path,
        ".drift.toml",
        "\n".join(['format = "json"', "", "[checks]", 'disable = ["dead_code"]']),
    )

    result = runner.invoke(app, ["audit", str(tmp_path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [item["category"] for item in payload] == ["stale_config"]


def test_audit_exclude_dirs_from_config(tmp_path: Path) -> None:
    write_file(tmp_path, "vendor/lib.js", "// FIXME\n")
    write_file(tmp_path, "drift.toml", 'exclude_dirs = ["vendor"]\n')

    result = runner.invoke(app, ["audit", str(tmp_path), "--format", "json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == []


def test_audit_invalid_config_is_usage_error(tmp_path: Path) -> None:
    write_file(tmp_path, ".drift.toml", "[checks]\nenable = [\"nope\"]\n")

    result = runner.invoke(app, ["audit", str(tmp_path)])
    assert result.exit_code == 2


def test_bare_invocation_audits_current_directory(tmp_path: Path, monkeypatch) -> None:
    write_file(tmp_path, "settings.orig", "")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "⚠ [stale_config] Stale configuration or backup file (settings.orig)" in result.stdout


def test_bare_invocation_on_clean_directory(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert result.stdout == "✓ No drift detected\n"
