"""Audit engine orchestration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from drift_audit.checks import build_checks, default_checks, list_check_info
from drift_audit.checks.base import CATEGORIES, SEVERITIES, Finding
from drift_audit.engine import run_audit
from drift_audit.git import GitError
from tests.helpers_git import write_file


def _no_git(root: Path) -> list[str]:
    raise GitError("git unavailable")


def _dirty(root: Path) -> list[str]:
    return [" M tracked.txt"]


def _drifted_tree(root: Path) -> None:
    write_file(root, "notes.bak", "old notes\n")
    write_file(root, "rust-toolchain.toml", '[toolchain]\nchannel = "nightly"\n')
    write_file(root, "Cargo.toml", '[package]\nrust-version = "1.70"\n')
    write_file(root, "src/lib.rs", "pub fn f() {} // FIXME\n")
    write_file(root, ".gitignore", "missing.cfg\n")


def test_run_audit_runs_checks_in_fixed_order(tmp_path: Path) -> None:
    _drifted_tree(tmp_path)

    findings = run_audit(tmp_path, checks=build_checks(status_source=_dirty))
    assert [f.category for f in findings] == [
        "stale_config",
        "version_mismatch",
        "dead_code",
        "git_drift",
        "gitignore_drift",
    ]
    assert [f.path for f in findings] == [
        "notes.bak",
        "rust-toolchain.toml",
        "src/lib.rs",
        None,
        ".gitignore",
    ]


def test_run_audit_defaults_to_current_directory(tmp_path: Path, monkeypatch) -> None:
    _drifted_tree(tmp_path)
    monkeypatch.chdir(tmp_path)

    findings = run_audit(checks=build_checks(status_source=_no_git))
    assert [f.category for f in findings] == [
        "stale_config",
        "version_mismatch",
        "dead_code",
        "gitignore_drift",
    ]
    assert findings[0].path == "notes.bak"


def test_run_audit_is_idempotent(tmp_path: Path) -> None:
    _drifted_tree(tmp_path)
    write_file(tmp_path, "a/b/c.py", "# TODO\n# XXX HACK\n")
    checks = build_checks(status_source=_dirty)

    first = run_audit(tmp_path, checks=checks)
    second = run_audit(tmp_path, checks=checks)
    assert first == second


def test_run_audit_findings_satisfy_invariants(tmp_path: Path) -> None:
    _drifted_tree(tmp_path)
    write_file(tmp_path, ".nvmrc", "20\n")
    write_file(tmp_path, "package.json", '{"engines": {"node": ">=18"}}\n')

    findings = run_audit(tmp_path, checks=build_checks(status_source=lambda r: ["?? x"]))
    assert findings
    for finding in findings:
        assert finding.category in CATEGORIES
        assert finding.severity in SEVERITIES
        assert finding.message
        if finding.line is not None:
            assert finding.path is not None


def test_empty_repository_has_no_findings(tmp_path: Path) -> None:
    write_file(tmp_path, "README.md", "hello\n")

    assert run_audit(tmp_path, checks=build_checks(status_source=_no_git)) == []


def test_run_audit_with_custom_checks() -> None:
    class _Fixed:
        check_id = "fixed"

        def evaluate(self, root: Path) -> list[Finding]:
            return [Finding(category="fixed", severity="error", message=str(root))]

    findings = run_audit(Path("repo"), checks=[_Fixed(), _Fixed()])
    assert [f.message for f in findings] == ["repo", "repo"]


def test_default_checks_cover_every_category_in_order() -> None:
    assert [check.check_id for check in default_checks()] == list(CATEGORIES)
    assert [info.check_id for info in list_check_info()] == list(CATEGORIES)
    assert all(info.default_enabled for info in list_check_info())


def test_build_checks_keeps_fixed_order_for_enabled_subset() -> None:
    checks = build_checks(enabled_check_ids=["gitignore_drift", "stale_config"])
    assert [check.check_id for check in checks] == ["stale_config", "gitignore_drift"]


def test_build_checks_applies_disable_and_exclude_dirs(tmp_path: Path) -> None:
    write_file(tmp_path, "vendor/x.bak", "")
    write_file(tmp_path, "vendor/x.py", "# TODO\n")
    checks = build_checks(
        disabled_check_ids=["git_drift", "version_mismatch"],
        exclude_dirs=["vendor"],
    )

    assert [check.check_id for check in checks] == [
        "stale_config",
        "dead_code",
        "gitignore_drift",
    ]
    assert run_audit(tmp_path, checks=checks) == []


def test_build_checks_rejects_unknown_ids() -> None:
    with pytest.raises(ValueError, match="Unknown check ids: bogus"):
        build_checks(disabled_check_ids=["bogus"])
