"""Audit orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

from drift_audit.checks import default_checks
from drift_audit.checks.base import Check, Finding

logger = logging.getLogger(__name__)


def run_audit(root: Path | None = None, checks: list[Check] | None = None) -> list[Finding]:
    """Run checks in order against root and return their concatenated findings.

    ``root`` defaults to the current working directory. Each check is
    best-effort, so one check's failure modes never prevent the next from
    running.
    """
    audit_root = root if root is not None else Path(".")
    active_checks = checks if checks is not None else default_checks()

    findings: list[Finding] = []
    for check in active_checks:
        check_findings = check.evaluate(audit_root)
        logger.debug("%s produced %d findings", check.check_id, len(check_findings))
        findings.extend(check_findings)
    return findings
