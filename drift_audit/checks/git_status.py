"""Uncommitted working-tree change check."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from drift_audit.checks.base import Finding
from drift_audit.git import GitError, get_status_lines

logger = logging.getLogger(__name__)

StatusSource = Callable[[Path], list[str]]

MODIFIED_PREFIXES = (" M", "M ")
UNTRACKED_PREFIX = "??"


class GitStatusCheck:
    """Counts modified and untracked files reported by git status."""

    check_id = "git_drift"
    severities = ("warning", "info")

    def __init__(self, status_source: StatusSource | None = None) -> None:
        self.status_source = status_source or get_status_lines

    def evaluate(self, root: Path) -> list[Finding]:
        try:
            lines = self.status_source(root)
        except GitError as exc:
            logger.debug("git status unavailable: %s", exc)
            return []
        return self.classify(lines)

    def classify(self, lines: list[str]) -> list[Finding]:
        modified = sum(1 for line in lines if line.startswith(MODIFIED_PREFIXES))
        untracked = sum(1 for line in lines if line.startswith(UNTRACKED_PREFIX))

        findings: list[Finding] = []
        if modified > 0:
            findings.append(
                Finding(
                    category=self.check_id,
                    severity="warning",
                    message=f"{modified} modified files not committed",
                )
            )
        if untracked > 0:
            findings.append(
                Finding(
                    category=self.check_id,
                    severity="info",
                    message=f"{untracked} untracked files",
                )
            )
        return findings
