"""Ignore-rule drift check."""

from __future__ import annotations

import os
from pathlib import Path

from drift_audit.checks.base import Finding

GITIGNORE_FILE = ".gitignore"

# Entries commonly ignored before the matching path is ever created.
PREMATURE_ENTRIES = frozenset(
    {"*.log", "*.tmp", ".env", ".env.local", "node_modules", "target", "dist", "build"}
)


class IgnoreDriftCheck:
    """Finds literal .gitignore entries that match no path in the tree."""

    check_id = "gitignore_drift"
    severities = ("info", "warning")

    def evaluate(self, root: Path) -> list[Finding]:
        try:
            content = (root / GITIGNORE_FILE).read_bytes().decode("utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            return [
                Finding(
                    category=self.check_id,
                    severity="warning",
                    message=f"Failed to read {GITIGNORE_FILE}: {exc}",
                    path=GITIGNORE_FILE,
                )
            ]
        return self.scan_text(content, root=root)

    def scan_text(self, content: str, *, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        for raw_line in content.split("\n"):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if not _is_literal(line):
                continue
            if line.endswith("/") or line in PREMATURE_ENTRIES:
                continue
            if os.path.exists(root / line.lstrip("/")):
                continue
            findings.append(
                Finding(
                    category=self.check_id,
                    severity="info",
                    message=f"Gitignore entry '{line}' doesn't match any files",
                    path=GITIGNORE_FILE,
                )
            )
        return findings


def _is_literal(line: str) -> bool:
    return "*" not in line and "?" not in line
