"""Stale editor/build leftover check."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from pathlib import Path

from drift_audit.checks.base import Finding, display_path
from drift_audit.walk import iter_files

STALE_EXTENSIONS = ("old", "bak", "tmp", "swp", "orig")
SKIP_DIRS = ("target", ".git")


class StaleArtifactCheck:
    """Flags backup, swap and temporary files left in the tree."""

    check_id = "stale_config"
    severities = ("warning",)

    def __init__(self, extra_skip_dirs: Collection[str] = ()) -> None:
        self.skip_dirs = frozenset(SKIP_DIRS) | frozenset(extra_skip_dirs)

    def evaluate(self, root: Path) -> list[Finding]:
        return self.scan(iter_files(root, skip_dirs=self.skip_dirs), root=root)

    def scan(self, paths: Iterable[Path], *, root: Path = Path(".")) -> list[Finding]:
        findings: list[Finding] = []
        for path in paths:
            if _extension(path) not in STALE_EXTENSIONS:
                continue
            findings.append(
                Finding(
                    category=self.check_id,
                    severity="warning",
                    message="Stale configuration or backup file",
                    path=display_path(path, root),
                )
            )
        return findings


def _extension(path: Path) -> str:
    return path.suffix[1:]
