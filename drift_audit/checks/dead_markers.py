"""Unresolved-work marker check."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from pathlib import Path

from drift_audit.checks.base import Finding, display_path
from drift_audit.walk import iter_files

logger = logging.getLogger(__name__)

MARKERS = ("TODO", "FIXME", "XXX", "HACK")
SOURCE_EXTENSIONS = frozenset({"rs", "js", "ts", "py", "go", "java", "c", "cpp", "h"})
SKIP_DIRS = ("target", ".git", "node_modules")


class DeadMarkerCheck:
    """Finds TODO/FIXME/XXX/HACK markers left in source files."""

    check_id = "dead_code"
    severities = ("info",)

    def __init__(self, extra_skip_dirs: Collection[str] = ()) -> None:
        self.skip_dirs = frozenset(SKIP_DIRS) | frozenset(extra_skip_dirs)

    def evaluate(self, root: Path) -> list[Finding]:
        return self.scan(iter_files(root, skip_dirs=self.skip_dirs), root=root)

    def scan(self, paths: Iterable[Path], *, root: Path = Path(".")) -> list[Finding]:
        findings: list[Finding] = []
        for path in paths:
            if path.suffix[1:] not in SOURCE_EXTENSIONS:
                continue
            content = _read_source(path)
            if content is None:
                continue
            findings.extend(self.scan_text(content, path=display_path(path, root)))
        return findings

    def scan_text(self, content: str, *, path: str) -> list[Finding]:
        findings: list[Finding] = []
        for line_number, line in enumerate(content.split("\n"), start=1):
            for marker in MARKERS:
                if marker in line:
                    findings.append(
                        Finding(
                            category=self.check_id,
                            severity="info",
                            message=f"{marker} marker found",
                            path=path,
                            line=line_number,
                        )
                    )
        return findings


def _read_source(path: Path) -> str | None:
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        return None
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None
