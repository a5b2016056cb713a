"""Base check protocol and finding model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any, Literal, Protocol

Severity = Literal["error", "warning", "info"]

SEVERITIES: tuple[str, ...] = ("error", "warning", "info")
CATEGORIES: tuple[str, ...] = (
    "stale_config",
    "version_mismatch",
    "dead_code",
    "git_drift",
    "gitignore_drift",
)


@dataclass(frozen=True, slots=True)
class Finding:
    """A single drift instance emitted by a check."""

    category: str
    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        if not self.category:
            raise ValueError("Finding category must be non-empty")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}")
        if not self.message:
            raise ValueError("Finding message must be non-empty")
        if self.line is not None:
            if self.path is None:
                raise ValueError("Finding line requires a path")
            if self.line < 1:
                raise ValueError(f"Finding line must be 1-based, got {self.line}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "severity": self.severity,
            "message": self.message,
            "path": self.path,
            "line": self.line,
        }


class Check(Protocol):
    """Protocol for best-effort drift checks."""

    check_id: str
    severities: tuple[Severity, ...]

    def evaluate(self, root: Path) -> list[Finding]:
        """Inspect the tree under root and return findings; never raises."""


def display_path(path: PurePath, root: PurePath) -> str:
    """Return path relative to root using forward slashes."""
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = path
    return relative.as_posix()
