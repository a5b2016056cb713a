"""Toolchain and manifest version pin consistency check."""

from __future__ import annotations

import logging
from pathlib import Path

from drift_audit.checks.base import Finding

logger = logging.getLogger(__name__)

RUST_TOOLCHAIN_FILE = "rust-toolchain.toml"
CARGO_MANIFEST_FILE = "Cargo.toml"
NVMRC_FILE = ".nvmrc"
PACKAGE_MANIFEST_FILE = "package.json"


class VersionMismatchCheck:
    """Flags version pins that contradict the project manifest."""

    check_id = "version_mismatch"
    severities = ("warning",)

    def evaluate(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        toolchain = self._rust_toolchain_finding(root)
        if toolchain is not None:
            findings.append(toolchain)
        node = self._node_version_finding(root)
        if node is not None:
            findings.append(node)
        return findings

    def _rust_toolchain_finding(self, root: Path) -> Finding | None:
        toolchain = _read_optional(root / RUST_TOOLCHAIN_FILE)
        if toolchain is None or "nightly" not in toolchain:
            return None
        cargo = _read_optional(root / CARGO_MANIFEST_FILE)
        if cargo is None or "rust-version" not in cargo:
            return None
        return Finding(
            category=self.check_id,
            severity="warning",
            message=(
                f"{RUST_TOOLCHAIN_FILE} uses nightly but "
                f"{CARGO_MANIFEST_FILE} has rust-version set"
            ),
            path=RUST_TOOLCHAIN_FILE,
        )

    def _node_version_finding(self, root: Path) -> Finding | None:
        nvmrc = _read_optional(root / NVMRC_FILE)
        package = _read_optional(root / PACKAGE_MANIFEST_FILE)
        if nvmrc is None or package is None:
            return None

        declared = nvmrc.strip()
        if declared in package or '"engines"' not in package:
            return None
        return Finding(
            category=self.check_id,
            severity="warning",
            message=(
                f"{NVMRC_FILE} specifies {declared} but "
                f"{PACKAGE_MANIFEST_FILE} engines may differ"
            ),
            path=NVMRC_FILE,
        )


def _read_optional(path: Path) -> str | None:
    """Return file text, or None when it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        if not isinstance(exc, FileNotFoundError):
            logger.debug("cannot read %s: %s", path, exc)
        return None
