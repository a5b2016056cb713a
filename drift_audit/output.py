"""Output rendering."""

from __future__ import annotations

import json

import click

from drift_audit.checks.base import Finding

NO_DRIFT_MESSAGE = "✓ No drift detected"

_SEVERITY_STYLES = {
    "error": ("✗", "red"),
    "warning": ("⚠", "yellow"),
}
_DEFAULT_STYLE = ("○", None)


def render_human(findings: list[Finding]) -> str:
    """Render a grouped, colorized drift report."""
    if not findings:
        return click.style(NO_DRIFT_MESSAGE, fg="green")

    lines: list[str] = [
        click.style("Drift Audit Results", bold=True),
        "===================",
        "",
    ]
    for finding in findings:
        glyph, color = _SEVERITY_STYLES.get(finding.severity, _DEFAULT_STYLE)
        text = f"{glyph} [{finding.category}] {finding.message}"
        if finding.path is not None:
            text += f" ({finding.path})"
        if finding.line is not None:
            text += f":{finding.line}"
        lines.append(click.style(text, fg=color))

    errors = count_severity(findings, "error")
    warnings = count_severity(findings, "warning")
    lines.append("")
    lines.append(f"Summary: {errors} errors, {warnings} warnings")
    return "\n".join(lines)


def render_json(findings: list[Finding]) -> str:
    """Render findings as a pretty-printed JSON array."""
    return json.dumps([finding.to_dict() for finding in findings], indent=2, ensure_ascii=False)


def count_severity(findings: list[Finding], severity: str) -> int:
    return sum(1 for finding in findings if finding.severity == severity)


def has_errors(findings: list[Finding]) -> bool:
    """Return True when any finding should fail the run."""
    return count_severity(findings, "error") > 0
