"""Checks package."""

from collections.abc import Callable
from dataclasses import dataclass

from drift_audit.checks.base import Check, Finding
from drift_audit.checks.dead_markers import DeadMarkerCheck
from drift_audit.checks.git_status import GitStatusCheck, StatusSource
from drift_audit.checks.ignore_drift import IgnoreDriftCheck
from drift_audit.checks.stale_artifacts import StaleArtifactCheck
from drift_audit.checks.version_mismatch import VersionMismatchCheck

__all__ = [
    "Check",
    "CheckInfo",
    "Finding",
    "build_checks",
    "default_checks",
    "list_check_info",
]


@dataclass(frozen=True, slots=True)
class CheckInfo:
    """Check metadata for listing and selection."""

    check_id: str
    name: str
    description: str
    severities: tuple[str, ...]
    default_enabled: bool


@dataclass(frozen=True, slots=True)
class _BuildOptions:
    exclude_dirs: tuple[str, ...]
    status_source: StatusSource | None


@dataclass(frozen=True, slots=True)
class _CheckSpec:
    check_id: str
    factory: Callable[[_BuildOptions], Check]
    name: str
    description: str
    severities: tuple[str, ...]


def default_checks() -> list[Check]:
    """Return every check in execution order."""
    return build_checks()


def build_checks(
    *,
    enabled_check_ids: list[str] | None = None,
    disabled_check_ids: list[str] | None = None,
    exclude_dirs: list[str] | None = None,
    status_source: StatusSource | None = None,
) -> list[Check]:
    """Build check instances in fixed execution order applying enable/disable filters."""
    specs = _ordered_check_specs()
    registry = {spec.check_id: spec for spec in specs}
    requested_ids = set(enabled_check_ids or []) | set(disabled_check_ids or [])

    unknown = [check_id for check_id in requested_ids if check_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown check ids: {joined}")

    enabled_set = set(enabled_check_ids) if enabled_check_ids is not None else set(registry)
    disabled_set = set(disabled_check_ids or [])
    options = _BuildOptions(
        exclude_dirs=tuple(exclude_dirs or ()),
        status_source=status_source,
    )
    return [
        spec.factory(options)
        for spec in specs
        if spec.check_id in enabled_set and spec.check_id not in disabled_set
    ]


def list_check_info() -> list[CheckInfo]:
    """Return metadata for all known checks."""
    default_ids = {check.check_id for check in default_checks()}
    return [
        CheckInfo(
            check_id=spec.check_id,
            name=spec.name,
            description=spec.description,
            severities=spec.severities,
            default_enabled=spec.check_id in default_ids,
        )
        for spec in _ordered_check_specs()
    ]


def _ordered_check_specs() -> list[_CheckSpec]:
    return [
        _spec(
            StaleArtifactCheck,
            lambda options: StaleArtifactCheck(extra_skip_dirs=options.exclude_dirs),
        ),
        _spec(VersionMismatchCheck, lambda options: VersionMismatchCheck()),
        _spec(
            DeadMarkerCheck,
            lambda options: DeadMarkerCheck(extra_skip_dirs=options.exclude_dirs),
        ),
        _spec(
            GitStatusCheck,
            lambda options: GitStatusCheck(status_source=options.status_source),
        ),
        _spec(IgnoreDriftCheck, lambda options: IgnoreDriftCheck()),
    ]


def _spec(check_cls: type, factory: Callable[[_BuildOptions], Check]) -> _CheckSpec:
    return _CheckSpec(
        check_id=check_cls.check_id,
        factory=factory,
        name=check_cls.__name__,
        description=(check_cls.__doc__ or "").strip(),
        severities=tuple(check_cls.severities),
    )
