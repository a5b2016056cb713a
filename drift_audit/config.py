"""Configuration loading for drift-audit."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAMES = (".drift.toml", "drift.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("drift", "drift-audit")
OUTPUT_FORMATS = {"human", "json"}


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    exclude_dirs: list[str] = field(default_factory=list)
    check_enable: list[str] | None = None
    check_disable: list[str] = field(default_factory=list)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "exclude_dirs": list(self.exclude_dirs),
            "checks": {
                "enable": list(self.check_enable) if self.check_enable is not None else None,
                "disable": list(self.check_disable),
            },
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ValueError(f"Cannot read config file {path}: {exc}") from exc
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    section = _find_pyproject_tool_section(loaded)
    if source_path.name == PYPROJECT_FILENAME:
        return section if section is not None else {}
    return section if section is not None else loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    checks_mapping = _as_table(mapping.get("checks"), "checks")

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in OUTPUT_FORMATS:
        choices = ", ".join(sorted(OUTPUT_FORMATS))
        raise ValueError(f"format must be one of: {choices}")

    return AppConfig(
        format=format_value,
        exclude_dirs=_as_str_list(mapping.get("exclude_dirs"), "exclude_dirs"),
        check_enable=_as_str_list_or_none(checks_mapping.get("enable"), "checks.enable"),
        check_disable=_as_str_list(checks_mapping.get("disable"), "checks.disable"),
        source=source,
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return list(value)


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)
