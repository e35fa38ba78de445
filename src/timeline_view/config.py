from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Any

import yaml

from .owner_ordering import parse_owner_sequence
from .timeline_models import ColumnMapping, TimelineConfig, ZoomSettings

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Raised when the view configuration is malformed (unknown keys, bad types, bad bounds)."""


@dataclass(frozen=True)
class _Path:
    """Helper to produce readable YAML path strings like zoom.min."""

    parts: tuple[str, ...] = ()

    def child(self, segment: str) -> "_Path":
        return _Path(self.parts + (segment,))

    def __str__(self) -> str:  # pragma: no cover - trivial
        return ".".join(self.parts) if self.parts else "root"


def load_config(path: str) -> TimelineConfig:
    """Load a TimelineConfig from a YAML file at the given path."""

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    config = parse_config(raw)
    logger.debug("Loaded config from %s: %d owners in sequence", path, len(config.owner_sequence))
    return config


def parse_config(data: Any) -> TimelineConfig:
    """Validate an already-decoded YAML document; an empty document gives defaults."""

    path = _Path()
    if data is None:
        return TimelineConfig()
    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path}: expected mapping at top level")

    _assert_allowed_keys(data, {"title", "owner_sequence", "chart_start", "zoom", "columns"}, path)

    config = TimelineConfig()
    if "title" in data:
        config.title = _require_str(data, "title", path)
    config.owner_sequence = _parse_owner_sequence(data.get("owner_sequence"), path.child("owner_sequence"))
    if data.get("chart_start") is not None:
        config.chart_start = _parse_date(data["chart_start"], path.child("chart_start"))
    config.zoom = _parse_zoom(data.get("zoom"), path.child("zoom"))
    config.columns = _parse_columns(data.get("columns"), path.child("columns"))
    return config


def _parse_owner_sequence(value: Any, path: _Path) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return parse_owner_sequence(value)
    if isinstance(value, list):
        owners: list[str] = []
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise ConfigValidationError(f"{path}[{idx}]: expected string owner name")
            if item.strip():
                owners.append(item.strip())
        return owners
    raise ConfigValidationError(f"{path}: expected comma-separated string or list of names")


def _parse_zoom(value: Any, path: _Path) -> ZoomSettings:
    defaults = ZoomSettings()
    if value is None:
        return defaults
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{path}: expected mapping for zoom")

    _assert_allowed_keys(value, {"default", "min", "max", "step", "week_threshold"}, path)
    fields = {
        key: _optional_int(value, key, path, getattr(defaults, key))
        for key in ("default", "min", "max", "step", "week_threshold")
    }
    if fields["min"] <= 0:
        raise ConfigValidationError(f"{path.child('min')}: expected positive integer")
    if fields["min"] > fields["max"]:
        raise ConfigValidationError(f"{path}: min ({fields['min']}) must not exceed max ({fields['max']})")
    if fields["step"] <= 0:
        raise ConfigValidationError(f"{path.child('step')}: expected positive integer")
    if "default" not in value:
        fields["default"] = max(fields["min"], min(fields["default"], fields["max"]))

    zoom = ZoomSettings(**fields)
    if not zoom.min <= zoom.default <= zoom.max:
        raise ConfigValidationError(f"{path.child('default')}: expected value within [{zoom.min}, {zoom.max}]")
    return zoom


def _parse_columns(value: Any, path: _Path) -> ColumnMapping:
    if value is None:
        return ColumnMapping()
    if not isinstance(value, dict):
        raise ConfigValidationError(f"{path}: expected mapping for columns")

    _assert_allowed_keys(value, {"title", "owner", "start", "end"}, path)
    columns = ColumnMapping()
    if "title" in value:
        columns.title = _require_str(value, "title", path)
    if value.get("owner"):
        columns.owner = _require_str(value, "owner", path)
    if "start" in value:
        columns.start = _require_str(value, "start", path)
    if "end" in value:
        columns.end = _require_str(value, "end", path)
    return columns


def _assert_allowed_keys(data: dict[str, Any], allowed: set[str], path: _Path) -> None:
    extras = sorted(set(data.keys()) - allowed)
    if extras:
        raise ConfigValidationError(f"{path}: unexpected fields {extras}")


def _require_str(data: dict[str, Any], key: str, path: _Path) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigValidationError(f"{path.child(key)}: expected non-empty string")
    return value.strip()


def _optional_int(data: dict[str, Any], key: str, path: _Path, default: int) -> int:
    if key not in data:
        return default
    value = data[key]
    # bool is an int subclass; reject it explicitly.
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(f"{path.child(key)}: expected integer")
    return value


def _parse_date(value: Any, path: _Path) -> _dt.date:
    # PyYAML already turns unquoted ISO dates into date objects.
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value
    if not isinstance(value, str):
        raise ConfigValidationError(f"{path}: expected YYYY-MM-DD date")
    try:
        return _dt.date.fromisoformat(value)
    except ValueError as exc:
        raise ConfigValidationError(f"{path}: expected YYYY-MM-DD date") from exc
