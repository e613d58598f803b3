"""Configuration helpers for loading YAML-driven settings.

All config files live under the repository's ``config/`` directory by default. The helpers
return the typed objects from ``parade_risk.models`` so the analysis functions receive
thresholds, event profiles and policy constants as data instead of hardcoding them.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from parade_risk.models import AnalysisSettings, EventProfile, ThresholdSet


REPO_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_DIR = REPO_ROOT / "config"


def _load_yaml(path: Path) -> Any:
    """Load a YAML file and return its contents."""
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def load_thresholds(config_path: Path | None = None) -> ThresholdSet:
    """Load default hazard thresholds."""
    path = config_path or DEFAULT_CONFIG_DIR / "thresholds.yaml"
    data = _load_yaml(path)
    if not isinstance(data, dict) or "thresholds" not in data:
        raise ValueError(f"threshold config missing defaults: {path}")
    thresholds = ThresholdSet.from_mapping(data["thresholds"])
    invalid = thresholds.invalid_fields()
    if invalid:
        raise ValueError(f"threshold config has non-numeric values for {invalid}: {path}")
    return thresholds


def load_event_profiles(config_path: Path | None = None) -> dict[str, EventProfile]:
    """Load the outdoor event catalog keyed by event type (e.g. 'wedding')."""
    path = config_path or DEFAULT_CONFIG_DIR / "event_profiles.yaml"
    data = _load_yaml(path)
    if not isinstance(data, dict) or "events" not in data:
        raise ValueError(f"event profile config missing expected structure: {path}")
    return {key: EventProfile.from_mapping(key, raw) for key, raw in data["events"].items()}


def load_settings(config_path: Path | None = None) -> AnalysisSettings:
    """Load analysis policy constants (windows, reliability cut-offs, trend buckets)."""
    path = config_path or DEFAULT_CONFIG_DIR / "analysis.yaml"
    data = _load_yaml(path)
    if not isinstance(data, dict) or "analysis" not in data:
        raise ValueError(f"analysis config missing expected structure: {path}")
    try:
        return AnalysisSettings.from_mapping(data["analysis"] or {})
    except ValueError as exc:
        raise ValueError(f"{exc}: {path}") from exc


def _to_jsonable(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    return str(obj)


def dump_json(data: Any) -> str:
    """Pretty-print helper used in scripts and logging; accepts result dataclasses."""
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    return json.dumps(data, indent=2, sort_keys=True, default=_to_jsonable, ensure_ascii=False)
