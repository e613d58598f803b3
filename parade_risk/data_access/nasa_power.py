"""Adapter for NASA POWER daily point payloads.

The POWER API returns one mapping per parameter keyed by ``YYYYMMDD``::

    {"properties": {"parameter": {"T2M_MAX": {"20200704": 31.2, ...}, ...}}}

Missing days are reported as -999, which the normalizer treats as absent. Wind speed
(WS2M) comes in m/s and is converted to km/h here; the sentinel is passed through
untouched so it still reads as missing downstream.
"""

from __future__ import annotations

from typing import Any, Mapping

from parade_risk.processing.normalize import NASA_POWER_SENTINEL


MS_TO_KMH = 3.6

# Canonical field -> POWER parameter names in order of preference.
PARAMETERS = {
    "temperature_max": ("T2M_MAX",),
    "temperature_min": ("T2M_MIN",),
    "temperature_avg": ("T2M",),
    "precipitation": ("PRECTOTCORR", "PRECTOT"),
    "wind_speed": ("WS2M",),
    "humidity": ("RH2M",),
}


def _series(params: Mapping[str, Any], names: tuple[str, ...]) -> Mapping[str, Any]:
    for name in names:
        series = params.get(name)
        if isinstance(series, Mapping):
            return series
    return {}


def _wind_kmh(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value != NASA_POWER_SENTINEL:
        return value * MS_TO_KMH
    return value


def records_from_nasa_power(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Map a POWER daily payload to raw entries for ``normalize_records``."""
    params = payload.get("properties", {}).get("parameter") if isinstance(payload, Mapping) else None
    if not isinstance(params, Mapping):
        raise ValueError("NASA POWER payload missing properties.parameter")

    series = {field: _series(params, names) for field, names in PARAMETERS.items()}
    dates = sorted({day for values in series.values() for day in values})

    entries = []
    for day in dates:
        entry: dict[str, Any] = {"date": day}
        for field, values in series.items():
            entry[field] = values.get(day)
        entry["wind_speed"] = _wind_kmh(entry["wind_speed"])
        entries.append(entry)
    return entries
