"""Adapters for Open-Meteo archive and current-conditions payloads."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from parade_risk.models import Observation
from parade_risk.processing.normalize import clean_value


# Canonical field -> Open-Meteo daily variable (wind in km/h, the API default).
DAILY_VARIABLES = {
    "temperature_max": "temperature_2m_max",
    "temperature_min": "temperature_2m_min",
    "temperature_avg": "temperature_2m_mean",
    "precipitation": "precipitation_sum",
    "wind_speed": "wind_speed_10m_max",
    "humidity": "relative_humidity_2m_mean",
}


def _at(values: Optional[Sequence[Any]], index: int) -> Any:
    if not isinstance(values, Sequence) or index >= len(values):
        return None
    return values[index]


def records_from_open_meteo(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Map an archive payload (``daily.time`` plus parallel arrays) to raw entries.

    A missing or short variable array yields ``None`` for those days, never 0.
    """
    daily = payload.get("daily") if isinstance(payload, Mapping) else None
    if not isinstance(daily, Mapping) or not isinstance(daily.get("time"), Sequence):
        raise ValueError("Open-Meteo payload missing daily.time")

    entries = []
    for i, day in enumerate(daily["time"]):
        entry: dict[str, Any] = {"date": day}
        for field, variable in DAILY_VARIABLES.items():
            entry[field] = _at(daily.get(variable), i)
        entries.append(entry)
    return entries


def observation_from_open_meteo(payload: Mapping[str, Any]) -> Optional[Observation]:
    """Map a forecast payload's ``current`` block to an ``Observation``."""
    current = payload.get("current") if isinstance(payload, Mapping) else None
    if not isinstance(current, Mapping):
        return None
    humidity = clean_value(current.get("relative_humidity_2m"), sentinel=None)
    if humidity is not None and not 0 <= humidity <= 100:
        humidity = None
    return Observation(
        temperature=clean_value(current.get("temperature_2m"), sentinel=None),
        precipitation=clean_value(current.get("precipitation"), sentinel=None),
        wind_speed=clean_value(current.get("wind_speed_10m"), sentinel=None),
        humidity=humidity,
    )
