"""Adapter for Meteostat station data.

``meteostat.Daily(...).fetch()`` returns a DataFrame indexed by date with °C
temperatures, mm precipitation and km/h wind speed. Fetching (and the station lookup)
stays with the caller; this module only maps the frame's columns so the engine never has
to guess at provider field names.
"""

from __future__ import annotations

from typing import Any

import pandas as pd


COLUMNS = {
    "temperature_max": "tmax",
    "temperature_min": "tmin",
    "temperature_avg": "tavg",
    "precipitation": "prcp",
    "wind_speed": "wspd",
}


def records_from_meteostat(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """Map a Meteostat daily frame to raw entries (NaN cells stay missing)."""
    if not isinstance(frame.index, pd.DatetimeIndex):
        frame = frame.copy()
        frame.index = pd.to_datetime(frame.index)

    entries = []
    for timestamp, row in frame.iterrows():
        entry: dict[str, Any] = {"date": timestamp.date(), "humidity": None}
        for field, column in COLUMNS.items():
            entry[field] = row[column] if column in frame.columns else None
        entries.append(entry)
    return entries
