"""Shared fixtures for the parade_risk test suite."""

from datetime import date, timedelta

import pytest

from parade_risk.config import load_event_profiles, load_settings, load_thresholds
from parade_risk.models import DailyRecord, Sample


def make_sample(rows):
    """Build a Sample from ``(date, field=value, ...)`` style dicts."""
    return Sample(tuple(DailyRecord(**row) for row in rows))


@pytest.fixture
def thresholds():
    return load_thresholds()


@pytest.fixture
def profiles():
    return load_event_profiles()


@pytest.fixture
def settings():
    return load_settings()


@pytest.fixture
def july_sample():
    """Twenty years (2005-2024) of ±3 days around 4 July.

    Temperatures warm by 0.2 °C a year; every third day is rainy and humid.
    """
    rows = []
    for year in range(2005, 2025):
        for offset in range(-3, 4):
            day = date(year, 7, 4) + timedelta(days=offset)
            warm = 24.0 + 0.2 * (year - 2005) + offset * 0.5
            rainy = (year + offset) % 3 == 0
            rows.append(
                {
                    "date": day,
                    "temperature_max": warm + 6,
                    "temperature_min": warm - 6,
                    "temperature_avg": warm,
                    "precipitation": 12.0 if rainy else 0.0,
                    "wind_speed": 15.0 + offset,
                    "humidity": 85.0 if rainy else 55.0,
                }
            )
    return make_sample(rows)


@pytest.fixture
def sample_of():
    return make_sample
