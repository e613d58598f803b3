"""Calendar-window selection and per-year aggregation over a ``Sample``."""

from __future__ import annotations

import calendar
from datetime import date

import pandas as pd

from parade_risk.models import FIELDS, Sample


def _anchor(year: int, month: int, day: int) -> date:
    # 29 Feb targets fall back to 28 Feb in common years.
    if month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return date(year, month, day)


def calendar_distance(day_of: date, month: int, day: int) -> int:
    """Days between ``day_of`` and the nearest occurrence of ``month``/``day``.

    Neighbouring years are checked too so that a window around 2 January includes
    late-December records.
    """
    return min(
        abs((day_of - _anchor(year, month, day)).days)
        for year in (day_of.year - 1, day_of.year, day_of.year + 1)
    )


def filter_window(sample: Sample, target: date, window_days: int) -> Sample:
    """Keep records within ±``window_days`` of the target calendar date, in any year."""
    return sample.where(
        lambda r: calendar_distance(r.date, target.month, target.day) <= window_days
    )


def same_date(sample: Sample, month: int, day: int) -> Sample:
    """Exact calendar-date subset (one record per year for a daily feed).

    A 29 February target takes 28 February in common years, as ``filter_window`` does.
    """
    return sample.where(lambda r: r.date == _anchor(r.year, month, day))


def recent_history(sample: Sample, years: int, reference_year: int | None = None) -> Sample:
    """Drop records older than ``years`` years before ``reference_year`` (default: this year)."""
    now = reference_year or date.today().year
    return sample.where(lambda r: r.year >= now - years)


def year_range(sample: Sample) -> tuple[int, int] | None:
    years = sample.years
    if not years:
        return None
    return years[0], years[-1]


def yearly_means(sample: Sample, field: str) -> pd.Series:
    """Mean of the present values of ``field`` for each year that has any.

    Returns:
        Series indexed by year; years without a present value are omitted.
    """
    if field not in FIELDS:
        raise KeyError(f"Unknown record field: {field}")
    frame = sample.to_frame()
    if frame.empty:
        return pd.Series(dtype=float, name=field, index=pd.Index([], dtype=int, name="year"))
    means = frame[field].groupby(frame.index.year).mean().dropna()
    means.index.name = "year"
    means.name = field
    return means
