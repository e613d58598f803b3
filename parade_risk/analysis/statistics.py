"""Distributional statistics over a numeric sample.

Conventions used everywhere in the package:

- absent values (``None``/NaN) are dropped before any computation
- standard deviation is the population form (divide by N)
- percentiles interpolate linearly between order statistics at
  ``rank = p / 100 * (N - 1)``, which is numpy's default ``linear`` method; the
  median of an even-length sample is therefore the mean of the two middle values
- outliers follow the 1.5 x IQR rule
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from parade_risk.models import ResultStatus, Statistics, is_present
from parade_risk.processing.normalize import present


PERCENTILES = (10, 25, 75, 90, 95)
IQR_FACTOR = 1.5

RAIN_DAY_MM = 0.1
HEAVY_RAIN_MM = 5.0
RAIN_BUCKETS = (
    ("No Rain", 0.0, 0.1),
    ("Light Rain", 0.1, 1.0),
    ("Moderate Rain", 1.0, 5.0),
    ("Heavy Rain", 5.0, 10.0),
    ("Extreme Rain", 10.0, float("inf")),
)

CALM_WIND_KMH = 5.0
WINDY_KMH = 20.0
EXTREME_WIND_KMH = 40.0


def percentile(values: Sequence[float], p: float) -> Optional[float]:
    """Linearly interpolated percentile of the present values (``None`` when empty)."""
    data = present(values)
    if not data:
        return None
    return float(np.percentile(np.asarray(data, dtype=float), p))


def find_outliers(values: Sequence[float], factor: float = IQR_FACTOR) -> list[float]:
    """Values lying more than ``factor`` x IQR below Q1 or above Q3, in input order."""
    data = present(values)
    if not data:
        return []
    q1, q3 = np.percentile(np.asarray(data, dtype=float), [25, 75])
    iqr = q3 - q1
    lower, upper = q1 - factor * iqr, q3 + factor * iqr
    return [v for v in data if v < lower or v > upper]


def summarize(values: Iterable[Optional[float]]) -> Statistics:
    """Mean, median, spread, quartiles, percentiles and outliers of a sample."""
    data = present(values)
    if not data:
        return Statistics.empty()

    arr = np.asarray(data, dtype=float)
    q1, median, q3 = (float(q) for q in np.percentile(arr, [25, 50, 75]))
    std = float(arr.std(ddof=0))
    low, high = float(arr.min()), float(arr.max())
    return Statistics(
        count=int(arr.size),
        mean=float(arr.mean()),
        median=median,
        std_dev=std,
        variance=std * std,
        min=low,
        max=high,
        range=high - low,
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        percentiles={p: float(np.percentile(arr, p)) for p in PERCENTILES},
        outliers=tuple(find_outliers(data)),
        status=ResultStatus.OK,
    )


@dataclass(frozen=True)
class RainBucket:
    label: str
    count: int
    percentage: float


@dataclass(frozen=True)
class PrecipitationSummary:
    count: int = 0
    rain_probability: float = 0.0
    heavy_rain_probability: float = 0.0
    average: Optional[float] = None
    total: Optional[float] = None
    maximum: Optional[float] = None
    dry_days: int = 0
    distribution: tuple[RainBucket, ...] = ()
    status: ResultStatus = ResultStatus.NO_DATA


def precipitation_summary(values: Iterable[Optional[float]]) -> PrecipitationSummary:
    """Rain-day frequencies and a bucketed distribution of daily precipitation (mm)."""
    data = present(values)
    if not data:
        return PrecipitationSummary()
    n = len(data)
    rain_days = sum(1 for v in data if v > RAIN_DAY_MM)
    heavy_days = sum(1 for v in data if v > HEAVY_RAIN_MM)
    buckets = []
    for label, low, high in RAIN_BUCKETS:
        count = sum(1 for v in data if low <= v < high)
        buckets.append(RainBucket(label=label, count=count, percentage=100.0 * count / n))
    return PrecipitationSummary(
        count=n,
        rain_probability=100.0 * rain_days / n,
        heavy_rain_probability=100.0 * heavy_days / n,
        average=sum(data) / n,
        total=sum(data),
        maximum=max(data),
        dry_days=n - rain_days,
        distribution=tuple(buckets),
        status=ResultStatus.OK,
    )


@dataclass(frozen=True)
class WindSummary:
    statistics: Statistics = field(default_factory=Statistics.empty)
    calm_days: int = 0
    windy_days: int = 0
    extreme_days: int = 0


def wind_summary(values: Iterable[Optional[float]]) -> WindSummary:
    """Distribution of daily wind speed (km/h) plus calm/windy/extreme day counts."""
    data = present(values)
    return WindSummary(
        statistics=summarize(data),
        calm_days=sum(1 for v in data if v < CALM_WIND_KMH),
        windy_days=sum(1 for v in data if v > WINDY_KMH),
        extreme_days=sum(1 for v in data if v > EXTREME_WIND_KMH),
    )


def correlation(xs: Sequence[Optional[float]], ys: Sequence[Optional[float]]) -> float:
    """Pearson correlation over positions where both values are present.

    Returns 0 for fewer than two pairs or when either side has no variance.
    """
    pairs = [(x, y) for x, y in zip(xs, ys) if is_present(x) and is_present(y)]
    if len(pairs) < 2:
        return 0.0
    x = np.array([p[0] for p in pairs], dtype=float)
    y = np.array([p[1] for p in pairs], dtype=float)
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0
    return float(np.corrcoef(x, y)[0, 1])
