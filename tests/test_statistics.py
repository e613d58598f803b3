"""Tests for distributional statistics."""

import math

import pytest

from parade_risk.analysis.statistics import (
    correlation,
    find_outliers,
    percentile,
    precipitation_summary,
    summarize,
    wind_summary,
)
from parade_risk.models import ResultStatus


def test_empty_sample_returns_no_data_sentinel():
    stats = summarize([])
    assert stats.status is ResultStatus.NO_DATA
    assert stats.count == 0
    assert stats.mean is None
    assert stats.median is None
    assert stats.outliers == ()


def test_absent_values_are_excluded():
    stats = summarize([1.0, None, 3.0, math.nan])
    assert stats.count == 2
    assert stats.mean == 2.0


def test_even_length_median_interpolates():
    assert summarize([4.0, 1.0, 3.0, 2.0]).median == 2.5


def test_population_standard_deviation():
    stats = summarize([2, 4, 4, 4, 5, 5, 7, 9])
    assert stats.std_dev == pytest.approx(2.0)
    assert stats.variance == pytest.approx(4.0)


def test_linear_interpolated_percentiles():
    values = [10, 20, 30, 40, 50]
    # rank = p/100 * (N - 1)
    assert percentile(values, 25) == 20.0
    assert percentile(values, 10) == pytest.approx(14.0)
    assert percentile(values, 95) == pytest.approx(48.0)
    assert percentile([], 50) is None


def test_summary_fields():
    stats = summarize([30, 31, 33, 35, 29, 34, 36, 28, 32, 31])
    assert stats.min == 28
    assert stats.max == 36
    assert stats.range == 8
    assert stats.median == 31.5
    assert stats.iqr == pytest.approx(stats.q3 - stats.q1)
    assert set(stats.percentiles) == {10, 25, 75, 90, 95}


@pytest.mark.parametrize(
    "values",
    [[5.0], [1, 2], [3, 1, 2, 9, -4, 0.5], [7, 7, 7], list(range(100))],
)
def test_order_of_summary_measures(values):
    stats = summarize(values)
    assert stats.min <= stats.percentiles[25] <= stats.median <= stats.percentiles[75] <= stats.max


def test_iqr_outliers():
    values = [10, 11, 12, 12, 13, 14, 40, -20]
    assert find_outliers(values) == [40, -20]
    assert summarize(values).outliers == (40, -20)
    assert find_outliers([1, 1, 1]) == []


def test_precipitation_summary():
    summary = precipitation_summary([0.0, 0.05, 0.5, 2.0, 7.0, 12.0, None])
    assert summary.count == 6
    assert summary.rain_probability == pytest.approx(100 * 4 / 6)
    assert summary.heavy_rain_probability == pytest.approx(100 * 2 / 6)
    assert summary.dry_days == 2
    assert summary.maximum == 12.0
    assert [b.count for b in summary.distribution] == [2, 1, 1, 1, 1]


def test_precipitation_summary_empty():
    summary = precipitation_summary([])
    assert summary.status is ResultStatus.NO_DATA
    assert summary.average is None


def test_wind_summary_counts():
    summary = wind_summary([2.0, 10.0, 25.0, 45.0])
    assert summary.calm_days == 1
    assert summary.windy_days == 2
    assert summary.extreme_days == 1
    assert summary.statistics.max == 45.0


def test_correlation():
    assert correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)
    assert correlation([1, 2, None], [5, 5, 1]) == 0.0
    assert correlation([1], [2]) == 0.0
