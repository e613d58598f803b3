"""Tests for calendar windows and yearly aggregation."""

from datetime import date

from parade_risk.processing.window import (
    calendar_distance,
    filter_window,
    recent_history,
    same_date,
    year_range,
    yearly_means,
)


def test_calendar_distance_wraps_new_year():
    assert calendar_distance(date(2019, 12, 30), 1, 2) == 3
    assert calendar_distance(date(2020, 1, 5), 12, 31) == 5


def test_feb_29_target_in_common_year():
    assert calendar_distance(date(2021, 2, 28), 2, 29) == 0


def test_filter_window_keeps_every_year(sample_of):
    sample = sample_of(
        [
            {"date": date(2018, 7, 1), "temperature_max": 1.0},
            {"date": date(2019, 7, 11), "temperature_max": 2.0},
            {"date": date(2020, 7, 12), "temperature_max": 3.0},
            {"date": date(2021, 6, 27), "temperature_max": 4.0},
        ]
    )
    window = filter_window(sample, date(2025, 7, 4), 7)
    assert window.values("temperature_max") == [1.0, 2.0, 4.0]


def test_same_date_and_year_range(july_sample):
    subset = same_date(july_sample, 7, 4)
    assert len(subset) == 20
    assert year_range(subset) == (2005, 2024)
    assert year_range(same_date(july_sample, 1, 1)) is None


def test_yearly_means_skip_absent_values(sample_of):
    sample = sample_of(
        [
            {"date": date(2020, 7, 3), "precipitation": 2.0},
            {"date": date(2020, 7, 4), "precipitation": 4.0},
            {"date": date(2021, 7, 4), "temperature_max": 30.0},
            {"date": date(2022, 7, 4), "precipitation": 0.0},
        ]
    )
    means = yearly_means(sample, "precipitation")
    assert means.to_dict() == {2020: 3.0, 2022: 0.0}


def test_yearly_means_empty(sample_of):
    assert yearly_means(sample_of([]), "humidity").empty


def test_same_date_feb_29_uses_feb_28_in_common_years(sample_of):
    sample = sample_of(
        [
            {"date": date(2019, 2, 28), "temperature_max": 1.0},
            {"date": date(2020, 2, 28), "temperature_max": 2.0},
            {"date": date(2020, 2, 29), "temperature_max": 3.0},
            {"date": date(2021, 2, 28), "temperature_max": 4.0},
            {"date": date(2021, 3, 1), "temperature_max": 5.0},
        ]
    )
    subset = same_date(sample, 2, 29)
    assert [r.date for r in subset] == [date(2019, 2, 28), date(2020, 2, 29), date(2021, 2, 28)]


def test_recent_history_drops_old_years(july_sample):
    trimmed = recent_history(july_sample, 10, reference_year=2025)
    assert year_range(trimmed) == (2015, 2024)
    assert len(recent_history(july_sample, 20, reference_year=2025)) == len(july_sample)
