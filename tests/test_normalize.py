"""Tests for record normalization."""

import logging
import math
from datetime import date

import pytest

from parade_risk.processing.normalize import (
    RecordNormalizationError,
    clean_value,
    normalize_record,
    normalize_records,
    parse_date,
)


def test_parse_date_formats():
    assert parse_date("2020-07-04") == date(2020, 7, 4)
    assert parse_date("20200704") == date(2020, 7, 4)
    assert parse_date(date(2020, 7, 4)) == date(2020, 7, 4)


@pytest.mark.parametrize(
    "raw", [None, "", "not a date", "2020-13-45", 20200704, "2020", "5", "July", "2020-07"]
)
def test_parse_date_rejects_garbage(raw):
    with pytest.raises(RecordNormalizationError):
        parse_date(raw)


def test_clean_value_treats_missing_markers_as_absent():
    assert clean_value(-999) is None
    assert clean_value(-999.0) is None
    assert clean_value(None) is None
    assert clean_value(math.nan) is None
    assert clean_value(math.inf) is None
    assert clean_value("n/a") is None
    assert clean_value(True) is None
    assert clean_value("4.5") == 4.5
    assert clean_value(-999, sentinel=None) == -999.0


def test_zero_is_a_real_value_not_missing():
    record = normalize_record({"date": "2020-07-04", "precipitation": 0, "wind_speed": 0.0})
    assert record.precipitation == 0.0
    assert record.wind_speed == 0.0


def test_absent_values_are_not_coerced_to_zero():
    record = normalize_record({"date": "2020-07-04", "temperature_max": 30, "precipitation": -999})
    assert record.precipitation is None
    assert record.wind_speed is None


def test_average_temperature_derived_from_max_and_min():
    record = normalize_record({"date": "2020-07-04", "temperature_max": 30, "temperature_min": 20})
    assert record.temperature_avg == 25.0


def test_reported_average_is_kept():
    record = normalize_record(
        {"date": "2020-07-04", "temperature_max": 30, "temperature_min": 20, "temperature_avg": 24}
    )
    assert record.temperature_avg == 24.0


def test_physically_impossible_values_dropped():
    record = normalize_record(
        {"date": "2020-07-04", "precipitation": -1, "wind_speed": -3, "humidity": 140, "temperature_max": 20}
    )
    assert record.precipitation is None
    assert record.wind_speed is None
    assert record.humidity is None


def test_record_without_any_field_is_dropped():
    assert normalize_record({"date": "2020-07-04", "precipitation": -999}) is None


def test_normalize_records_drops_bad_entries_individually(caplog):
    raw = [
        {"date": "2021-07-04", "temperature_max": 31},
        {"date": "garbage", "temperature_max": 29},
        {"date": "2020-07-04", "temperature_max": 30},
        {"date": "2019-07-04"},
        "not a mapping",
    ]
    with caplog.at_level(logging.INFO, logger="parade_risk.processing.normalize"):
        sample = normalize_records(raw)
    assert [r.date for r in sample] == [date(2020, 7, 4), date(2021, 7, 4)]
    assert "2 unparseable, 1 without data" in caplog.text


def test_custom_sentinel():
    sample = normalize_records([{"date": "2020-07-04", "humidity": 55, "wind_speed": -1}], sentinel=-1)
    assert sample.records[0].wind_speed is None
    assert sample.records[0].humidity == 55.0


def test_partial_dates_never_become_records():
    entries = [{"date": raw, "temperature_max": 30.0} for raw in ("2020", "5", "July")]
    assert len(normalize_records(entries)) == 0
