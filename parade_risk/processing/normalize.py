"""Record normalizer: turn loosely-typed provider entries into a ``Sample``.

Input entries are mappings using the canonical field names of ``DailyRecord`` (the
provider adapters in ``parade_risk.data_access`` produce them). Each value is cleaned
independently:

- the provider's missing-value sentinel (NASA POWER uses -999), ``None``, NaN,
  infinities and non-numeric values become ``None`` (absent), never 0
- negative precipitation or wind speed and humidity outside 0-100 % are physically
  impossible and also become absent
- ``temperature_avg`` is derived as the mean of max and min when it is absent

A record whose date cannot be parsed is dropped on its own; a record with no present
field is dropped because it carries nothing to analyse.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from parade_risk.models import FIELDS, DailyRecord, Sample, is_present


logger = logging.getLogger(__name__)

NASA_POWER_SENTINEL = -999.0

_COMPACT_DATE = re.compile(r"^\d{8}$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ].*)?$")

_NON_NEGATIVE = ("precipitation", "wind_speed")


class RecordNormalizationError(ValueError):
    """Raised for a single raw entry that cannot be turned into a record."""


def parse_date(value: Any) -> date:
    """Parse ISO (``2020-07-04``), compact (``20200704``) or date-like values.

    Partial dates such as ``"2020"`` or ``"July"`` are rejected.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise RecordNormalizationError(f"unparseable date: {value!r}")
    text = value.strip()
    if _COMPACT_DATE.match(text):
        fmt = "%Y%m%d"
    elif _ISO_DATE.match(text):
        fmt = "ISO8601"
    else:
        raise RecordNormalizationError(f"unparseable date: {value!r}")
    try:
        parsed = pd.to_datetime(text, format=fmt)
    except (ValueError, OverflowError) as exc:
        raise RecordNormalizationError(f"unparseable date: {value!r}") from exc
    if pd.isna(parsed):
        raise RecordNormalizationError(f"unparseable date: {value!r}")
    return parsed.date()


def clean_value(value: Any, sentinel: Optional[float] = NASA_POWER_SENTINEL) -> Optional[float]:
    """Return ``value`` as a float, or ``None`` when it is missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    if sentinel is not None and math.isclose(number, sentinel):
        return None
    return number


def normalize_record(
    entry: Mapping[str, Any],
    sentinel: Optional[float] = NASA_POWER_SENTINEL,
) -> Optional[DailyRecord]:
    """Normalize one raw entry; returns ``None`` when the record has no usable field.

    Raises:
        RecordNormalizationError: if the entry has no parseable ``date``.
    """
    if not isinstance(entry, Mapping):
        raise RecordNormalizationError(f"entry is not a mapping: {type(entry).__name__}")
    record_date = parse_date(entry.get("date"))

    values = {name: clean_value(entry.get(name), sentinel) for name in FIELDS}
    for name in _NON_NEGATIVE:
        if values[name] is not None and values[name] < 0:
            values[name] = None
    humidity = values["humidity"]
    if humidity is not None and not 0 <= humidity <= 100:
        values["humidity"] = None

    if (
        values["temperature_avg"] is None
        and values["temperature_max"] is not None
        and values["temperature_min"] is not None
    ):
        values["temperature_avg"] = (values["temperature_max"] + values["temperature_min"]) / 2

    record = DailyRecord(date=record_date, **values)
    return record if record.has_data() else None


def normalize_records(
    entries: Iterable[Mapping[str, Any]],
    sentinel: Optional[float] = NASA_POWER_SENTINEL,
) -> Sample:
    """Normalize a raw provider feed into a date-ordered ``Sample``.

    Bad entries are dropped one at a time; the batch never fails as a whole.
    """
    records: list[DailyRecord] = []
    unparseable = 0
    empty = 0
    for entry in entries:
        try:
            record = normalize_record(entry, sentinel)
        except RecordNormalizationError as exc:
            unparseable += 1
            logger.debug("Dropping raw entry: %s", exc)
            continue
        if record is None:
            empty += 1
            continue
        records.append(record)

    logger.info(
        "Normalized %d records (%d unparseable, %d without data)",
        len(records),
        unparseable,
        empty,
    )
    return Sample(tuple(records))


def present(values: Iterable[Any]) -> list[float]:
    """Keep only finite numeric values."""
    return [float(v) for v in values if is_present(v)]
