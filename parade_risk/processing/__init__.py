"""Processing utilities: record normalization, calendar windows, yearly aggregation."""

from parade_risk.processing.normalize import (
    RecordNormalizationError,
    normalize_record,
    normalize_records,
)
from parade_risk.processing.window import (
    filter_window,
    recent_history,
    same_date,
    year_range,
    yearly_means,
)

__all__ = [
    "RecordNormalizationError",
    "normalize_record",
    "normalize_records",
    "filter_window",
    "recent_history",
    "same_date",
    "year_range",
    "yearly_means",
]
