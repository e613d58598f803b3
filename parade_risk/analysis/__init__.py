"""Statistical analysis routines: distributions, probabilities, trends, heat index, event risk."""

from parade_risk.analysis.confidence import confidence_interval, mean_interval, z_score
from parade_risk.analysis.health import discomfort_probability, heat_index
from parade_risk.analysis.probabilities import probability_of, threshold_probabilities
from parade_risk.analysis.risk import (
    observation_from_sample,
    rank_alternative_dates,
    score_event,
    score_event_by_key,
)
from parade_risk.analysis.statistics import (
    correlation,
    precipitation_summary,
    summarize,
    wind_summary,
)
from parade_risk.analysis.trends import (
    climate_trend,
    climate_trends,
    linear_regression,
    overall_pattern,
    yearly_trends,
)

__all__ = [
    "confidence_interval",
    "mean_interval",
    "z_score",
    "discomfort_probability",
    "heat_index",
    "probability_of",
    "threshold_probabilities",
    "observation_from_sample",
    "rank_alternative_dates",
    "score_event",
    "score_event_by_key",
    "correlation",
    "precipitation_summary",
    "summarize",
    "wind_summary",
    "climate_trend",
    "climate_trends",
    "linear_regression",
    "overall_pattern",
    "yearly_trends",
]
