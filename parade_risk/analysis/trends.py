"""Year-over-year regressions and decade-over-decade hazard trends."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Mapping, Optional, Sequence

import numpy as np
from scipy import stats

from parade_risk.analysis.health import DISCOMFORT_MIN_TEMPERATURE_C
from parade_risk.analysis.probabilities import hazard_probability
from parade_risk.models import (
    FIELDS,
    ClimateTrend,
    ProbabilityResult,
    ResultStatus,
    Sample,
    ThresholdSet,
    TrendClass,
    TrendDirection,
    TrendResult,
    is_present,
)
from parade_risk.processing.window import yearly_means


SIGNIFICANT_SLOPE = 0.1
RECENT_YEARS = 10
OLDER_YEARS = 20
CHANGE_INCREASE = 5.0
CHANGE_SIGNIFICANT = 15.0


@dataclass(frozen=True)
class Regression:
    slope: float = 0.0
    intercept: float = 0.0
    correlation: float = 0.0


def linear_regression(xs: Sequence[float], ys: Sequence[float]) -> Regression:
    """Ordinary least squares fit of ``ys`` on ``xs``.

    Pairs with an absent value on either side are skipped. With fewer than two pairs,
    or when every x is the same, the fit is flat: slope 0 through the mean of y.
    """
    pairs = [(x, y) for x, y in zip(xs, ys) if is_present(x) and is_present(y)]
    if not pairs:
        return Regression()
    x = np.array([p[0] for p in pairs], dtype=float)
    y = np.array([p[1] for p in pairs], dtype=float)
    if x.size < 2 or np.ptp(x) == 0:
        return Regression(intercept=float(y.mean()))
    fit = stats.linregress(x, y)
    r = float(fit.rvalue) if np.isfinite(fit.rvalue) else 0.0
    return Regression(slope=float(fit.slope), intercept=float(fit.intercept), correlation=r)


def split_decades(
    sample: Sample,
    reference_year: Optional[int] = None,
    recent_years: int = RECENT_YEARS,
    older_years: int = OLDER_YEARS,
) -> tuple[Sample, Sample]:
    """Split into the recent decade and the one before it.

    Recent: ``year >= reference_year - recent_years``.
    Older: ``reference_year - older_years <= year < reference_year - recent_years``.
    """
    now = reference_year or date.today().year
    cutoff = now - recent_years
    floor = now - older_years
    recent = sample.where(lambda r: r.year >= cutoff)
    older = sample.where(lambda r: floor <= r.year < cutoff)
    return recent, older


def percent_change(recent: float, older: float) -> float:
    """Relative change in percent; 0 when the older value is 0."""
    if older == 0:
        return 0.0
    return 100.0 * (recent - older) / abs(older)


def classify_change(
    change_percent: float,
    increase: float = CHANGE_INCREASE,
    significant: float = CHANGE_SIGNIFICANT,
) -> TrendClass:
    if change_percent > significant:
        return TrendClass.SIGNIFICANTLY_INCREASING
    if change_percent > increase:
        return TrendClass.INCREASING
    if change_percent < -significant:
        return TrendClass.SIGNIFICANTLY_DECREASING
    if change_percent < -increase:
        return TrendClass.DECREASING
    return TrendClass.STABLE


def decade_change(
    recent: ProbabilityResult,
    older: ProbabilityResult,
    increase: float = CHANGE_INCREASE,
    significant: float = CHANGE_SIGNIFICANT,
) -> ClimateTrend:
    """Classify the change between two probabilities of the same hazard."""
    change = percent_change(recent.percentage, older.percentage)
    return ClimateTrend(
        recent_percentage=recent.percentage,
        older_percentage=older.percentage,
        change_percent=change,
        classification=classify_change(change, increase, significant),
        status=ResultStatus.OK,
    )


def climate_trend(
    sample: Sample,
    hazard: str,
    threshold: float,
    reference_year: Optional[int] = None,
    recent_years: int = RECENT_YEARS,
    older_years: int = OLDER_YEARS,
    increase: float = CHANGE_INCREASE,
    significant: float = CHANGE_SIGNIFICANT,
    discomfort_min_temperature: float = DISCOMFORT_MIN_TEMPERATURE_C,
) -> ClimateTrend:
    """Decade-over-decade trend of one hazard's probability.

    An empty decade on either side gives a stable ``no_data`` result.
    """
    if not is_present(threshold):
        return ClimateTrend(status=ResultStatus.INVALID_INPUT)
    recent, older = split_decades(sample, reference_year, recent_years, older_years)
    if not len(recent) or not len(older):
        return ClimateTrend()
    recent_prob = hazard_probability(recent, hazard, threshold, discomfort_min_temperature)
    older_prob = hazard_probability(older, hazard, threshold, discomfort_min_temperature)
    if ResultStatus.INVALID_INPUT in (recent_prob.status, older_prob.status):
        return ClimateTrend(status=ResultStatus.INVALID_INPUT)
    return decade_change(recent_prob, older_prob, increase, significant)


def climate_trends(
    sample: Sample,
    thresholds: ThresholdSet,
    reference_year: Optional[int] = None,
    recent_years: int = RECENT_YEARS,
    older_years: int = OLDER_YEARS,
    increase: float = CHANGE_INCREASE,
    significant: float = CHANGE_SIGNIFICANT,
    discomfort_min_temperature: float = DISCOMFORT_MIN_TEMPERATURE_C,
) -> Dict[str, ClimateTrend]:
    return {
        hazard: climate_trend(
            sample,
            hazard,
            threshold,
            reference_year=reference_year,
            recent_years=recent_years,
            older_years=older_years,
            increase=increase,
            significant=significant,
            discomfort_min_temperature=discomfort_min_temperature,
        )
        for hazard, threshold in thresholds.as_dict().items()
    }


def _direction(slope: float) -> TrendDirection:
    if slope > 0:
        return TrendDirection.INCREASING
    if slope < 0:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def yearly_trend(
    sample: Sample,
    field: str,
    reference_year: Optional[int] = None,
    significance_slope: float = SIGNIFICANT_SLOPE,
    recent_years: int = RECENT_YEARS,
    older_years: int = OLDER_YEARS,
) -> TrendResult:
    """Linear trend of a field's yearly mean, plus its decade-over-decade change."""
    means = yearly_means(sample, field)
    if len(means) < 2:
        return TrendResult()

    fit = linear_regression(list(means.index), list(means.values))
    recent, older = split_decades(sample, reference_year, recent_years, older_years)
    recent_mean = _mean(recent.values(field))
    older_mean = _mean(older.values(field))
    change = (
        percent_change(recent_mean, older_mean)
        if recent_mean is not None and older_mean is not None
        else 0.0
    )
    return TrendResult(
        slope=fit.slope,
        intercept=fit.intercept,
        correlation=fit.correlation,
        direction=_direction(fit.slope),
        significance="significant" if abs(fit.slope) > significance_slope else "minimal",
        change_percent=change,
        status=ResultStatus.OK,
    )


def yearly_trends(
    sample: Sample,
    fields: Iterable[str] = FIELDS,
    reference_year: Optional[int] = None,
    significance_slope: float = SIGNIFICANT_SLOPE,
    recent_years: int = RECENT_YEARS,
    older_years: int = OLDER_YEARS,
) -> Dict[str, TrendResult]:
    return {
        name: yearly_trend(
            sample,
            name,
            reference_year=reference_year,
            significance_slope=significance_slope,
            recent_years=recent_years,
            older_years=older_years,
        )
        for name in fields
    }


def overall_pattern(
    trends: Mapping[str, TrendResult],
    temperature_field: str = "temperature_avg",
) -> str:
    """Summarize temperature and precipitation directions in one label."""
    temp = trends.get(temperature_field)
    precip = trends.get("precipitation")
    if temp is None or precip is None:
        return "mixed_patterns"
    warming = {
        TrendDirection.INCREASING: "warming",
        TrendDirection.DECREASING: "cooling",
    }.get(temp.direction)
    wetting = {
        TrendDirection.INCREASING: "wetter",
        TrendDirection.DECREASING: "drier",
    }.get(precip.direction)
    if warming and wetting:
        return f"{warming}_and_{wetting}"
    return "mixed_patterns"
