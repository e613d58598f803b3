"""End-to-end analyses for one location and one target calendar date.

``analyze_probabilities`` answers "how likely is each hazard on this date, and is that
changing?" over the ±N-day window sample. ``analyze_event_date`` narrows to the exact
calendar date across years and adds distribution summaries, outdoor-condition scores
and the event risk score for a chosen event profile.

Both are pure functions of their inputs: fetching the sample is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from parade_risk.analysis.confidence import mean_interval, probability_intervals, z_score
from parade_risk.analysis.outdoor import (
    ConditionScore,
    EquipmentRisk,
    crowd_safety_score,
    equipment_risk,
    visibility_score,
)
from parade_risk.analysis.probabilities import threshold_probabilities
from parade_risk.analysis.risk import observation_from_sample, score_event
from parade_risk.analysis.statistics import (
    PrecipitationSummary,
    WindSummary,
    correlation,
    precipitation_summary,
    summarize,
    wind_summary,
)
from parade_risk.analysis.trends import climate_trends, overall_pattern, yearly_trends
from parade_risk.models import (
    FIELDS,
    AnalysisSettings,
    ClimateTrend,
    ConfidenceInterval,
    EventProfile,
    ProbabilityResult,
    Reliability,
    ResultStatus,
    RiskResult,
    Sample,
    Statistics,
    ThresholdSet,
    TrendResult,
)
from parade_risk.processing.window import same_date, year_range


logger = logging.getLogger(__name__)


@dataclass
class ProbabilityAnalysis:
    probabilities: Dict[str, ProbabilityResult]
    confidence_intervals: Dict[str, ConfidenceInterval]
    trends: Dict[str, TrendResult]
    climate_trends: Dict[str, ClimateTrend]
    statistics: Dict[str, Statistics]
    total_days: int
    year_range: Optional[tuple[int, int]]
    invalid_thresholds: list[str] = field(default_factory=list)
    status: ResultStatus = ResultStatus.OK


def analyze_probabilities(
    sample: Sample,
    thresholds: ThresholdSet,
    settings: Optional[AnalysisSettings] = None,
    reference_year: Optional[int] = None,
) -> ProbabilityAnalysis:
    """Hazard probabilities, their intervals and trends over a window sample.

    An empty sample still yields a complete result: every probability is 0 of 0 and the
    status is ``no_data``. Non-finite thresholds mark only their own hazard invalid.
    """
    settings = settings or AnalysisSettings()
    reference_year = reference_year or date.today().year
    invalid = thresholds.invalid_fields()
    if invalid:
        logger.warning("Ignoring non-finite thresholds: %s", ", ".join(invalid))

    probabilities = threshold_probabilities(sample, thresholds, settings.discomfort_min_temperature)
    intervals = probability_intervals(probabilities, z_score(settings.confidence_level))
    trends = yearly_trends(
        sample,
        reference_year=reference_year,
        significance_slope=settings.trend_significance_slope,
        recent_years=settings.recent_years,
        older_years=settings.older_years,
    )
    decade_trends = climate_trends(
        sample,
        thresholds,
        reference_year=reference_year,
        recent_years=settings.recent_years,
        older_years=settings.older_years,
        increase=settings.change_increase,
        significant=settings.change_significant,
        discomfort_min_temperature=settings.discomfort_min_temperature,
    )

    if not len(sample):
        status = ResultStatus.NO_DATA
    elif invalid:
        status = ResultStatus.INVALID_INPUT
    else:
        status = ResultStatus.OK
    return ProbabilityAnalysis(
        probabilities=probabilities,
        confidence_intervals=intervals,
        trends=trends,
        climate_trends=decade_trends,
        statistics={name: summarize(sample.values(name)) for name in FIELDS},
        total_days=len(sample),
        year_range=year_range(sample),
        invalid_thresholds=invalid,
        status=status,
    )


@dataclass
class EventDateAnalysis:
    sample_size: int
    reliability: Reliability
    year_range: Optional[tuple[int, int]] = None
    temperature: Optional[Statistics] = None
    precipitation: Optional[PrecipitationSummary] = None
    wind: Optional[WindSummary] = None
    intervals: Dict[str, Optional[ConfidenceInterval]] = field(default_factory=dict)
    trends: Dict[str, TrendResult] = field(default_factory=dict)
    pattern: Optional[str] = None
    wind_precipitation_correlation: Optional[float] = None
    visibility: Optional[ConditionScore] = None
    crowd_safety: Optional[ConditionScore] = None
    equipment: Optional[EquipmentRisk] = None
    event_risk: Optional[RiskResult] = None
    status: ResultStatus = ResultStatus.OK


def reliability_for(size: int, settings: AnalysisSettings) -> Reliability:
    if size >= settings.high_reliability_size:
        return Reliability.HIGH
    if size >= settings.min_sample_size:
        return Reliability.MODERATE
    return Reliability.LOW


def analyze_event_date(
    sample: Sample,
    event_date: date,
    profile: Optional[EventProfile] = None,
    settings: Optional[AnalysisSettings] = None,
    reference_year: Optional[int] = None,
) -> EventDateAnalysis:
    """Same-calendar-date analysis across years for planning an outdoor event.

    Fewer same-date years than ``settings.min_sample_size`` returns a low-reliability
    result with every section empty.
    """
    settings = settings or AnalysisSettings()
    subset = same_date(sample, event_date.month, event_date.day)
    size = len(subset)
    if size < settings.min_sample_size:
        logger.warning(
            "Only %d same-date records for %s (need %d); statistics withheld",
            size,
            event_date.isoformat(),
            settings.min_sample_size,
        )
        return EventDateAnalysis(
            sample_size=size,
            reliability=Reliability.LOW,
            status=ResultStatus.NO_DATA if size == 0 else ResultStatus.LOW_RELIABILITY,
        )

    z = z_score(settings.confidence_level)
    temperature = summarize(subset.values("temperature_avg"))
    wind = wind_summary(subset.values("wind_speed"))
    trends = yearly_trends(
        subset,
        fields=("temperature_avg", "precipitation", "wind_speed"),
        reference_year=reference_year,
        significance_slope=settings.trend_significance_slope,
        recent_years=settings.recent_years,
        older_years=settings.older_years,
    )
    paired = [r for r in subset if r.wind_speed is not None and r.precipitation is not None]
    event_risk = None
    if profile is not None:
        event_risk = score_event(
            observation_from_sample(subset),
            profile,
            temperature_scale=settings.temperature_risk_scale,
        )

    return EventDateAnalysis(
        sample_size=size,
        reliability=reliability_for(size, settings),
        year_range=year_range(subset),
        temperature=temperature,
        precipitation=precipitation_summary(subset.values("precipitation")),
        wind=wind,
        intervals={
            "temperature": mean_interval(temperature, z),
            "wind_speed": mean_interval(wind.statistics, z),
        },
        trends=trends,
        pattern=overall_pattern(trends),
        wind_precipitation_correlation=correlation(
            [r.wind_speed for r in paired],
            [r.precipitation for r in paired],
        ),
        visibility=visibility_score(subset),
        crowd_safety=crowd_safety_score(subset),
        equipment=equipment_risk(subset),
        event_risk=event_risk,
        status=ResultStatus.OK,
    )
