"""Weighted multi-factor risk scoring for outdoor event types.

A profile names the factors that matter for an event (rain, wind, temperature and
optionally visibility and storm), each with a weight and a trigger threshold or comfort
range. A triggered factor contributes ``factor_risk * weight``; factors within limits
contribute nothing. Individual factor risks are capped at 100, the weighted total is
not, so several extreme factors together can push ``total_risk`` above 100. Display
layers clamp it when drawing.

Weights are used as given and are not normalised to sum to 1.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping, Optional

from parade_risk.analysis.outdoor import visibility_penalty
from parade_risk.models import (
    EventProfile,
    FactorRisk,
    FactorSpec,
    Observation,
    Recommendation,
    ResultStatus,
    RiskResult,
    Sample,
    is_present,
)
from parade_risk.processing.window import filter_window


logger = logging.getLogger(__name__)

TEMPERATURE_RISK_SCALE = 10.0
IDEAL_BELOW = 30
ACCEPTABLE_BELOW = 60
MIN_CONFIDENCE = 60
CONFIDENCE_PER_RISK = 0.3


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def factor_status(risk: float) -> str:
    if risk > 70:
        return "High Risk"
    if risk > 40:
        return "Medium Risk"
    return "Low Risk"


def recommend(total_risk: float) -> Recommendation:
    if total_risk < IDEAL_BELOW:
        return Recommendation.IDEAL
    if total_risk < ACCEPTABLE_BELOW:
        return Recommendation.ACCEPTABLE
    return Recommendation.NOT_RECOMMENDED


def _exceedance_risk(value: float, threshold: float) -> float:
    if threshold <= 0:
        return 100.0
    return min(100.0, 100.0 * value / threshold)


def _assess(
    name: str,
    spec: FactorSpec,
    obs: Observation,
    temperature_scale: float,
) -> Optional[tuple[str, float, float, str]]:
    """Return ``(label, risk, value, unit)`` for a triggered factor, else ``None``."""
    if name == "rain":
        value, threshold = obs.precipitation, spec.threshold
        if is_present(value) and is_present(threshold) and value > threshold:
            return "Precipitation", _exceedance_risk(value, threshold), value, "mm"
    elif name == "wind":
        value, threshold = obs.wind_speed, spec.threshold
        if is_present(value) and is_present(threshold) and value > threshold:
            return "Wind", _exceedance_risk(value, threshold), value, "km/h"
    elif name == "temp":
        value = obs.temperature
        if is_present(value) and spec.comfort_range is not None:
            low, high = spec.comfort_range
            distance = low - value if value < low else value - high
            if distance > 0:
                scale = temperature_scale if temperature_scale > 0 else TEMPERATURE_RISK_SCALE
                return "Temperature", min(100.0, 100.0 * distance / scale), value, "°C"
    elif name == "visibility":
        value = obs.visibility_score
        if is_present(value) and value < 100:
            return "Visibility", 100.0 - max(0.0, value), value, "score"
    elif name == "storm":
        value = obs.storm_probability
        if is_present(value) and value > 0:
            return "Storm", min(100.0, value), value, "%"
    else:
        logger.debug("Ignoring unknown risk factor %r", name)
    return None


def _valid_factor(name: str, spec: FactorSpec) -> bool:
    if not isinstance(spec, FactorSpec) or not is_present(spec.weight):
        return False
    if name in ("rain", "wind"):
        return is_present(spec.threshold)
    if name == "temp":
        return spec.comfort_range is not None and all(is_present(b) for b in spec.comfort_range)
    return spec.threshold is None or is_present(spec.threshold)


def score_event(
    observation: Optional[Observation],
    profile: Optional[EventProfile],
    temperature_scale: float = TEMPERATURE_RISK_SCALE,
) -> RiskResult:
    """Score one observation against an event profile.

    Total for every input: a missing profile, or one with a non-finite weight, threshold
    or comfort bound, gives an ``Invalid Event`` result and a missing (or entirely
    empty) observation a ``No Data`` result, both with zero risk.
    """
    if profile is None:
        return RiskResult(recommendation=Recommendation.INVALID_EVENT, status=ResultStatus.INVALID_INPUT)
    invalid = [name for name, spec in profile.factors.items() if not _valid_factor(name, spec)]
    if invalid:
        logger.warning("Event profile %r has invalid factors: %s", profile.key, ", ".join(invalid))
        return RiskResult(
            recommendation=Recommendation.INVALID_EVENT,
            event_key=profile.key,
            event_name=profile.name,
            status=ResultStatus.INVALID_INPUT,
        )
    empty = not isinstance(observation, Observation) or not any(
        is_present(getattr(observation, name))
        for name in ("temperature", "precipitation", "wind_speed", "humidity", "visibility_score", "storm_probability")
    )
    if empty:
        return RiskResult(event_key=profile.key, event_name=profile.name)

    total = 0.0
    factors = []
    for name, spec in profile.factors.items():
        assessed = _assess(name, spec, observation, temperature_scale)
        if assessed is None:
            continue
        label, risk, value, unit = assessed
        total += risk * spec.weight
        factors.append(
            FactorRisk(
                factor=label,
                risk=round_half_up(risk),
                value=value,
                unit=unit,
                status=factor_status(risk),
                weight=spec.weight,
            )
        )

    total_risk = round_half_up(total)
    confidence = max(MIN_CONFIDENCE, 100 - CONFIDENCE_PER_RISK * total_risk)
    return RiskResult(
        total_risk=total_risk,
        recommendation=recommend(total),
        confidence=round_half_up(confidence),
        factors=tuple(factors),
        event_key=profile.key,
        event_name=profile.name,
        status=ResultStatus.OK,
    )


def score_event_by_key(
    observation: Optional[Observation],
    event_key: str,
    catalog: Mapping[str, EventProfile],
    temperature_scale: float = TEMPERATURE_RISK_SCALE,
) -> RiskResult:
    """Look up ``event_key`` in the catalog and score it; unknown keys are invalid."""
    profile = catalog.get(event_key) if isinstance(event_key, str) else None
    if profile is None:
        logger.warning("Unknown event type %r", event_key)
    return score_event(observation, profile, temperature_scale)


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def observation_from_sample(sample: Sample) -> Optional[Observation]:
    """Collapse a sample into one mean observation (absent fields stay absent)."""
    if not len(sample):
        return None
    humidity = _mean(sample.values("humidity"))
    precipitation = _mean(sample.values("precipitation"))
    wind = _mean(sample.values("wind_speed"))
    visibility = None
    if any(v is not None for v in (humidity, precipitation, wind)):
        visibility = max(0, 100 - visibility_penalty(humidity, precipitation, wind))
    return Observation(
        temperature=_mean(sample.values("temperature_avg")),
        precipitation=precipitation,
        wind_speed=wind,
        humidity=humidity,
        visibility_score=visibility,
    )


@dataclass(frozen=True)
class AlternativeDate:
    date: date
    risk: RiskResult
    observation: Observation
    data_points: int


def rank_alternative_dates(
    sample: Sample,
    target: date,
    profile: Optional[EventProfile],
    days_range: int = 14,
    window_days: int = 7,
    top_n: int = 5,
    temperature_scale: float = TEMPERATURE_RISK_SCALE,
) -> list[AlternativeDate]:
    """Lowest-risk dates within ±``days_range`` of ``target`` (target excluded).

    Each candidate is scored from the mean conditions of the historical records within
    ±``window_days`` of its calendar date. Candidates without data are skipped; ties are
    broken by closeness to the target.
    """
    if profile is None:
        return []
    candidates = []
    for offset in range(-days_range, days_range + 1):
        if offset == 0:
            continue
        day = target + timedelta(days=offset)
        window = filter_window(sample, day, window_days)
        observation = observation_from_sample(window)
        if observation is None:
            continue
        risk = score_event(observation, profile, temperature_scale)
        if risk.status is not ResultStatus.OK:
            continue
        candidates.append((risk.total_risk, abs(offset), day, AlternativeDate(day, risk, observation, len(window))))
    candidates.sort(key=lambda c: c[:3])
    return [c[3] for c in candidates[:top_n]]
