"""Outdoor-condition scores for crowds, visibility and event equipment.

Each score works from the mean conditions of a same-date sample. Means are taken over
present values only; humidity defaults to 50 % when the sample has none.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from parade_risk.models import Sample


DEFAULT_HUMIDITY = 50.0


@dataclass(frozen=True)
class ConditionScore:
    score: int
    level: str
    factors: Dict[str, Optional[float]] = field(default_factory=dict)


@dataclass(frozen=True)
class EquipmentRisk:
    risk_score: int
    level: str
    recommendations: tuple[str, ...] = ()
    factors: Dict[str, Optional[float]] = field(default_factory=dict)


def _mean(values: list[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def _score_level(score: float) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Poor"


def visibility_penalty(
    humidity: Optional[float],
    precipitation: Optional[float],
    wind_speed: Optional[float],
) -> int:
    """Points lost from a perfect visibility score of 100."""
    humidity = DEFAULT_HUMIDITY if humidity is None else humidity
    penalty = 0
    if humidity > 90:
        penalty += 30
    elif humidity > 80:
        penalty += 15

    if precipitation is not None:
        if precipitation > 5:
            penalty += 40
        elif precipitation > 2:
            penalty += 20
        elif precipitation > 0.5:
            penalty += 10

    if wind_speed is not None:
        if wind_speed > 40:
            penalty += 20
        elif wind_speed < 5:  # stagnant air
            penalty += 10
    return penalty


def visibility_score(sample: Sample) -> ConditionScore:
    humidity = _mean(sample.values("humidity"))
    precipitation = _mean(sample.values("precipitation"))
    wind = _mean(sample.values("wind_speed"))
    score = max(0, 100 - visibility_penalty(humidity, precipitation, wind))
    return ConditionScore(
        score=score,
        level=_score_level(score),
        factors={"humidity": humidity, "precipitation": precipitation, "wind_speed": wind},
    )


def crowd_safety_score(sample: Sample) -> ConditionScore:
    """Crowd comfort: 18-28 °C, 30-70 % humidity and under 20 km/h wind score 100."""
    temp = _mean(sample.values("temperature_avg"))
    humidity = _mean(sample.values("humidity"))
    wind = _mean(sample.values("wind_speed"))
    effective_humidity = DEFAULT_HUMIDITY if humidity is None else humidity

    score = 100
    if temp is not None:
        if temp < 5 or temp > 40:
            score -= 50
        elif temp < 10 or temp > 35:
            score -= 30
        elif temp < 15 or temp > 30:
            score -= 15

    if effective_humidity > 90 or effective_humidity < 20:
        score -= 20
    elif effective_humidity > 80 or effective_humidity < 30:
        score -= 10

    if wind is not None:
        if wind > 50:
            score -= 40
        elif wind > 30:
            score -= 20
        elif wind > 20:
            score -= 10

    score = max(0, score)
    return ConditionScore(
        score=score,
        level=_score_level(score),
        factors={"temperature": temp, "humidity": effective_humidity, "wind_speed": wind},
    )


def _equipment_level(risk: int) -> str:
    if risk < 20:
        return "Low"
    if risk < 50:
        return "Moderate"
    if risk < 80:
        return "High"
    return "Extreme"


def equipment_recommendations(risk: int, avg_precip: float, avg_wind: float) -> list[str]:
    recommendations = []
    if avg_precip > 1:
        recommendations += ["Waterproof covers for all equipment", "Elevated platforms for electronics"]
    if avg_wind > 20:
        recommendations += ["Secure all loose equipment", "Use weighted bases for stands"]
    if risk > 50:
        recommendations += ["Backup equipment on standby", "Indoor backup venue recommended"]
    if avg_precip > 2 or avg_wind > 30:
        recommendations += ["Professional weather monitoring", "Emergency evacuation plan"]
    return recommendations


def equipment_risk(sample: Sample) -> EquipmentRisk:
    """Rain and wind damage risk to stages, sound systems and decorations (0-100)."""
    precip = sample.values("precipitation")
    wind = sample.values("wind_speed")
    avg_precip = _mean(precip) or 0.0
    avg_wind = _mean(wind) or 0.0
    max_precip = max(precip, default=0.0)
    max_wind = max(wind, default=0.0)

    risk = 0
    if max_precip > 10:
        risk += 50
    elif max_precip > 5:
        risk += 30
    elif avg_precip > 2:
        risk += 20
    elif avg_precip > 0.5:
        risk += 10

    if max_wind > 60:
        risk += 40
    elif max_wind > 40:
        risk += 25
    elif avg_wind > 25:
        risk += 15
    elif avg_wind > 15:
        risk += 5

    risk = min(100, risk)
    return EquipmentRisk(
        risk_score=risk,
        level=_equipment_level(risk),
        recommendations=tuple(equipment_recommendations(risk, avg_precip, avg_wind)),
        factors={
            "average_precipitation": _mean(precip),
            "max_precipitation": max(precip) if precip else None,
            "average_wind_speed": _mean(wind),
            "max_wind_speed": max(wind) if wind else None,
        },
    )
