"""Threshold-crossing probabilities for the configured hazards."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

from parade_risk.analysis.health import DISCOMFORT_MIN_TEMPERATURE_C, discomfort_probability
from parade_risk.models import (
    Direction,
    ProbabilityResult,
    ResultStatus,
    Sample,
    ThresholdSet,
    is_present,
)
from parade_risk.processing.normalize import present


# Hazard -> (record field, comparison). very_uncomfortable is evaluated on the heat index.
HAZARD_FIELDS: Dict[str, tuple[str, Direction]] = {
    "very_hot": ("temperature_max", Direction.ABOVE),
    "very_cold": ("temperature_min", Direction.BELOW),
    "very_windy": ("wind_speed", Direction.ABOVE),
    "very_wet": ("precipitation", Direction.ABOVE),
}


def probability_of(
    values: Iterable[Optional[float]],
    threshold: float,
    direction: Union[Direction, str] = Direction.ABOVE,
) -> ProbabilityResult:
    """Share of present values strictly above (or below) ``threshold``.

    Empty input gives a zero ``no_data`` result; a non-finite threshold or an unknown
    direction gives an ``invalid_input`` result. Never raises.
    """
    try:
        direction = Direction(direction)
    except ValueError:
        return ProbabilityResult.invalid()
    if not is_present(threshold):
        return ProbabilityResult.invalid()

    data = present(values)
    if not data:
        return ProbabilityResult.no_data()

    if direction is Direction.ABOVE:
        count = sum(1 for v in data if v > threshold)
    else:
        count = sum(1 for v in data if v < threshold)
    return ProbabilityResult(
        percentage=100.0 * count / len(data),
        count=count,
        total=len(data),
        status=ResultStatus.OK,
    )


def hazard_probability(
    sample: Sample,
    hazard: str,
    threshold: float,
    discomfort_min_temperature: float = DISCOMFORT_MIN_TEMPERATURE_C,
) -> ProbabilityResult:
    """Probability of one named hazard over a sample."""
    if hazard == "very_uncomfortable":
        return discomfort_probability(sample, threshold, discomfort_min_temperature)
    if hazard not in HAZARD_FIELDS:
        return ProbabilityResult.invalid()
    field, direction = HAZARD_FIELDS[hazard]
    return probability_of(sample.values(field), threshold, direction)


def threshold_probabilities(
    sample: Sample,
    thresholds: ThresholdSet,
    discomfort_min_temperature: float = DISCOMFORT_MIN_TEMPERATURE_C,
) -> Dict[str, ProbabilityResult]:
    """Probabilities of every hazard in ``thresholds``, keyed by hazard name."""
    return {
        hazard: hazard_probability(sample, hazard, threshold, discomfort_min_temperature)
        for hazard, threshold in thresholds.as_dict().items()
    }
