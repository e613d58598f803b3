"""Normal-approximation confidence intervals."""

from __future__ import annotations

import math
from typing import Dict, Mapping

from scipy import stats

from parade_risk.models import ConfidenceInterval, ProbabilityResult, Statistics


Z_95 = 1.96


def z_score(confidence_level: float = 0.95) -> float:
    """Two-sided normal critical value, rounded to table precision (0.95 -> 1.96)."""
    if not 0 < confidence_level < 1:
        raise ValueError(f"confidence level must be in (0, 1), got {confidence_level}")
    return round(float(stats.norm.ppf(0.5 + confidence_level / 2)), 2)


def confidence_interval(percentage: float, sample_size: int, z: float = Z_95) -> ConfidenceInterval:
    """Wald interval around a percentage, clamped to [0, 100].

    ``sample_size == 0`` yields ``(0, 0)`` instead of dividing by zero.
    """
    if sample_size <= 0 or not math.isfinite(percentage):
        return ConfidenceInterval(0.0, 0.0)
    p = min(max(percentage / 100.0, 0.0), 1.0)
    margin = z * math.sqrt(p * (1 - p) / sample_size)
    return ConfidenceInterval(
        lower=max(0.0, (p - margin) * 100.0),
        upper=min(100.0, (p + margin) * 100.0),
    )


def probability_intervals(
    probabilities: Mapping[str, ProbabilityResult],
    z: float = Z_95,
) -> Dict[str, ConfidenceInterval]:
    """Interval for each probability, using that probability's own ``total`` as n."""
    return {
        name: confidence_interval(result.percentage, result.total, z)
        for name, result in probabilities.items()
    }


def mean_interval(summary: Statistics, z: float = Z_95) -> ConfidenceInterval | None:
    """Value range ``mean ± z * std_dev`` of a summarized sample (``None`` when empty)."""
    if summary.mean is None or summary.std_dev is None:
        return None
    spread = z * summary.std_dev
    return ConfidenceInterval(lower=summary.mean - spread, upper=summary.mean + spread)
