"""Tests for confidence intervals."""

import pytest

from parade_risk.analysis.confidence import (
    confidence_interval,
    mean_interval,
    probability_intervals,
    z_score,
)
from parade_risk.analysis.statistics import summarize
from parade_risk.models import ConfidenceInterval, ProbabilityResult, ResultStatus


def test_z_score_for_95_percent():
    assert z_score(0.95) == 1.96
    assert z_score(0.99) == 2.58


def test_z_score_rejects_bad_level():
    with pytest.raises(ValueError):
        z_score(1.5)


def test_interval_around_half():
    interval = confidence_interval(50.0, 100)
    assert interval.lower == pytest.approx(40.2)
    assert interval.upper == pytest.approx(59.8)


def test_zero_sample_size_gives_zero_interval():
    assert confidence_interval(40.0, 0) == ConfidenceInterval(0.0, 0.0)


@pytest.mark.parametrize("p", [0.0, 1.0, 12.5, 50.0, 87.0, 100.0])
@pytest.mark.parametrize("n", [1, 3, 10, 250])
def test_interval_bounds(p, n):
    interval = confidence_interval(p, n)
    assert 0.0 <= interval.lower <= p <= interval.upper <= 100.0


def test_width_shrinks_with_sample_size():
    widths = [confidence_interval(30.0, n).upper - confidence_interval(30.0, n).lower for n in (10, 40, 160, 640)]
    assert widths == sorted(widths, reverse=True)
    assert len(set(widths)) == len(widths)


def test_probability_intervals_use_each_total():
    intervals = probability_intervals(
        {
            "a": ProbabilityResult(50.0, 5, 10, ResultStatus.OK),
            "b": ProbabilityResult(50.0, 50, 100, ResultStatus.OK),
            "c": ProbabilityResult(),
        }
    )
    assert intervals["a"].upper - intervals["a"].lower > intervals["b"].upper - intervals["b"].lower
    assert intervals["c"] == ConfidenceInterval(0.0, 0.0)


def test_mean_interval():
    interval = mean_interval(summarize([2, 4, 4, 4, 5, 5, 7, 9]), z=1.96)
    assert interval.lower == pytest.approx(5 - 3.92)
    assert interval.upper == pytest.approx(5 + 3.92)
    assert mean_interval(summarize([])) is None
