"""Tests for visibility, crowd-safety and equipment scores."""

from datetime import date

from parade_risk.analysis.outdoor import (
    crowd_safety_score,
    equipment_risk,
    visibility_penalty,
    visibility_score,
)


def test_visibility_penalty_components():
    assert visibility_penalty(95, 6, 45) == 90
    assert visibility_penalty(85, 1, 3) == 35
    assert visibility_penalty(None, None, None) == 0


def test_visibility_score_from_sample(sample_of):
    sample = sample_of(
        [
            {"date": date(2020, 7, 4), "humidity": 92.0, "precipitation": 8.0, "wind_speed": 10.0},
            {"date": date(2021, 7, 4), "humidity": 94.0, "precipitation": 6.0, "wind_speed": 12.0},
        ]
    )
    score = visibility_score(sample)
    assert score.score == 30
    assert score.level == "Poor"


def test_pleasant_day_is_safe_for_crowds(sample_of):
    sample = sample_of(
        [{"date": date(2020, 7, 4), "temperature_avg": 22.0, "humidity": 50.0, "wind_speed": 10.0}]
    )
    score = crowd_safety_score(sample)
    assert score.score == 100
    assert score.level == "Excellent"


def test_hot_windy_day_penalized(sample_of):
    sample = sample_of(
        [{"date": date(2020, 7, 4), "temperature_avg": 38.0, "humidity": 15.0, "wind_speed": 35.0}]
    )
    # 30 (heat) + 20 (dry air) + 20 (wind)
    assert crowd_safety_score(sample).score == 30


def test_equipment_risk_levels(sample_of):
    sample = sample_of(
        [
            {"date": date(2020, 7, 4), "precipitation": 12.0, "wind_speed": 45.0},
            {"date": date(2021, 7, 4), "precipitation": 0.0, "wind_speed": 10.0},
        ]
    )
    risk = equipment_risk(sample)
    assert risk.risk_score == 75
    assert risk.level == "High"
    assert "Waterproof covers for all equipment" in risk.recommendations
    assert "Indoor backup venue recommended" in risk.recommendations
    assert len(risk.recommendations) == 8


def test_calm_dry_equipment_risk_is_low(sample_of):
    sample = sample_of([{"date": date(2020, 7, 4), "precipitation": 0.0, "wind_speed": 8.0}])
    risk = equipment_risk(sample)
    assert risk.risk_score == 0
    assert risk.level == "Low"
    assert risk.recommendations == ()
