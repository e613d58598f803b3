"""Tests for the YAML configuration loaders."""

import json

import pytest

from parade_risk.config import dump_json, load_event_profiles, load_settings, load_thresholds
from parade_risk.models import ClimateTrend, RiskResult, ThresholdSet


def test_default_thresholds(thresholds):
    assert thresholds == ThresholdSet(
        very_hot=32.0,
        very_cold=0.0,
        very_windy=40.0,
        very_wet=10.0,
        very_uncomfortable=40.0,
    )


def test_default_event_catalog(profiles):
    assert set(profiles) == {"wedding", "concert", "sports", "picnic", "parade"}
    wedding = profiles["wedding"]
    assert wedding.name == "Wedding"
    assert wedding.factors["temp"].comfort_range == (18.0, 30.0)
    assert wedding.factors["rain"].threshold == 1.0
    assert "storm" in profiles["concert"].factors
    assert "visibility" in profiles["parade"].factors


def test_default_settings(settings):
    assert settings.min_sample_size == 5
    assert settings.high_reliability_size == 10
    assert settings.date_window == 7
    assert settings.missing_sentinel == -999.0


def test_thresholds_accept_camel_case(tmp_path):
    path = tmp_path / "thresholds.yaml"
    path.write_text("thresholds:\n  veryHot: 35\n  veryWet: 5\n", encoding="utf-8")
    loaded = load_thresholds(path)
    assert loaded.very_hot == 35.0
    assert loaded.very_wet == 5.0
    assert loaded.very_cold == 0.0


@pytest.mark.parametrize(
    "text",
    [
        "limits:\n  very_hot: 30\n",
        "thresholds:\n  very_hot: scorching\n",
        "thresholds:\n  very_foggy: 3\n",
    ],
)
def test_bad_threshold_config(tmp_path, text):
    path = tmp_path / "thresholds.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_thresholds(path)


def test_event_profile_without_factors(tmp_path):
    path = tmp_path / "events.yaml"
    path.write_text("events:\n  rodeo:\n    name: Rodeo\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_event_profiles(path)


def test_unknown_setting(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("analysis:\n  window: 3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_settings_override(tmp_path):
    path = tmp_path / "analysis.yaml"
    path.write_text("analysis:\n  date_window: 3\n  confidence_level: 0.9\n", encoding="utf-8")
    loaded = load_settings(path)
    assert loaded.date_window == 3
    assert loaded.confidence_level == 0.9
    assert loaded.min_sample_size == 5


def test_dump_json_serializes_results():
    risk = json.loads(dump_json(RiskResult()))
    assert risk["recommendation"] == "no_data"
    assert risk["total_risk"] == 0
    trend = json.loads(dump_json(ClimateTrend()))
    assert trend["classification"] == "stable"


@pytest.mark.parametrize("text", ["analysis:\n  date_window:\n", "analysis:\n  confidence_level: high\n"])
def test_unusable_setting_value_names_the_file(tmp_path, text):
    path = tmp_path / "analysis.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError, match="analysis.yaml"):
        load_settings(path)
