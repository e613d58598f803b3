"""Headless outlook for a saved NASA POWER or Open-Meteo daily payload.

Example:
    python scripts/quickstart.py power.json --date 2025-07-04 --event parade
"""

from __future__ import annotations

import argparse
import json
from datetime import date
from pathlib import Path

from parade_risk.analysis import rank_alternative_dates
from parade_risk.config import dump_json, load_event_profiles, load_settings, load_thresholds
from parade_risk.data_access import records_from_nasa_power, records_from_open_meteo
from parade_risk.logging_config import configure_logging
from parade_risk.processing import filter_window, normalize_records, recent_history
from parade_risk.workflows import analyze_event_date, analyze_probabilities


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Historical weather odds for one date.")
    parser.add_argument("payload", type=Path, help="NASA POWER or Open-Meteo JSON file")
    parser.add_argument("--date", type=date.fromisoformat, required=True, help="Target date (YYYY-MM-DD)")
    parser.add_argument("--event", default="parade", help="Event type from config/event_profiles.yaml")
    return parser.parse_args()


def main():
    configure_logging()
    args = parse_args()
    settings = load_settings()
    thresholds = load_thresholds()
    profiles = load_event_profiles()

    payload = json.loads(args.payload.read_text(encoding="utf-8"))
    if "properties" in payload:
        raw = records_from_nasa_power(payload)
    else:
        raw = records_from_open_meteo(payload)
    sample = recent_history(
        normalize_records(raw, sentinel=settings.missing_sentinel),
        settings.years_of_data,
    )

    window = filter_window(sample, args.date, settings.date_window)
    print("=== Hazard probabilities ===")
    print(dump_json(analyze_probabilities(window, thresholds, settings)))

    profile = profiles.get(args.event)
    if profile is None:
        print(f"Unknown event type {args.event!r}; choose from {', '.join(sorted(profiles))}")
    print(f"\n=== {args.event} on {args.date.isoformat()} ===")
    print(dump_json(analyze_event_date(sample, args.date, profile, settings)))

    print("\n=== Alternative dates ===")
    for alt in rank_alternative_dates(
        sample,
        args.date,
        profile,
        days_range=settings.alternative_days_range,
        window_days=settings.date_window,
        top_n=settings.alternative_top_n,
        temperature_scale=settings.temperature_risk_scale,
    ):
        print(f"{alt.date.isoformat()}  risk={alt.risk.total_risk:>3}  {alt.risk.label}")


if __name__ == "__main__":
    main()
