"""Historical weather odds for a calendar date: will it rain on my parade?

Given multi-year daily observations around a target date at one location, the package
estimates how often configurable hazard thresholds were crossed, whether those odds are
shifting between decades, and how risky the date looks for specific outdoor events.

- provider adapters (NASA POWER, Open-Meteo, Meteostat) and record normalization
- distribution statistics, threshold probabilities and confidence intervals
- heat-index discomfort, yearly regressions and decade-over-decade trends
- weighted event risk scoring and alternative-date ranking

Every analysis function is pure: thresholds, event profiles and policy constants are
passed in, typically from the YAML files loaded by ``parade_risk.config``.
"""

from parade_risk.config import load_event_profiles, load_settings, load_thresholds

__all__ = [
    "load_event_profiles",
    "load_settings",
    "load_thresholds",
]
