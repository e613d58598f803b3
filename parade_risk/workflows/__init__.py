"""High-level workflows combining the analysis routines for one location and date."""

from parade_risk.workflows.outlook import analyze_event_date, analyze_probabilities

__all__ = ["analyze_event_date", "analyze_probabilities"]
