"""Typed containers shared by the processing, analysis and workflow layers.

Everything here is immutable. A ``Sample`` is built once by the normalizer and only read
afterwards, so any number of analyses can run over it concurrently without coordination.
Absent observations are ``None``; they are never coerced to 0 because 0 is a valid wind
speed or precipitation amount.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

import pandas as pd


FIELDS = (
    "temperature_max",
    "temperature_min",
    "temperature_avg",
    "precipitation",
    "wind_speed",
    "humidity",
)

HAZARDS = ("very_hot", "very_cold", "very_windy", "very_wet", "very_uncomfortable")


class ResultStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    LOW_RELIABILITY = "low_reliability"
    INVALID_INPUT = "invalid_input"


class Direction(str, Enum):
    ABOVE = "above"
    BELOW = "below"


class TrendDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class TrendClass(str, Enum):
    """Decade-over-decade classification of a hazard probability."""

    SIGNIFICANTLY_INCREASING = "significantly_increasing"
    INCREASING = "increasing"
    STABLE = "stable"
    DECREASING = "decreasing"
    SIGNIFICANTLY_DECREASING = "significantly_decreasing"

    @property
    def label(self) -> str:
        return _TREND_LABELS[self]


_TREND_LABELS = {
    TrendClass.SIGNIFICANTLY_INCREASING: "↑↑ Significantly Increasing",
    TrendClass.INCREASING: "↑ Increasing",
    TrendClass.STABLE: "→ Stable",
    TrendClass.DECREASING: "↓ Decreasing",
    TrendClass.SIGNIFICANTLY_DECREASING: "↓↓ Significantly Decreasing",
}


class Recommendation(str, Enum):
    IDEAL = "ideal"
    ACCEPTABLE = "acceptable"
    NOT_RECOMMENDED = "not_recommended"
    NO_DATA = "no_data"
    INVALID_EVENT = "invalid_event"

    @property
    def label(self) -> str:
        return _RECOMMENDATION_LABELS[self]


_RECOMMENDATION_LABELS = {
    Recommendation.IDEAL: "Ideal Conditions ✅",
    Recommendation.ACCEPTABLE: "Acceptable ⚠️",
    Recommendation.NOT_RECOMMENDED: "Not Recommended ❌",
    Recommendation.NO_DATA: "No Data",
    Recommendation.INVALID_EVENT: "Invalid Event",
}


class Reliability(str, Enum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


def is_present(value: Any) -> bool:
    """True for a finite number; ``None``, NaN and infinities count as absent."""
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


@dataclass(frozen=True)
class DailyRecord:
    """One normalized observation for one historical date."""

    date: date
    temperature_max: Optional[float] = None
    temperature_min: Optional[float] = None
    temperature_avg: Optional[float] = None
    precipitation: Optional[float] = None
    wind_speed: Optional[float] = None
    humidity: Optional[float] = None

    @property
    def year(self) -> int:
        return self.date.year

    def has_data(self) -> bool:
        return any(getattr(self, name) is not None for name in FIELDS)


@dataclass(frozen=True)
class Sample:
    """Date-ordered, immutable sequence of ``DailyRecord``."""

    records: tuple[DailyRecord, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(sorted(self.records, key=lambda r: r.date)))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DailyRecord]:
        return iter(self.records)

    def values(self, name: str) -> list[float]:
        """Present values of one field, in date order."""
        if name not in FIELDS:
            raise KeyError(f"Unknown record field: {name}")
        return [getattr(r, name) for r in self.records if getattr(r, name) is not None]

    @property
    def years(self) -> list[int]:
        return sorted({r.year for r in self.records})

    def where(self, predicate: Callable[[DailyRecord], bool]) -> "Sample":
        return Sample(tuple(r for r in self.records if predicate(r)))

    def to_frame(self) -> pd.DataFrame:
        """Return the sample as a float DataFrame indexed by date (NaN marks absent)."""
        index = pd.DatetimeIndex([pd.Timestamp(r.date) for r in self.records], name="date")
        data = {
            name: [getattr(r, name) for r in self.records]
            for name in FIELDS
        }
        return pd.DataFrame(data, index=index, columns=list(FIELDS), dtype=float)


@dataclass(frozen=True)
class ThresholdSet:
    """Named hazard thresholds (°C, km/h, mm/day, heat-index °C)."""

    very_hot: float = 32.0
    very_cold: float = 0.0
    very_windy: float = 40.0
    very_wet: float = 10.0
    very_uncomfortable: float = 40.0

    _CAMEL = {
        "veryHot": "very_hot",
        "veryCold": "very_cold",
        "veryWindy": "very_windy",
        "veryWet": "very_wet",
        "veryUncomfortable": "very_uncomfortable",
    }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ThresholdSet":
        """Build from snake_case or camelCase keys; unparseable values become NaN."""
        values: Dict[str, float] = {}
        for key, raw in data.items():
            name = cls._CAMEL.get(key, key)
            if name not in HAZARDS:
                raise ValueError(f"Unknown threshold name: {key}")
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                values[name] = math.nan
        return cls(**values)

    def invalid_fields(self) -> list[str]:
        return [name for name in HAZARDS if not is_present(getattr(self, name))]

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in HAZARDS}


@dataclass(frozen=True)
class ProbabilityResult:
    percentage: float = 0.0
    count: int = 0
    total: int = 0
    status: ResultStatus = ResultStatus.NO_DATA

    @classmethod
    def no_data(cls) -> "ProbabilityResult":
        return cls()

    @classmethod
    def invalid(cls) -> "ProbabilityResult":
        return cls(status=ResultStatus.INVALID_INPUT)


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float = 0.0
    upper: float = 0.0


@dataclass(frozen=True)
class Statistics:
    """Distributional summary; every measure is ``None`` for an empty sample."""

    count: int = 0
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None
    variance: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    range: Optional[float] = None
    q1: Optional[float] = None
    q3: Optional[float] = None
    iqr: Optional[float] = None
    percentiles: Dict[int, float] = field(default_factory=dict)
    outliers: tuple[float, ...] = ()
    status: ResultStatus = ResultStatus.NO_DATA

    @classmethod
    def empty(cls) -> "Statistics":
        return cls()


@dataclass(frozen=True)
class TrendResult:
    slope: float = 0.0
    intercept: float = 0.0
    correlation: float = 0.0
    direction: TrendDirection = TrendDirection.STABLE
    significance: str = "minimal"
    change_percent: float = 0.0
    status: ResultStatus = ResultStatus.NO_DATA


@dataclass(frozen=True)
class ClimateTrend:
    recent_percentage: float = 0.0
    older_percentage: float = 0.0
    change_percent: float = 0.0
    classification: TrendClass = TrendClass.STABLE
    status: ResultStatus = ResultStatus.NO_DATA

    @property
    def label(self) -> str:
        return self.classification.label

    @property
    def value(self) -> str:
        if self.classification is TrendClass.STABLE:
            return "±0%"
        sign = "+" if self.change_percent > 0 else ""
        return f"{sign}{self.change_percent:.1f}%"


@dataclass(frozen=True)
class FactorSpec:
    """One weighted factor of an event profile."""

    weight: float
    threshold: Optional[float] = None
    comfort_range: Optional[tuple[float, float]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FactorSpec":
        comfort = data.get("range")
        return cls(
            weight=float(data["weight"]),
            threshold=float(data["threshold"]) if data.get("threshold") is not None else None,
            comfort_range=(float(comfort[0]), float(comfort[1])) if comfort else None,
        )


@dataclass(frozen=True)
class EventProfile:
    key: str
    name: str
    factors: Mapping[str, FactorSpec]
    icon: str = ""
    duration: str = ""
    description: str = ""

    @classmethod
    def from_mapping(cls, key: str, data: Mapping[str, Any]) -> "EventProfile":
        if "factors" not in data:
            raise ValueError(f"event profile {key!r} has no factors")
        return cls(
            key=key,
            name=data.get("name", key),
            factors={name: FactorSpec.from_mapping(spec) for name, spec in data["factors"].items()},
            icon=data.get("icon", ""),
            duration=data.get("duration", ""),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class Observation:
    """A single-point weather reading (current conditions or a sample aggregate)."""

    temperature: Optional[float] = None
    precipitation: Optional[float] = None
    wind_speed: Optional[float] = None
    humidity: Optional[float] = None
    visibility_score: Optional[float] = None
    storm_probability: Optional[float] = None


@dataclass(frozen=True)
class FactorRisk:
    factor: str
    risk: int
    value: float
    unit: str
    status: str
    weight: float


@dataclass(frozen=True)
class RiskResult:
    total_risk: int = 0
    recommendation: Recommendation = Recommendation.NO_DATA
    confidence: int = 0
    factors: tuple[FactorRisk, ...] = ()
    event_key: Optional[str] = None
    event_name: Optional[str] = None
    status: ResultStatus = ResultStatus.NO_DATA

    @property
    def label(self) -> str:
        return self.recommendation.label


@dataclass(frozen=True)
class AnalysisSettings:
    years_of_data: int = 20
    date_window: int = 7
    min_sample_size: int = 5
    high_reliability_size: int = 10
    confidence_level: float = 0.95
    trend_significance_slope: float = 0.1
    recent_years: int = 10
    older_years: int = 20
    change_increase: float = 5.0
    change_significant: float = 15.0
    discomfort_min_temperature: float = 26.7
    missing_sentinel: float = -999.0
    temperature_risk_scale: float = 10.0
    alternative_days_range: int = 14
    alternative_top_n: int = 5

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnalysisSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown analysis settings: {sorted(unknown)}")
        defaults = asdict(cls())
        values = {}
        for name, value in data.items():
            try:
                values[name] = type(defaults[name])(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"analysis setting {name!r} has invalid value {value!r}") from exc
        return cls(**values)
