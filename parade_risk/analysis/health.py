"""Heat-index discomfort metrics."""

from __future__ import annotations

from parade_risk.models import ProbabilityResult, ResultStatus, Sample, is_present


DISCOMFORT_MIN_TEMPERATURE_C = 26.7

# Rothfusz regression coefficients (°F, % relative humidity).
_C = (
    -42.379,
    2.04901523,
    10.14333127,
    -0.22475541,
    -6.83783e-3,
    -5.481717e-2,
    1.22874e-3,
    8.5282e-4,
    -1.99e-6,
)


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


def fahrenheit_to_celsius(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def heat_index(temp_c: float, relative_humidity: float) -> float:
    """Rothfusz heat index in °C.

    The regression is fitted for air temperatures above roughly 27 °C (80 °F); callers
    are expected to gate on that, as ``discomfort_probability`` does.
    """
    t = celsius_to_fahrenheit(temp_c)
    rh = relative_humidity
    hi = (
        _C[0]
        + _C[1] * t
        + _C[2] * rh
        + _C[3] * t * rh
        + _C[4] * t * t
        + _C[5] * rh * rh
        + _C[6] * t * t * rh
        + _C[7] * t * rh * rh
        + _C[8] * t * t * rh * rh
    )
    return fahrenheit_to_celsius(hi)


def discomfort_probability(
    sample: Sample,
    threshold: float,
    min_temperature: float = DISCOMFORT_MIN_TEMPERATURE_C,
) -> ProbabilityResult:
    """Share of warm, humid days whose heat index exceeds ``threshold``.

    Only records with ``temperature_avg > min_temperature`` and a humidity above 0 are
    evaluated. Every other record is left out of both numerator and denominator rather
    than being counted as comfortable.
    """
    if not is_present(threshold):
        return ProbabilityResult.invalid()

    count = 0
    total = 0
    for record in sample:
        temp = record.temperature_avg
        humidity = record.humidity
        if temp is None or humidity is None:
            continue
        if temp > min_temperature and humidity > 0:
            total += 1
            if heat_index(temp, humidity) > threshold:
                count += 1

    if total == 0:
        return ProbabilityResult.no_data()
    return ProbabilityResult(
        percentage=100.0 * count / total,
        count=count,
        total=total,
        status=ResultStatus.OK,
    )
