"""Threshold scoring rules for the Mosquito Activity Index.

Each weather variable maps to a bounded factor score.  Temperature, humidity
and rainfall are additive contributions in ``[0, 1]``; wind is a damping
multiplier in ``[0.3, 1]`` applied to their sum.  The product is scaled to
``0..100`` and bucketed into a :class:`RiskLevel`.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Dict

from backend.core.abstractions import (
    DailyRiskIndex,
    RiskAssessment,
    RiskLevel,
    WeatherObservation,
    WeatherSeries,
)
from backend.core.exceptions import EmptySeriesError

MAX_RAW_SCORE = 3.0

# (exclusive upper bound of normalized score, level)
_LEVEL_BOUNDS = (
    (20, RiskLevel.LOW),
    (40, RiskLevel.MEDIUM),
    (60, RiskLevel.HIGH),
    (80, RiskLevel.VERY_HIGH),
)


def temperature_score(temp_c: float) -> float:
    if temp_c < 15:
        return 0.0
    if temp_c < 20:
        return 0.25
    if temp_c < 25:
        return 0.5
    if temp_c <= 30:
        return 1.0
    return 0.8


def humidity_score(humidity_pct: float) -> float:
    if humidity_pct < 40:
        return 0.0
    if humidity_pct <= 60:
        return 0.5
    return 1.0


def rainfall_score(rainfall_mm: float) -> float:
    if rainfall_mm < 1:
        return 0.0
    if rainfall_mm <= 5:
        return 0.5
    return 1.0


def wind_factor(wind_kmh: float) -> float:
    if wind_kmh < 15:
        return 1.0
    if wind_kmh <= 25:
        return 0.7
    return 0.3


def normalize(raw_score: float) -> int:
    """Scale a raw score to an integer percentage, rounding halves up."""

    # Round to 6 places first so float noise such as 12.499999 lands on .5
    scaled = round(raw_score / MAX_RAW_SCORE * 100, 6)
    return max(0, min(100, int(math.floor(scaled + 0.5))))


def classify(normalized_score: int) -> RiskLevel:
    for upper, level in _LEVEL_BOUNDS:
        if normalized_score < upper:
            return level
    return RiskLevel.SEVERE


def aggregate(observation: WeatherObservation) -> RiskAssessment:
    """Combine the factor scores of one day into a risk assessment."""

    additive = (
        temperature_score(observation.temperature_c)
        + humidity_score(observation.humidity_pct)
        + rainfall_score(observation.rainfall_mm)
    )
    raw_score = additive * wind_factor(observation.wind_kmh)
    normalized_score = normalize(raw_score)
    return RiskAssessment(
        raw_score=raw_score,
        normalized_score=normalized_score,
        risk_level=classify(normalized_score),
    )


def score_series(series: WeatherSeries) -> Dict[date, RiskAssessment]:
    """Return ``date -> RiskAssessment`` in the input's date order."""

    if not series:
        raise EmptySeriesError("weather series is empty")
    return {day: aggregate(observation) for day, observation in series.items()}


def build_index(series: WeatherSeries) -> DailyRiskIndex:
    """Return ``date -> RiskLevel`` with the same keys and order as ``series``."""

    return {day: assessment.risk_level for day, assessment in score_series(series).items()}


__all__ = [
    "temperature_score",
    "humidity_score",
    "rainfall_score",
    "wind_factor",
    "normalize",
    "classify",
    "aggregate",
    "score_series",
    "build_index",
]
