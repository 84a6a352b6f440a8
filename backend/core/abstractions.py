"""Core abstractions for the mosquito activity domain."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Dict, Mapping, Protocol


@dataclass(frozen=True, slots=True)
class WeatherObservation:
    """Daily weather values used for scoring.

    Units:
    - temperature in Celsius
    - relative humidity in percent
    - rainfall in millimetres per day
    - wind speed in kilometres per hour
    """

    temperature_c: float
    humidity_pct: float
    rainfall_mm: float
    wind_kmh: float


class RiskLevel(IntEnum):
    """Ordered MAI risk categories."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2
    VERY_HIGH = 3
    SEVERE = 4

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, slots=True)
class RiskAssessment:
    raw_score: float
    normalized_score: int
    risk_level: RiskLevel


@dataclass(frozen=True, slots=True)
class Coordinates:
    latitude: float
    longitude: float


WeatherSeries = Mapping[date, WeatherObservation]
DailyRiskIndex = Dict[date, RiskLevel]


@dataclass(frozen=True)
class MAIReport:
    """Result of a full pipeline run for one region."""

    region: str
    coordinates: Coordinates
    index: DailyRiskIndex
    summary: str


class RegionResolver(Protocol):
    """Maps free-text user input to a standardized region name."""

    def resolve(self, free_text_region: str) -> str:
        ...


class CoordinateResolver(Protocol):
    """Looks up the coordinates of a standardized region name."""

    def locate(self, region_name: str) -> Coordinates:
        ...


class WeatherProvider(Protocol):
    """A data source capable of returning a daily forecast window."""

    def forecast(self, latitude: float, longitude: float) -> WeatherSeries:
        ...


class NarrativeGenerator(Protocol):
    """Turns a daily risk index into human-readable advisory text."""

    def summarize(self, region_name: str, index: DailyRiskIndex) -> str:
        ...


__all__ = [
    "WeatherObservation",
    "RiskLevel",
    "RiskAssessment",
    "Coordinates",
    "WeatherSeries",
    "DailyRiskIndex",
    "MAIReport",
    "RegionResolver",
    "CoordinateResolver",
    "WeatherProvider",
    "NarrativeGenerator",
]
