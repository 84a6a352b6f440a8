"""Stub collaborators and sample data shared by the test modules."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List

from backend.core.abstractions import Coordinates, DailyRiskIndex, WeatherObservation
from backend.core.services.pipeline import MAIPipeline


def make_series(*observations: WeatherObservation, start: date = date(2025, 7, 18)) -> Dict[date, WeatherObservation]:
    return {start + timedelta(days=offset): obs for offset, obs in enumerate(observations)}


HOT_WET = WeatherObservation(temperature_c=28, humidity_pct=70, rainfall_mm=6, wind_kmh=10)
COLD_DRY = WeatherObservation(temperature_c=10, humidity_pct=30, rainfall_mm=0, wind_kmh=30)


class SpyRegionResolver:
    def __init__(self, result: str = "Bangkok, Thailand", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[str] = []

    def resolve(self, free_text_region: str) -> str:
        self.calls.append(free_text_region)
        if self.error:
            raise self.error
        return self.result


class SpyCoordinateResolver:
    def __init__(self, result: Coordinates = Coordinates(13.7563, 100.5018), error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[str] = []

    def locate(self, region_name: str) -> Coordinates:
        self.calls.append(region_name)
        if self.error:
            raise self.error
        return self.result


class SpyWeatherProvider:
    def __init__(self, series: Dict[date, WeatherObservation] | None = None, error: Exception | None = None) -> None:
        self.series = make_series(HOT_WET, COLD_DRY) if series is None else series
        self.error = error
        self.calls: List[tuple] = []

    def forecast(self, latitude: float, longitude: float) -> Dict[date, WeatherObservation]:
        self.calls.append((latitude, longitude))
        if self.error:
            raise self.error
        return self.series


class SpyNarrativeGenerator:
    def __init__(self, result: str = "**Day 1**: Severe", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def summarize(self, region_name: str, index: DailyRiskIndex) -> str:
        self.calls.append((region_name, index))
        if self.error:
            raise self.error
        return self.result


class Spies:
    def __init__(self) -> None:
        self.region = SpyRegionResolver()
        self.coordinates = SpyCoordinateResolver()
        self.weather = SpyWeatherProvider()
        self.narrative = SpyNarrativeGenerator()

    def pipeline(self) -> MAIPipeline:
        return MAIPipeline(
            region_resolver=self.region,
            coordinate_resolver=self.coordinates,
            weather_provider=self.weather,
            narrative_generator=self.narrative,
        )

    @property
    def total_calls(self) -> int:
        return sum(
            len(spy.calls) for spy in (self.region, self.coordinates, self.weather, self.narrative)
        )


