"""Forecast provider wrapper that caches series in the Django cache."""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Dict

import logging

from django.core.cache.backends.base import BaseCache

from backend.core.abstractions import WeatherObservation, WeatherProvider, WeatherSeries


logger = logging.getLogger(__name__)


class CachedWeatherProvider(WeatherProvider):
    """Serve repeated forecasts for the same coordinates from cache."""

    cache_key_template = "mai:forecast:{lat:.4f}:{lon:.4f}"

    def __init__(self, provider: WeatherProvider, cache: BaseCache, ttl: int) -> None:
        self._provider = provider
        self._cache = cache
        self._ttl = ttl

    def forecast(self, latitude: float, longitude: float) -> WeatherSeries:
        cache_key = self.cache_key_template.format(lat=latitude, lon=longitude)
        cached = self._cache.get(cache_key)
        if cached:
            logger.debug("Forecast cache hit for %s", cache_key)
            return self._deserialize(cached)

        series = self._provider.forecast(latitude, longitude)
        if series:
            self._cache.set(cache_key, self._serialize(series), self._ttl)
        return series

    def _serialize(self, series: WeatherSeries) -> Dict[str, dict]:
        return {day.isoformat(): asdict(observation) for day, observation in series.items()}

    def _deserialize(self, payload: Dict[str, dict]) -> Dict[date, WeatherObservation]:
        return {
            date.fromisoformat(day): WeatherObservation(
                temperature_c=values["temperature_c"],
                humidity_pct=values["humidity_pct"],
                rainfall_mm=values["rainfall_mm"],
                wind_kmh=values["wind_kmh"],
            )
            for day, values in payload.items()
        }
