"""Open-Meteo daily forecast provider."""
from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from backend.core.abstractions import WeatherObservation
from backend.core.exceptions import WeatherFetchError
from backend.core.providers.base import HTTPProvider, ProviderError

DAILY_FIELDS = [
    "temperature_2m_mean",
    "temperature_2m_max",
    "temperature_2m_min",
    "relative_humidity_2m_mean",
    "precipitation_sum",
    "wind_speed_10m_max",
]


class OpenMeteoProvider(HTTPProvider):
    """Fetch the forward daily window from the Open-Meteo forecast API."""

    base_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, base_url: Optional[str] = None, days: int = 7, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url
        self.days = days

    def forecast(self, latitude: float, longitude: float) -> Dict[date, WeatherObservation]:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FIELDS),
            "forecast_days": self.days,
            "wind_speed_unit": "kmh",
            "timezone": "auto",
        }
        try:
            response = self._request("GET", self.base_url, params=params)
            data = self._json(response)
        except ProviderError as exc:
            raise WeatherFetchError(f"Open-Meteo request failed: {exc}") from exc

        daily = data.get("daily") if isinstance(data, dict) else None
        if not daily or not isinstance(daily, dict):
            raise WeatherFetchError("Open-Meteo response is missing daily data")
        dates = daily.get("time") or []
        if not isinstance(dates, list):
            raise WeatherFetchError("Open-Meteo daily time must be a list")
        if not dates:
            raise WeatherFetchError("Open-Meteo response has no forecast days")

        series: Dict[date, WeatherObservation] = {}
        for idx, date_str in enumerate(dates[: self.days]):
            try:
                day = date.fromisoformat(date_str)
            except (TypeError, ValueError) as exc:
                raise WeatherFetchError(f"invalid forecast date {date_str!r}") from exc
            series[day] = WeatherObservation(
                temperature_c=self._temperature(daily, idx, day),
                humidity_pct=self._require(daily, "relative_humidity_2m_mean", idx, day),
                rainfall_mm=self._require(daily, "precipitation_sum", idx, day),
                wind_kmh=self._require(daily, "wind_speed_10m_max", idx, day),
            )
        self._log.debug("Open-Meteo returned %d days for %s,%s", len(series), latitude, longitude)
        return series

    # helpers ------------------------------------------------------------
    def _temperature(self, daily: dict, idx: int, day: date) -> float:
        mean = _safe_index(daily.get("temperature_2m_mean"), idx)
        if mean is not None:
            return mean
        bounds = [
            _safe_index(daily.get("temperature_2m_min"), idx),
            _safe_index(daily.get("temperature_2m_max"), idx),
        ]
        filtered = [value for value in bounds if value is not None]
        if not filtered:
            raise WeatherFetchError(f"missing temperature for {day.isoformat()}")
        return sum(filtered) / len(filtered)

    def _require(self, daily: dict, field: str, idx: int, day: date) -> float:
        value = _safe_index(daily.get(field), idx)
        if value is None:
            raise WeatherFetchError(f"missing {field} for {day.isoformat()}")
        return value


def _safe_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_index(values: Optional[List[object]], index: int) -> Optional[float]:
    try:
        value = values[index]  # type: ignore[index]
    except (IndexError, TypeError):
        return None
    return _safe_float(value)


__all__ = ["OpenMeteoProvider"]
