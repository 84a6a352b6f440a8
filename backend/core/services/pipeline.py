"""Sequence the collaborators and the scoring core into one MAI report."""
from __future__ import annotations

import logging
from typing import Optional

from backend.core.abstractions import (
    CoordinateResolver,
    DailyRiskIndex,
    MAIReport,
    NarrativeGenerator,
    RegionResolver,
    WeatherProvider,
)
from backend.core.exceptions import ValidationError
from backend.core.scoring import build_index


class MAIPipeline:
    """Run region resolution, geocoding, forecast, scoring and narration.

    Stages run strictly in order and the first error propagates unchanged.
    Nothing is retried and no partial report is produced.
    """

    def __init__(
        self,
        *,
        region_resolver: RegionResolver,
        coordinate_resolver: CoordinateResolver,
        weather_provider: WeatherProvider,
        narrative_generator: NarrativeGenerator,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.region_resolver = region_resolver
        self.coordinate_resolver = coordinate_resolver
        self.weather_provider = weather_provider
        self.narrative_generator = narrative_generator
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def run(self, region_text: str) -> MAIReport:
        if not isinstance(region_text, str) or not region_text.strip():
            raise ValidationError("Missing region")

        region = self.region_resolver.resolve(region_text.strip())
        self._log.info("Resolved %r to %s", region_text, region)
        coordinates = self.coordinate_resolver.locate(region)
        self._log.info("Located %s at %.4f,%.4f", region, coordinates.latitude, coordinates.longitude)
        index = self.index_for(coordinates.latitude, coordinates.longitude)
        summary = self.narrative_generator.summarize(region, index)
        return MAIReport(region=region, coordinates=coordinates, index=index, summary=summary)

    def index_for(self, latitude: float, longitude: float) -> DailyRiskIndex:
        series = self.weather_provider.forecast(latitude, longitude)
        index = build_index(series)
        self._log.info(
            "Built MAI index for %.4f,%.4f: %s",
            latitude,
            longitude,
            ", ".join(f"{day.isoformat()}={level.label}" for day, level in index.items()),
        )
        return index


__all__ = ["MAIPipeline"]
