"""REST API views for the Mosquito Activity Index."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache

from django.conf import settings
from django.core.cache import caches
from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.core.abstractions import MAIReport
from backend.core.exceptions import MAIError, ValidationError
from backend.core.providers.base import RequestConfig
from backend.core.providers.llm import ChatCompletionClient
from backend.core.providers.narrative import LLMNarrativeGenerator
from backend.core.providers.openmeteo import OpenMeteoProvider
from backend.core.providers.region import LLMCoordinateResolver, LLMRegionResolver
from backend.core.services.forecast_service import CachedWeatherProvider
from backend.core.services.pipeline import MAIPipeline

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_pipeline() -> MAIPipeline:
    client = ChatCompletionClient(
        api_key=settings.OPENROUTER_API_KEY,
        model=settings.OPENROUTER_MODEL,
        url=settings.OPENROUTER_URL,
        app_url=settings.OPENROUTER_APP_URL,
        app_name=settings.OPENROUTER_APP_NAME,
    )
    weather = CachedWeatherProvider(
        OpenMeteoProvider(
            base_url=settings.OPENMETEO_URL,
            days=settings.MAI_FORECAST_DAYS,
            request_config=RequestConfig(timeout=10.0),
        ),
        cache=caches[settings.WEATHER_CACHE_ALIAS],
        ttl=settings.WEATHER_CACHE_TIMEOUT,
    )
    return MAIPipeline(
        region_resolver=LLMRegionResolver(client),
        coordinate_resolver=LLMCoordinateResolver(client),
        weather_provider=weather,
        narrative_generator=LLMNarrativeGenerator(client),
    )


def serialize_report(report: MAIReport) -> dict:
    return {
        "region": report.region,
        "coordinates": {
            "latitude": report.coordinates.latitude,
            "longitude": report.coordinates.longitude,
        },
        "summary": report.summary,
        "index": {day.isoformat(): level.label for day, level in report.index.items()},
    }


def _extract_region(request) -> str:
    try:
        data = request.data
    except ParseError as exc:
        raise ValidationError("Request body must be valid JSON") from exc
    except UnsupportedMediaType as exc:
        raise ValidationError("Request body must be JSON or form data") from exc
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    region = data.get("region")
    if not isinstance(region, str) or not region.strip():
        raise ValidationError("Missing region")
    return region.strip()


class MAISummaryView(APIView):
    """Return the daily MAI forecast and narrative for a region."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Resolve the region, score its forecast and summarize the result."""
        try:
            region = _extract_region(request)
        except ValidationError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            report = get_pipeline().run(region)
        except MAIError as exc:
            logger.warning("MAI pipeline failed for %r: %s: %s", region, type(exc).__name__, exc)
            return Response({"error": str(exc)}, status=exc.status_code)

        return Response(serialize_report(report), status=status.HTTP_200_OK)
