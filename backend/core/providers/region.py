"""Region name and coordinate lookup delegated to a language model."""
from __future__ import annotations

import json
import logging
import re

from backend.core.abstractions import Coordinates
from backend.core.exceptions import GeocodeError, ResolutionError
from backend.core.providers.llm import ChatCompletionClient, LLMError

logger = logging.getLogger(__name__)

UNKNOWN_MARKER = "UNKNOWN"

RESOLVE_SYSTEM_PROMPT = (
    "You normalize place names. Given user input that names a city, district, "
    "province or country (possibly misspelled, abbreviated or in another "
    "language), reply with the standardized English name of that place, "
    "including the country, on a single line and nothing else. If the input "
    f"does not name a real place, reply with {UNKNOWN_MARKER}."
)

LOCATE_SYSTEM_PROMPT = (
    "You are a geocoder. Reply only with a JSON object of the form "
    '{"latitude": <number>, "longitude": <number>} giving the approximate '
    "centre of the requested place in decimal degrees. Do not add any text."
)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class LLMRegionResolver:
    def __init__(self, client: ChatCompletionClient) -> None:
        self.client = client

    def resolve(self, free_text_region: str) -> str:
        try:
            answer = self.client.complete(RESOLVE_SYSTEM_PROMPT, free_text_region, max_tokens=64)
        except LLMError as exc:
            logger.warning("Region resolution failed for %r: %s", free_text_region, exc)
            raise ResolutionError(f"could not resolve region {free_text_region!r}") from exc

        lines = [line.strip() for line in answer.splitlines() if line.strip()]
        name = lines[0].strip("\"'.* ") if lines else ""
        if not name or name.upper() == UNKNOWN_MARKER:
            raise ResolutionError(f"could not resolve region {free_text_region!r}")
        return name


class LLMCoordinateResolver:
    def __init__(self, client: ChatCompletionClient) -> None:
        self.client = client

    def locate(self, region_name: str) -> Coordinates:
        try:
            answer = self.client.complete(LOCATE_SYSTEM_PROMPT, region_name, max_tokens=64)
        except LLMError as exc:
            logger.warning("Coordinate lookup failed for %r: %s", region_name, exc)
            raise GeocodeError(f"could not locate {region_name!r}") from exc
        return parse_coordinates(answer)


def parse_coordinates(answer: str) -> Coordinates:
    """Parse ``{"latitude": .., "longitude": ..}``, optionally inside a code fence."""

    text = answer.strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise GeocodeError(f"unparseable coordinates: {answer[:200]!r}") from exc
    if not isinstance(payload, dict):
        raise GeocodeError("coordinates must be a JSON object")

    try:
        latitude = float(payload["latitude"])
        longitude = float(payload["longitude"])
    except KeyError as exc:
        raise GeocodeError(f"missing {exc.args[0]} in coordinates") from exc
    except (TypeError, ValueError) as exc:
        raise GeocodeError("coordinates must be numeric") from exc

    if not -90.0 <= latitude <= 90.0:
        raise GeocodeError("Latitude must be between -90 and 90")
    if not -180.0 <= longitude <= 180.0:
        raise GeocodeError("Longitude must be between -180 and 180")
    return Coordinates(latitude=latitude, longitude=longitude)


__all__ = ["LLMRegionResolver", "LLMCoordinateResolver", "parse_coordinates"]
