from __future__ import annotations

import pytest
from django.test import Client

from backend.core.exceptions import (
    EmptySeriesError,
    GeocodeError,
    NarrativeError,
    ResolutionError,
    WeatherFetchError,
)

URL = "/api/weather-summary"


def post(payload=None, raw: str | None = None):
    client = Client()
    body = raw if raw is not None else payload
    return client.post(URL, body, content_type="application/json")


def test_summary_endpoint_returns_payload(installed_pipeline) -> None:
    response = post({"region": "bangkok"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["region"] == "Bangkok, Thailand"
    assert payload["coordinates"] == {"latitude": 13.7563, "longitude": 100.5018}
    assert payload["summary"] == "**Day 1**: Severe"
    assert payload["index"] == {"2025-07-18": "Severe", "2025-07-19": "Low"}


@pytest.mark.parametrize(
    "payload, raw",
    [
        ({}, None),
        ({"region": ""}, None),
        ({"region": "   "}, None),
        ({"region": 12}, None),
        ({"place": "bangkok"}, None),
        (None, '["bangkok"]'),
        (None, "{not json"),
    ],
)
def test_missing_region_is_rejected_before_collaborators(installed_pipeline, payload, raw) -> None:
    response = post(payload, raw=raw)

    assert response.status_code == 400
    assert "error" in response.json()
    assert installed_pipeline.total_calls == 0


@pytest.mark.parametrize(
    "stage, error, status",
    [
        ("region", ResolutionError("unknown region"), 422),
        ("coordinates", GeocodeError("no coordinates"), 422),
        ("weather", WeatherFetchError("forecast unavailable"), 502),
        ("narrative", NarrativeError("summary unavailable"), 502),
    ],
)
def test_collaborator_failures_map_to_error_response(installed_pipeline, stage, error, status) -> None:
    getattr(installed_pipeline, stage).error = error

    response = post({"region": "bangkok"})

    assert response.status_code == status
    assert response.json() == {"error": str(error)}


def test_empty_forecast_maps_to_error_response(installed_pipeline) -> None:
    installed_pipeline.weather.series = {}

    response = post({"region": "bangkok"})

    assert response.status_code == 502
    assert set(response.json()) == {"error"}
    assert installed_pipeline.narrative.calls == []


def test_form_encoded_region_is_accepted(installed_pipeline) -> None:
    multipart = Client().post(URL, {"region": "bangkok"})
    urlencoded = Client().post(URL, "region=bangkok", content_type="application/x-www-form-urlencoded")

    for response in (multipart, urlencoded):
        assert response.status_code == 200
        assert response.json()["region"] == "Bangkok, Thailand"
    assert installed_pipeline.region.calls == ["bangkok", "bangkok"]


@pytest.mark.parametrize(
    "body, content_type",
    [
        ({}, None),
        ("", "application/x-www-form-urlencoded"),
        ("place=bangkok", "application/x-www-form-urlencoded"),
        ("region=bangkok", "text/plain"),
    ],
)
def test_form_or_unsupported_body_without_region_is_rejected(installed_pipeline, body, content_type) -> None:
    client = Client()
    if content_type is None:
        response = client.post(URL, body)
    else:
        response = client.post(URL, body, content_type=content_type)

    assert response.status_code == 400
    assert set(response.json()) == {"error"}
    assert installed_pipeline.total_calls == 0


def test_get_is_not_allowed(installed_pipeline) -> None:
    response = Client().get(URL)

    assert response.status_code == 405
    assert installed_pipeline.total_calls == 0
