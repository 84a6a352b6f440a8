"""Error taxonomy shared by the scoring core, collaborators and the API."""
from __future__ import annotations


class MAIError(RuntimeError):
    """Base class for every failure surfaced by the MAI pipeline."""

    status_code = 500


class ValidationError(MAIError):
    """Raised when the request input is missing or malformed."""

    status_code = 400


class ResolutionError(MAIError):
    """Raised when a free-text region cannot be mapped to a canonical name."""

    status_code = 422


class GeocodeError(MAIError):
    """Raised when coordinates for a region cannot be determined."""

    status_code = 422


class WeatherFetchError(MAIError):
    """Raised on transport or data-shape failures of the forecast source."""

    status_code = 502


class NarrativeError(MAIError):
    """Raised when the narrative summary cannot be generated."""

    status_code = 502


class EmptySeriesError(MAIError):
    """Raised when there is no weather data to build an index from."""

    status_code = 502


__all__ = [
    "MAIError",
    "ValidationError",
    "ResolutionError",
    "GeocodeError",
    "WeatherFetchError",
    "NarrativeError",
    "EmptySeriesError",
]
