"""Exception taxonomy for the church discovery service."""

from __future__ import annotations


class ChurchSearchError(Exception):
    """Base class for every error raised by the church discovery service."""


class LocationError(ChurchSearchError):
    """The user's position could not be determined."""

    code: int | None = None
    default_message = "Could not determine your location."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class PermissionDenied(LocationError):
    code = 1
    default_message = "Location permission denied. Enable it in your browser settings."


class PositionUnavailable(LocationError):
    code = 2
    default_message = "Location is unavailable right now. Check that GPS is enabled."


class LocationTimeout(LocationError):
    code = 3
    default_message = "Timed out while trying to determine your location."


class LocationUnsupported(LocationError):
    default_message = "Geolocation is not supported by this client."


class SearchError(ChurchSearchError):
    """A search tier failed; the whole search is aborted."""


class EnrichmentError(ChurchSearchError):
    """Reverse geocoding failed for a single place."""
