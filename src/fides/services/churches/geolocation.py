"""Position resolution for church searches.

Geolocation itself happens on the client device. The browser reports either a
position or a ``GeolocationPositionError`` code; the locators below turn that
report into a :class:`Coordinate` or a typed :class:`LocationError`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ...models.domain import Coordinate
from .errors import (
    LocationError,
    LocationTimeout,
    LocationUnsupported,
    PermissionDenied,
    PositionUnavailable,
)

logger = logging.getLogger(__name__)

_ERRORS_BY_CODE: dict[int, type[LocationError]] = {
    PermissionDenied.code: PermissionDenied,
    PositionUnavailable.code: PositionUnavailable,
    LocationTimeout.code: LocationTimeout,
}


def location_error_from_code(code: int, message: str | None = None) -> LocationError:
    """Map a W3C geolocation error code (1, 2, 3) to the matching exception.

    Unknown codes become a generic :class:`LocationError`.
    """
    error_cls = _ERRORS_BY_CODE.get(code, LocationError)
    return error_cls(message)


class GeoLocator(ABC):
    """Resolves the searcher's current position."""

    @abstractmethod
    def locate(self) -> Coordinate:
        """Return the current coordinate or raise a LocationError."""


class StaticGeoLocator(GeoLocator):
    def __init__(self, coordinate: Coordinate) -> None:
        self.coordinate = coordinate

    def locate(self) -> Coordinate:
        return self.coordinate


class UnavailableGeoLocator(GeoLocator):
    def locate(self) -> Coordinate:
        raise LocationUnsupported()


class ReportedPositionLocator(GeoLocator):
    """Replays a position (or error) reported by the client's geolocation API."""

    def __init__(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        accuracy: float | None = None,
        error_code: int | None = None,
        error_message: str | None = None,
    ) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy = accuracy
        self.error_code = error_code
        self.error_message = error_message

    def locate(self) -> Coordinate:
        if self.error_code is not None:
            error = location_error_from_code(self.error_code, self.error_message)
            logger.info("Client reported geolocation error %s: %s", self.error_code, error)
            raise error
        if self.latitude is None or self.longitude is None:
            raise LocationUnsupported()
        return Coordinate(self.latitude, self.longitude, accuracy_m=self.accuracy)
