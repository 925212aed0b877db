"""Reverse geocoding through OpenStreetMap Nominatim."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...config import settings
from ...models.domain import Coordinate
from .errors import EnrichmentError
from .throttle import RequestThrottle

logger = logging.getLogger(__name__)

CURRENT_LOCATION_LABEL = "Localização atual"

# Shared by every client in the process.
NOMINATIM_THROTTLE = RequestThrottle(settings.nominatim_min_interval_seconds)


def format_reverse_address(data: dict[str, Any]) -> Optional[str]:
    """Build a compact street address from a Nominatim ``jsonv2`` payload.

    Prefers road + house number + suburb + city and falls back to the full
    ``display_name``.
    """
    address = data.get("address") or {}
    if isinstance(address, dict):
        street = address.get("road") or address.get("pedestrian") or address.get("street")
        parts = [
            street,
            address.get("house_number") if street else None,
            address.get("suburb") or address.get("neighbourhood"),
            address.get("city") or address.get("town") or address.get("village"),
        ]
        compact = ", ".join(str(p) for p in parts if p)
        if street and compact:
            return compact
    display_name = data.get("display_name")
    if display_name:
        return str(display_name).strip()
    return None


class NominatimClient:
    """Reverse lookups spaced by a throttle shared across the process."""

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
        throttle: RequestThrottle | None = None,
    ) -> None:
        base = base_url or settings.nominatim_base_url
        if base.endswith("/reverse"):
            base = base.rsplit("/", 1)[0]
        self.base_url = base.rstrip("/")
        self.user_agent = user_agent or settings.http_user_agent
        self.timeout = timeout
        self.transport = transport
        self.throttle = throttle or NOMINATIM_THROTTLE

    def _reverse_lookup(self, coordinate: Coordinate, zoom: int = 18) -> dict[str, Any]:
        params = {
            "format": "jsonv2",
            "lat": str(coordinate.latitude),
            "lon": str(coordinate.longitude),
            "zoom": str(zoom),
            "addressdetails": "1",
        }
        self.throttle.wait()
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                response = client.get(f"{self.base_url}/reverse", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as exc:
            raise EnrichmentError(f"Nominatim request failed: {exc}") from exc
        except ValueError as exc:
            raise EnrichmentError("Nominatim returned invalid JSON.") from exc
        if not isinstance(data, dict) or data.get("error"):
            raise EnrichmentError(f"Nominatim could not resolve {coordinate.latitude},{coordinate.longitude}.")
        return data

    def reverse(self, coordinate: Coordinate) -> str:
        """Return a display address for the coordinate or raise EnrichmentError."""
        address = format_reverse_address(self._reverse_lookup(coordinate))
        if not address:
            raise EnrichmentError(f"No address found for {coordinate.latitude},{coordinate.longitude}.")
        return address

    def describe_location(self, coordinate: Coordinate) -> str:
        """Short "City, State" label for the searcher's position."""
        try:
            data = self._reverse_lookup(coordinate, zoom=10)
        except EnrichmentError as exc:
            logger.warning("Could not describe location %s,%s: %s", coordinate.latitude, coordinate.longitude, exc)
            return CURRENT_LOCATION_LABEL
        address = data.get("address") or {}
        city = address.get("city") or address.get("town") or address.get("village")
        state = address.get("state")
        if city and state:
            return f"{city}, {state}"
        return CURRENT_LOCATION_LABEL
