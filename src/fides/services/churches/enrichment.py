"""Fill in missing addresses for the nearest search results."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, Sequence

from ...config import settings
from ...models.domain import ADDRESS_NOT_AVAILABLE, Coordinate, PlaceOfWorship
from .errors import EnrichmentError
from .throttle import RequestThrottle

logger = logging.getLogger(__name__)

MAX_ENRICHED_PER_SEARCH = 10
MIN_REQUEST_INTERVAL_SECONDS = 1.1


class ReverseGeocoder(Protocol):
    def reverse(self, coordinate: Coordinate) -> str: ...


class AddressEnricher:
    def __init__(
        self,
        geocoder: ReverseGeocoder,
        limit: int | None = None,
        min_interval_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.geocoder = geocoder
        requested = limit if limit is not None else settings.enrichment_limit
        self.limit = max(0, min(requested, MAX_ENRICHED_PER_SEARCH))
        interval = (
            min_interval_seconds if min_interval_seconds is not None else settings.nominatim_min_interval_seconds
        )
        self.min_interval_seconds = max(interval, MIN_REQUEST_INTERVAL_SECONDS)
        self.throttle = RequestThrottle(self.min_interval_seconds, clock=clock, sleep=sleep)

    def enrich(self, places: Sequence[PlaceOfWorship]) -> int:
        """Reverse-geocode sentinel addresses among the first ``limit`` places.

        ``places`` must already be sorted nearest first. Requests run one at a
        time, at least ``min_interval_seconds`` apart, including across
        batches. A failed lookup keeps the sentinel and the batch moves on.
        Returns the number of addresses filled in.
        """
        pending = [place for place in places[: self.limit] if place.address == ADDRESS_NOT_AVAILABLE]
        enriched = 0
        for place in pending:
            self.throttle.wait()
            try:
                place.address = self.geocoder.reverse(place.coordinate)
                enriched += 1
            except EnrichmentError as exc:
                logger.warning("Address enrichment failed for %s (%s): %s", place.id, place.name, exc)
            except Exception:
                logger.exception("Unexpected error enriching %s (%s)", place.id, place.name)
        if pending:
            logger.info("Enriched %d/%d missing addresses", enriched, len(pending))
        return enriched
