"""Nearby-church search orchestration.

The orchestrator drives the tiered Overpass cascade:

1. resolve the origin (given coordinate, or the geolocator);
2. return a fresh cached result for the (coordinate, radius) bucket if any;
3. query tiers catholic → christian → all → byName, normalizing, deduplicating
   and sorting each response, and stop at the first non-empty one;
4. reverse-geocode missing addresses of the nearest results;
5. cache and return the full list.

Only an empty tier falls through to the next one. Any fetch or parse failure
aborts the whole search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ...config import settings
from ...models.domain import Coordinate, PlaceOfWorship
from .cache import SearchCache, cache_key, copy_places
from .dedupe import dedupe
from .enrichment import AddressEnricher
from .errors import SearchError
from .geolocation import GeoLocator, UnavailableGeoLocator
from .nominatim_client import NominatimClient
from .normalizer import normalize_elements
from .overpass_client import OverpassClient
from .query_builder import CASCADE, SearchTier, build_query

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    IDLE = "idle"
    LOCATING = "locating"
    QUERYING = "querying"
    NORMALIZING = "normalizing"
    ENRICHING = "enriching"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class SearchOutcome:
    places: List[PlaceOfWorship]
    coordinate: Coordinate
    radius_m: float
    tier: Optional[SearchTier]
    from_cache: bool = False


class SearchOrchestrator:
    def __init__(
        self,
        overpass: OverpassClient | None = None,
        enricher: AddressEnricher | None = None,
        locator: GeoLocator | None = None,
        cache: SearchCache | None = None,
        default_radius_m: float | None = None,
        max_radius_m: float | None = None,
        query_timeout_s: int | None = None,
        query_builder: Callable[..., str] = build_query,
    ) -> None:
        self.overpass = overpass or OverpassClient()
        self.enricher = enricher or AddressEnricher(NominatimClient())
        self.locator = locator or UnavailableGeoLocator()
        self.cache = cache if cache is not None else SearchCache(ttl_seconds=settings.search_cache_ttl_seconds)
        self.default_radius_m = default_radius_m or settings.default_search_radius_m
        self.max_radius_m = max_radius_m or settings.max_search_radius_m
        self.query_timeout_s = query_timeout_s or settings.overpass_query_timeout_seconds
        self.query_builder = query_builder
        self.state = SearchState.IDLE
        self.current_tier: Optional[SearchTier] = None

    def _transition(self, state: SearchState, tier: Optional[SearchTier] = None) -> None:
        self.state = state
        self.current_tier = tier
        if tier is not None:
            logger.debug("Search state -> %s(%s)", state.value, tier.value)
        else:
            logger.debug("Search state -> %s", state.value)

    def _resolve_radius(self, radius_m: Optional[float]) -> float:
        radius = radius_m if radius_m is not None else self.default_radius_m
        if radius <= 0:
            raise ValueError("Search radius must be positive.")
        if radius > self.max_radius_m:
            raise ValueError(f"Search radius must not exceed {self.max_radius_m} m.")
        return radius

    def _run_tier(self, coordinate: Coordinate, radius_m: float, tier: SearchTier) -> List[PlaceOfWorship]:
        self._transition(SearchState.QUERYING, tier)
        query = self.query_builder(coordinate, radius_m, tier, timeout_s=self.query_timeout_s)
        elements = self.overpass.fetch(query)

        self._transition(SearchState.NORMALIZING, tier)
        try:
            places = normalize_elements(elements, coordinate)
        except (TypeError, ValueError, AttributeError) as exc:
            raise SearchError(f"Malformed Overpass response for tier '{tier.value}': {exc}") from exc
        places = dedupe(places)
        places.sort(key=lambda place: place.distance_meters)
        logger.info(
            "Tier %s returned %d elements, %d places",
            tier.value,
            len(elements),
            len(places),
        )
        return places

    def search_detailed(
        self,
        coordinate: Optional[Coordinate] = None,
        radius_m: Optional[float] = None,
        *,
        locator: Optional[GeoLocator] = None,
    ) -> SearchOutcome:
        try:
            radius = self._resolve_radius(radius_m)
            if coordinate is None:
                self._transition(SearchState.LOCATING)
                coordinate = (locator or self.locator).locate()

            key = cache_key(coordinate, radius)
            cached = self.cache.get(key)
            if cached is not None:
                logger.info("Church search cache hit for %s", key)
                self._transition(SearchState.DONE)
                tier = SearchTier(cached.tier) if cached.tier else None
                return SearchOutcome(copy_places(cached.results), coordinate, radius, tier, from_cache=True)

            logger.info(
                "Searching churches around %.4f,%.4f (radius %.1f km)",
                coordinate.latitude,
                coordinate.longitude,
                radius / 1000,
            )
            places: List[PlaceOfWorship] = []
            matched_tier: Optional[SearchTier] = None
            for tier in CASCADE:
                places = self._run_tier(coordinate, radius, tier)
                if places:
                    matched_tier = tier
                    break

            if places:
                self._transition(SearchState.ENRICHING, matched_tier)
                self.enricher.enrich(places)
            else:
                logger.info("No churches found in any tier around %s", key)

            self.cache.put(key, places, tier=matched_tier.value if matched_tier else None)
            self._transition(SearchState.DONE)
            return SearchOutcome(places, coordinate, radius, matched_tier)
        except Exception:
            self._transition(SearchState.FAILED)
            raise

    def search(
        self,
        coordinate: Optional[Coordinate] = None,
        radius_m: Optional[float] = None,
        *,
        locator: Optional[GeoLocator] = None,
    ) -> List[PlaceOfWorship]:
        """Find places of worship near ``coordinate`` (or the located position), nearest first."""
        return self.search_detailed(coordinate, radius_m, locator=locator).places

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Church search cache cleared")
