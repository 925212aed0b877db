"""Nearby-church discovery: tiered Overpass search with address enrichment."""

from .errors import (
    ChurchSearchError,
    EnrichmentError,
    LocationError,
    LocationTimeout,
    LocationUnsupported,
    PermissionDenied,
    PositionUnavailable,
    SearchError,
)
from .service import SearchOrchestrator, SearchOutcome, SearchState

__all__ = [
    "ChurchSearchError",
    "EnrichmentError",
    "LocationError",
    "LocationTimeout",
    "LocationUnsupported",
    "PermissionDenied",
    "PositionUnavailable",
    "SearchError",
    "SearchOrchestrator",
    "SearchOutcome",
    "SearchState",
]
