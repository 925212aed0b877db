"""Nearby-church endpoints."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...models.domain import Coordinate
from ...schemas.churches import (
    ChurchLinksResponse,
    ChurchModel,
    ChurchSearchResponse,
    LocationLabelResponse,
    SharePayloadModel,
)
from ...services.churches.errors import LocationError, SearchError
from ...services.churches.geolocation import ReportedPositionLocator
from ...services.churches.links import build_links, share_payload
from ...services.churches.nominatim_client import NominatimClient
from ...services.churches.service import SearchOrchestrator
from ...services.outputs.formatter import model_to_place, outcome_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/churches", tags=["churches"])


@lru_cache()
def get_search_orchestrator() -> SearchOrchestrator:
    """Process-wide orchestrator so the result cache survives between requests."""
    return SearchOrchestrator()


@lru_cache()
def get_nominatim_client() -> NominatimClient:
    return NominatimClient()


@router.get("/nearby", response_model=ChurchSearchResponse, status_code=status.HTTP_200_OK)
def nearby_churches(
    latitude: float | None = Query(default=None, ge=-90, le=90),
    longitude: float | None = Query(default=None, ge=-180, le=180),
    radius_m: int | None = Query(default=None, ge=1, description="Search radius in metres."),
    accuracy: float | None = Query(default=None, ge=0, description="Reported position accuracy in metres."),
    geolocation_error: int | None = Query(
        default=None,
        description="GeolocationPositionError.code reported by the browser (1, 2 or 3).",
    ),
    geolocation_message: str | None = Query(default=None),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
) -> ChurchSearchResponse:
    """Search places of worship around the reported position, nearest first."""
    locator = ReportedPositionLocator(
        latitude=latitude,
        longitude=longitude,
        accuracy=accuracy,
        error_code=geolocation_error,
        error_message=geolocation_message,
    )
    try:
        outcome = orchestrator.search_detailed(None, radius_m, locator=locator)
        return outcome_to_response(outcome)
    except LocationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SearchError as exc:
        logger.warning(f"Church search failed: {exc}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to search nearby churches: {exc}",
        ) from exc
    except Exception as exc:
        logging.exception(f"Unexpected error searching churches: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search nearby churches.",
        ) from exc


@router.post("/links", response_model=ChurchLinksResponse, status_code=status.HTTP_200_OK)
def church_links(payload: ChurchModel) -> ChurchLinksResponse:
    """Navigation/map links and a share payload for one church."""
    place = model_to_place(payload)
    return ChurchLinksResponse(
        id=place.id,
        links=build_links(place),
        share=SharePayloadModel(**share_payload(place)),
    )


@router.get("/current-address", response_model=LocationLabelResponse, status_code=status.HTTP_200_OK)
def current_address(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    client: NominatimClient = Depends(get_nominatim_client),
) -> LocationLabelResponse:
    """Short "City, State" label for the searcher's position."""
    return LocationLabelResponse(label=client.describe_location(Coordinate(latitude, longitude)))


@router.delete("/cache", status_code=status.HTTP_200_OK)
def clear_cache(orchestrator: SearchOrchestrator = Depends(get_search_orchestrator)) -> dict:
    entries = len(orchestrator.cache)
    orchestrator.clear_cache()
    return {"success": True, "cleared_entries": entries}
