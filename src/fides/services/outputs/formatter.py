"""Utilities to serialize church search results into API schemas."""

from __future__ import annotations

from ...models.domain import Coordinate, PlaceOfWorship
from ...schemas.churches import ChurchModel, ChurchSearchResponse, CoordinateModel
from ..churches.service import SearchOutcome


def place_to_model(place: PlaceOfWorship) -> ChurchModel:
    return ChurchModel(
        id=place.id,
        name=place.name,
        address=place.address,
        latitude=place.coordinate.latitude,
        longitude=place.coordinate.longitude,
        distance_meters=place.distance_meters,
        distance_formatted=place.distance_formatted,
        denomination=place.denomination,
        website=place.website,
        phone=place.phone,
        schedule=place.schedule,
        description=place.description,
        parish=place.parish,
        city=place.city,
        state=place.state,
        postcode=place.postcode,
        source=place.source,
    )


def model_to_place(model: ChurchModel) -> PlaceOfWorship:
    return PlaceOfWorship(
        id=model.id,
        name=model.name,
        address=model.address,
        coordinate=Coordinate(model.latitude, model.longitude),
        distance_meters=model.distance_meters,
        denomination=model.denomination,
        website=model.website,
        phone=model.phone,
        schedule=model.schedule,
        description=model.description,
        parish=model.parish,
        city=model.city,
        state=model.state,
        postcode=model.postcode,
        source=model.source,
    )


def outcome_to_response(outcome: SearchOutcome) -> ChurchSearchResponse:
    return ChurchSearchResponse(
        origin=CoordinateModel(
            latitude=outcome.coordinate.latitude,
            longitude=outcome.coordinate.longitude,
        ),
        radius_m=outcome.radius_m,
        tier=outcome.tier.value if outcome.tier else None,
        from_cache=outcome.from_cache,
        count=len(outcome.places),
        churches=[place_to_model(place) for place in outcome.places],
    )
