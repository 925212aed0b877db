"""Turn raw Overpass elements into PlaceOfWorship records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ...models.domain import ADDRESS_NOT_AVAILABLE, Coordinate, PlaceOfWorship
from ..geospatial import compute_centroid, haversine_m

logger = logging.getLogger(__name__)

CATHOLIC_NAME_TERMS = (
    "paróquia", "paroquia", "catedral", "basílica", "basilica",
    "santuário", "santuario", "nossa senhora", "são ", "santa ", "santo ",
    "matriz", "católica", "catolica", "capela", "n. s.", "n.s.",
)
NON_CATHOLIC_NAME_TERMS = (
    "assembléia", "assembleia", "batista", "universal", "evangélica", "evangelica",
    "presbiteriana", "adventista", "metodista", "pentecostal", "deus é amor",
    "renascer", "bola de neve", "luterana", "congregacional", "quadrangular",
    "internacional da graça", "mundial", "testemunhas de jeová", "mórmon",
)


def _first_tag(tags: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = tags.get(key)
        if value:
            return str(value).strip()
    return None


def looks_catholic(name: str) -> bool:
    """Heuristic used when an element carries no denomination tag."""
    lowered = name.lower()
    if any(term in lowered for term in NON_CATHOLIC_NAME_TERMS):
        return False
    return any(term in lowered for term in CATHOLIC_NAME_TERMS)


def format_address(tags: Mapping[str, Any]) -> str:
    parts = [
        tags.get("addr:street"),
        tags.get("addr:housenumber"),
        tags.get("addr:suburb") or tags.get("addr:district"),
        tags.get("addr:city"),
    ]
    address = ", ".join(str(part).strip() for part in parts if part)
    return address or ADDRESS_NOT_AVAILABLE


def _node_index(elements: Sequence[Mapping[str, Any]]) -> dict[int, tuple[float, float]]:
    index: dict[int, tuple[float, float]] = {}
    for element in elements:
        if element.get("type") != "node":
            continue
        lat, lon = element.get("lat"), element.get("lon")
        if lat is None or lon is None or element.get("id") is None:
            continue
        index[element["id"]] = (float(lat), float(lon))
    return index


def way_centroid(way: Mapping[str, Any], nodes: Mapping[int, tuple[float, float]]) -> Optional[tuple[float, float]]:
    """Mean position of the way's nodes found in the payload.

    A closed way repeats its first node id; each distinct node counts once.
    """
    node_ids = list(dict.fromkeys(way.get("nodes") or []))
    return compute_centroid(nodes[node_id] for node_id in node_ids if node_id in nodes)


def _element_position(
    element: Mapping[str, Any], nodes: Mapping[int, tuple[float, float]]
) -> Optional[tuple[float, float]]:
    kind = element.get("type")
    if kind == "node":
        lat, lon = element.get("lat"), element.get("lon")
        if lat is None or lon is None:
            return None
        return (float(lat), float(lon))
    if kind == "way":
        return way_centroid(element, nodes)
    if kind == "relation":
        center = element.get("center") or {}
        if center.get("lat") is None or center.get("lon") is None:
            return None
        return (float(center["lat"]), float(center["lon"]))
    return None


def normalize_element(
    element: Mapping[str, Any],
    origin: Coordinate,
    nodes: Mapping[int, tuple[float, float]],
) -> Optional[PlaceOfWorship]:
    """Normalize one element, or return None when it must be dropped."""
    tags = element.get("tags") or {}
    if tags.get("amenity") != "place_of_worship":
        return None
    name = _first_tag(tags, "name")
    if not name:
        return None

    position = _element_position(element, nodes)
    if position is None:
        logger.debug("Dropping %s %s: no resolvable position", element.get("type"), element.get("id"))
        return None
    lat, lon = position

    denomination = _first_tag(tags, "denomination")
    if denomination is None and looks_catholic(name):
        denomination = "catholic"

    return PlaceOfWorship(
        id=f"osm-{element.get('type')}-{element.get('id')}",
        name=name,
        address=format_address(tags),
        coordinate=Coordinate(lat, lon),
        distance_meters=haversine_m(origin.latitude, origin.longitude, lat, lon),
        denomination=denomination,
        website=_first_tag(tags, "contact:website", "website"),
        phone=_first_tag(tags, "contact:phone", "phone"),
        schedule=_first_tag(tags, "service_times", "opening_hours"),
        description=_first_tag(tags, "description"),
        parish=_first_tag(tags, "parish", "operator"),
        city=_first_tag(tags, "addr:city"),
        state=_first_tag(tags, "addr:state"),
        postcode=_first_tag(tags, "addr:postcode"),
    )


def normalize_elements(elements: Iterable[Mapping[str, Any]], origin: Coordinate) -> list[PlaceOfWorship]:
    """Map an Overpass ``elements`` array to places, in payload order."""
    elements = list(elements)
    nodes = _node_index(elements)
    places: list[PlaceOfWorship] = []
    for element in elements:
        place = normalize_element(element, origin, nodes)
        if place is not None:
            places.append(place)
    return places
