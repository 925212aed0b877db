"""Overpass QL queries for the cascading church search tiers."""

from __future__ import annotations

from enum import Enum

from ...models.domain import Coordinate

NAME_KEYWORDS = ("igreja", "paróquia", "catedral", "capela", "church")
DEFAULT_QUERY_TIMEOUT_SECONDS = 25


class SearchTier(str, Enum):
    """Search filters, from narrowest to broadest, in cascade order."""

    CATHOLIC = "catholic"
    CHRISTIAN = "christian"
    ALL = "all"
    BY_NAME = "byName"


CASCADE: tuple[SearchTier, ...] = (
    SearchTier.CATHOLIC,
    SearchTier.CHRISTIAN,
    SearchTier.ALL,
    SearchTier.BY_NAME,
)

_TIER_FILTERS: dict[SearchTier, str] = {
    SearchTier.CATHOLIC: '["amenity"="place_of_worship"]["religion"="christian"]["denomination"="catholic"]',
    SearchTier.CHRISTIAN: '["amenity"="place_of_worship"]["religion"="christian"]',
    SearchTier.ALL: '["amenity"="place_of_worship"]',
    SearchTier.BY_NAME: '["amenity"="place_of_worship"]["name"~"' + "|".join(NAME_KEYWORDS) + '",i]',
}


def tag_filter(tier: SearchTier) -> str:
    return _TIER_FILTERS[SearchTier(tier)]


def build_query(
    coordinate: Coordinate,
    radius_m: float,
    tier: SearchTier,
    timeout_s: int = DEFAULT_QUERY_TIMEOUT_SECONDS,
) -> str:
    """Build the Overpass query for one tier.

    Nodes, ways and relations are matched within ``radius_m`` of the
    coordinate. Ways and relations are printed with their centre and the
    query recurses down so that the nodes of every matched way are part of
    the same payload.
    """
    filters = tag_filter(tier)
    around = f"(around:{radius_m:.0f},{coordinate.latitude},{coordinate.longitude})"
    selectors = "\n".join(f"  {kind}{filters}{around};" for kind in ("node", "way", "relation"))
    return (
        f"[out:json][timeout:{timeout_s}];\n"
        f"(\n{selectors}\n);\n"
        "out body center;\n"
        ">;\n"
        "out skel qt;"
    )
