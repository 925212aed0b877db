"""Navigation, map and share links for a place of worship."""

from __future__ import annotations

from urllib.parse import urlencode

from ...models.domain import PlaceOfWorship


def _latlon(place: PlaceOfWorship) -> str:
    return f"{place.coordinate.latitude},{place.coordinate.longitude}"


def directions_url(place: PlaceOfWorship) -> str:
    return "https://www.google.com/maps/dir/?" + urlencode({"api": 1, "destination": _latlon(place)}, safe=",")


def map_url(place: PlaceOfWorship) -> str:
    return "https://www.google.com/maps/search/?" + urlencode({"api": 1, "query": _latlon(place)}, safe=",")


def openstreetmap_url(place: PlaceOfWorship, zoom: int = 18) -> str:
    return (
        "https://www.openstreetmap.org/?"
        f"mlat={place.coordinate.latitude}&mlon={place.coordinate.longitude}&zoom={zoom}"
    )


def waze_url(place: PlaceOfWorship) -> str:
    return f"waze://?ll={_latlon(place)}&navigate=yes"


def apple_maps_url(place: PlaceOfWorship) -> str:
    return f"maps://?daddr={_latlon(place)}"


def geo_uri(place: PlaceOfWorship) -> str:
    return f"geo:{_latlon(place)}?q={_latlon(place)}"


def share_payload(place: PlaceOfWorship) -> dict[str, str]:
    """Title/text pair for the Web Share API (or clipboard fallback)."""
    text = f"⛪ {place.name}\n📍 {place.address}\n🗺️ {map_url(place)}"
    return {"title": place.name, "text": text}


def build_links(place: PlaceOfWorship) -> dict[str, str]:
    return {
        "directions": directions_url(place),
        "map": map_url(place),
        "openstreetmap": openstreetmap_url(place),
        "waze": waze_url(place),
        "apple_maps": apple_maps_url(place),
        "geo": geo_uri(place),
    }
