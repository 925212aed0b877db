"""Collapse near-identical search results."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import PlaceOfWorship


def dedupe_key(place: PlaceOfWorship) -> str:
    return f"{place.name.lower()}-{place.coordinate.latitude:.4f}-{place.coordinate.longitude:.4f}"


def dedupe(places: Iterable[PlaceOfWorship]) -> list[PlaceOfWorship]:
    """Keep the first place per (name, rounded coordinate) key, preserving order."""
    seen: set[str] = set()
    unique: list[PlaceOfWorship] = []
    for place in places:
        key = dedupe_key(place)
        if key in seen:
            continue
        seen.add(key)
        unique.append(place)
    return unique
