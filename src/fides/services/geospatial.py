"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from shapely.geometry import MultiPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in metres between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_between(a, b) -> float:
    """Haversine distance between two objects exposing ``latitude``/``longitude``."""

    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def format_distance(meters: float) -> str:
    """Render a distance for display: whole metres below 1 km, otherwise km with one decimal."""

    if meters < 1000:
        # half-up rounding, not banker's rounding
        return f"{int(math.floor(meters + 0.5))} m"
    return f"{meters / 1000:.1f} km"


def compute_centroid(points: Iterable[tuple[float, float]]) -> Optional[tuple[float, float]]:
    """Arithmetic mean of a collection of (lat, lon) points, or None when empty."""

    pts = list(points)
    if not pts:
        return None
    centroid = MultiPoint([(lon, lat) for lat, lon in pts]).centroid
    return (centroid.y, centroid.x)
