"""Domain models for coordinates, places of worship and cached searches."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..services.geospatial import format_distance

ADDRESS_NOT_AVAILABLE = "Endereço não disponível"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 point. Accuracy (metres) is informational only."""

    latitude: float
    longitude: float
    accuracy_m: Optional[float] = field(default=None, compare=False)


@dataclass(slots=True)
class PlaceOfWorship:
    """Canonical church record produced from an OpenStreetMap element."""

    id: str
    name: str
    address: str
    coordinate: Coordinate
    distance_meters: float
    denomination: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    schedule: Optional[str] = None
    description: Optional[str] = None
    parish: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    source: str = "openstreetmap"

    @property
    def distance_formatted(self) -> str:
        return format_distance(self.distance_meters)

    @property
    def has_address(self) -> bool:
        return self.address != ADDRESS_NOT_AVAILABLE


@dataclass(slots=True)
class SearchCacheEntry:
    key: str
    results: List[PlaceOfWorship]
    timestamp: float
    tier: Optional[str] = None
