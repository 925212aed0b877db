"""Church search request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class ChurchModel(BaseModel):
    id: str
    name: str
    address: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    distance_meters: float = Field(0.0, ge=0)
    distance_formatted: Optional[str] = None
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


class ChurchSearchResponse(BaseModel):
    origin: CoordinateModel
    radius_m: float
    tier: Optional[str] = Field(default=None, description="Search tier that produced the results.")
    from_cache: bool = False
    count: int
    churches: List[ChurchModel]


class SharePayloadModel(BaseModel):
    title: str
    text: str


class ChurchLinksResponse(BaseModel):
    id: str
    links: Dict[str, str]
    share: SharePayloadModel


class LocationLabelResponse(BaseModel):
    label: str
