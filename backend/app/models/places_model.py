from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, timezone

class PlaceCandidate(BaseModel):
    """What the extractor read out of a caption. Never persisted as-is."""
    name: str
    address: str
    category: str

class Coordinate(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

class GeocodeCandidate(Coordinate):
    """One provider hit, with provider field names already normalized."""
    label: Optional[str] = None

class PlaceCreate(BaseModel):
    # Blank name/address are rejected by PlacesService
    name: str = ""
    address: str = ""
    category: Optional[str] = None
    shared_from: Optional[str] = None
    memo: Optional[str] = None
    instagram_url: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)
    resolve_coordinates: bool = False

class Place(BaseModel):
    id: str
    name: str
    address: str
    category: Optional[str] = None
    shared_from: Optional[str] = None
    memo: Optional[str] = None
    instagram_url: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
