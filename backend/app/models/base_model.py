from pydantic import BaseModel, Field
from typing import List

from app.models.places_model import PlaceCandidate, Place

# --- API Request Models ---
# Empty defaults: blank input is rejected by the services with a ValidationError
class CaptionRequest(BaseModel):
    caption: str = Field("", description="Raw reel/post caption text")

class GeocodeRequest(BaseModel):
    address: str = Field("", description="Free-text address to resolve")

# --- API Response Models ---
class ParseReelResponse(BaseModel):
    success: bool = True
    data: PlaceCandidate

class GeocodeResponse(BaseModel):
    success: bool = True
    lat: float
    lng: float

class PlaceResponse(BaseModel):
    success: bool = True
    message: str
    data: Place

class PlacesListResponse(BaseModel):
    success: bool = True
    data: List[Place]
    count: int

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
