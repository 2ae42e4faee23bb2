from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.db_connection import get_db
from app.models.base_model import MessageResponse, PlaceResponse, PlacesListResponse
from app.models.places_model import PlaceCreate
from app.repos.local_repo import LocalRepository
from app.repos.places_repo import PlacesRepository
from app.routes.geocode_route import get_geocode_resolver
from app.services.Geocode_service import GeocodeResolver
from app.services.Places_service import PlacesService

router = APIRouter(prefix="/api", tags=["Places"])

# --- Dependency Injection Helpers ---
async def get_repository():
    """Get the appropriate repository based on storage mode."""
    if settings.STORAGE_MODE == "mongodb":
        return PlacesRepository(await get_db())
    return LocalRepository()

def get_places_service(
    repo=Depends(get_repository),
    resolver: GeocodeResolver = Depends(get_geocode_resolver)
) -> PlacesService:
    return PlacesService(repo, resolver)

# --- Endpoints ---
@router.post("/save-place", response_model=PlaceResponse)
async def save_place_endpoint(
    request: PlaceCreate,
    service: PlacesService = Depends(get_places_service)
):
    place = await service.save_place(request)
    return PlaceResponse(message="Place saved", data=place)

@router.get("/places", response_model=PlacesListResponse)
async def list_places_endpoint(service: PlacesService = Depends(get_places_service)):
    places = await service.list_places()
    return PlacesListResponse(data=places, count=len(places))

@router.delete("/places/{place_id}", response_model=MessageResponse)
async def delete_place_endpoint(
    place_id: str,
    service: PlacesService = Depends(get_places_service)
):
    await service.delete_place(place_id)
    return MessageResponse(message="Place deleted")
