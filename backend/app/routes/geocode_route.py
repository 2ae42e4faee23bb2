from fastapi import APIRouter, Depends

from app.models.base_model import GeocodeRequest, GeocodeResponse
from app.services.Geocode_service import GeocodeResolver

router = APIRouter(prefix="/api", tags=["Geocode"])

def get_geocode_resolver() -> GeocodeResolver:
    return GeocodeResolver()

@router.post("/geocode", response_model=GeocodeResponse)
async def geocode_endpoint(
    request: GeocodeRequest,
    resolver: GeocodeResolver = Depends(get_geocode_resolver)
):
    coordinate = await resolver.resolve(request.address)
    return GeocodeResponse(lat=coordinate.lat, lng=coordinate.lng)
