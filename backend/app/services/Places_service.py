import logging
from app.core.config import settings
from app.core.exceptions import GeocodeError, PlaceNotFoundError, ValidationError
from app.core.logger import logs
from app.models.places_model import Place, PlaceCreate
from app.services.Caption_service import normalize_category
from app.services.Geocode_service import GeocodeResolver

class PlacesService:
    def __init__(self, repo, resolver: GeocodeResolver | None = None):
        # repo is a PlacesRepository (MongoDB) or a LocalRepository
        self.repo = repo
        self.resolver = resolver

    async def save_place(self, request: PlaceCreate) -> Place:
        name = request.name.strip()
        address = request.address.strip()
        if not name or not address:
            raise ValidationError("name and address are required")

        latitude, longitude = request.latitude, request.longitude
        if (latitude is None) != (longitude is None):
            raise ValidationError("latitude and longitude must be given together")

        if request.resolve_coordinates and latitude is None and self.resolver:
            try:
                coordinate = await self.resolver.resolve(address)
                latitude, longitude = coordinate.lat, coordinate.lng
            except GeocodeError:
                logs.log(logging.WARNING, f"No coordinates for '{address}', saving without them")

        record = {
            "name": name,
            "address": address,
            "category": normalize_category(request.category) if request.category else None,
            "shared_from": request.shared_from or None,
            "memo": request.memo or None,
            "instagram_url": request.instagram_url or None,
            "latitude": latitude,
            "longitude": longitude,
            # TODO: replace with the caller's id once authentication is added
            "user_id": settings.DEFAULT_USER_ID,
        }

        place = await self.repo.insert(record)
        logs.log(logging.INFO, f"Saved place {place.id}: {place.name} ({place.address})")
        return place

    async def list_places(self) -> list[Place]:
        places = await self.repo.list_all()
        logs.log(logging.INFO, f"Listed {len(places)} places")
        return places

    async def delete_place(self, place_id: str):
        if not await self.repo.delete(place_id):
            raise PlaceNotFoundError("place not found")
        logs.log(logging.INFO, f"Deleted place {place_id}")
