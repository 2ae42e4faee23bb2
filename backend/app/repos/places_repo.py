import logging
import uuid
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.exceptions import StorageError
from app.core.logger import logs
from app.models.places_model import Place

class PlacesRepository:
    """MongoDB-backed place storage. Ids are UUID strings kept in "id", not Mongo's _id."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db["places"]

    async def insert(self, record: dict) -> Place:
        place = Place(id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc), **record)
        try:
            # insert_one adds _id to the dict it is given
            await self.collection.insert_one(place.model_dump())
        except PyMongoError as e:
            logs.log(logging.ERROR, f"Failed to save place: {str(e)}")
            raise StorageError("failed to save place") from e
        return place

    async def list_all(self) -> list[Place]:
        """All places, newest first."""
        try:
            cursor = self.collection.find({}, {"_id": 0}).sort("created_at", -1)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logs.log(logging.ERROR, f"Failed to list places: {str(e)}")
            raise StorageError("failed to list places") from e
        return [Place(**doc) for doc in docs]

    async def delete(self, place_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"id": place_id})
        except PyMongoError as e:
            logs.log(logging.ERROR, f"Failed to delete place {place_id}: {str(e)}")
            raise StorageError("failed to delete place") from e
        return result.deleted_count > 0
