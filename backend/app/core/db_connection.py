import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from app.core.config import settings
from app.core.logger import logs

class AsyncDBConnection:
    """
    Lazily opens one shared Motor client.
    Only used when STORAGE_MODE=mongodb.
    """
    _client: AsyncIOMotorClient | None = None

    def get_database(self) -> AsyncIOMotorDatabase:
        if settings.STORAGE_MODE != "mongodb":
            raise RuntimeError("MongoDB not available - STORAGE_MODE is set to 'local'")

        if AsyncDBConnection._client is None:
            # Motor client is non-blocking; it connects on first use.
            # tz_aware: created_at comes back as UTC, same as the local store
            AsyncDBConnection._client = AsyncIOMotorClient(settings.MONGO_URI, tz_aware=True)
            logs.log(logging.INFO, f"MongoDB client created for database '{settings.MONGO_DB_NAME}'")

        return AsyncDBConnection._client[settings.MONGO_DB_NAME]

    def close(self):
        if AsyncDBConnection._client is not None:
            AsyncDBConnection._client.close()
            AsyncDBConnection._client = None
            logs.log(logging.INFO, "MongoDB connection closed")

db_connection = AsyncDBConnection()

# Dependency for FastAPI
async def get_db() -> AsyncIOMotorDatabase:
    return db_connection.get_database()
