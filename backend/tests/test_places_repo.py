import asyncio
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from app.core import db_connection as db_module
from app.core.exceptions import PlaceNotFoundError, StorageError
from app.models.places_model import PlaceCreate
from app.repos.places_repo import PlacesRepository
from app.services.Places_service import PlacesService


@pytest.fixture
def collection():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))

    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    collection.find.return_value = cursor
    return collection


@pytest.fixture
def repo(collection):
    return PlacesRepository({"places": collection})


def test_insert_stores_uuid_and_utc_timestamp(repo, collection):
    place = asyncio.run(repo.insert({"name": "a", "address": "b", "user_id": "u"}))

    doc = collection.insert_one.await_args.args[0]
    assert doc["id"] == place.id
    assert doc["name"] == "a"
    assert doc["created_at"].tzinfo is not None
    assert "_id" not in place.model_dump()


def test_list_hides_mongo_id_and_sorts_newest_first(repo, collection):
    cursor = collection.find.return_value
    cursor.to_list.return_value = [
        {"id": "new", "name": "c", "address": "d", "user_id": "u",
         "created_at": datetime(2025, 6, 1, tzinfo=timezone.utc)},
        {"id": "old", "name": "a", "address": "b", "user_id": "u",
         "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc)},
    ]

    places = asyncio.run(repo.list_all())

    collection.find.assert_called_once_with({}, {"_id": 0})
    cursor.sort.assert_called_once_with("created_at", -1)
    assert [p.id for p in places] == ["new", "old"]
    assert places[0].created_at.tzinfo is not None


def test_delete_reports_whether_anything_was_removed(repo, collection):
    assert asyncio.run(repo.delete("abc")) is True
    collection.delete_one.assert_awaited_once_with({"id": "abc"})

    collection.delete_one.return_value = MagicMock(deleted_count=0)
    assert asyncio.run(repo.delete("abc")) is False


def test_delete_unknown_id_through_service(repo, collection):
    collection.delete_one.return_value = MagicMock(deleted_count=0)
    with pytest.raises(PlaceNotFoundError):
        asyncio.run(PlacesService(repo).delete_place("missing"))


def test_save_through_service(repo, collection):
    place = asyncio.run(PlacesService(repo).save_place(
        PlaceCreate(name="a", address="b", latitude=37.5, longitude=127.0)
    ))
    doc = collection.insert_one.await_args.args[0]
    assert (doc["latitude"], doc["longitude"]) == (37.5, 127.0)
    assert doc["user_id"] == place.user_id


@pytest.mark.parametrize("method, call", [
    ("insert_one", lambda repo: repo.insert({"name": "a", "address": "b", "user_id": "u"})),
    ("delete_one", lambda repo: repo.delete("abc")),
])
def test_driver_errors_become_storage_errors(repo, collection, method, call):
    getattr(collection, method).side_effect = PyMongoError("connection reset")
    with pytest.raises(StorageError):
        asyncio.run(call(repo))


def test_list_driver_error_becomes_storage_error(repo, collection):
    collection.find.return_value.to_list.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(StorageError):
        asyncio.run(repo.list_all())


def test_client_is_timezone_aware(monkeypatch):
    monkeypatch.setattr(db_module.settings, "STORAGE_MODE", "mongodb")
    with patch.object(db_module, "AsyncIOMotorClient") as mock_client:
        connection = db_module.AsyncDBConnection()
        try:
            connection.get_database()
            mock_client.assert_called_once_with(db_module.settings.MONGO_URI, tz_aware=True)
        finally:
            connection.close()


def test_database_unavailable_in_local_mode(monkeypatch):
    monkeypatch.setattr(db_module.settings, "STORAGE_MODE", "local")
    with pytest.raises(RuntimeError):
        db_module.AsyncDBConnection().get_database()
