"""
Local file-based place storage.
Keeps every place in one JSON file instead of MongoDB.
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from app.core.config import settings
from app.core.exceptions import StorageError
from app.core.logger import logs
from app.models.places_model import Place


class LocalRepository:
    """Same interface as PlacesRepository, backed by data/places.json."""

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir or settings.LOCAL_DATA_DIR)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.places_file = self.base_dir / "places.json"

    def _load(self) -> list[dict]:
        if not self.places_file.exists():
            return []
        try:
            with open(self.places_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logs.log(logging.ERROR, f"Failed to read {self.places_file}: {str(e)}")
            raise StorageError("failed to read places") from e

    def _save(self, places: list[dict]):
        try:
            with open(self.places_file, "w", encoding="utf-8") as f:
                json.dump(places, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logs.log(logging.ERROR, f"Failed to write {self.places_file}: {str(e)}")
            raise StorageError("failed to write places") from e

    async def insert(self, record: dict) -> Place:
        place = Place(id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc), **record)
        places = self._load()
        places.append(place.model_dump(mode="json"))
        self._save(places)
        return place

    async def list_all(self) -> list[Place]:
        """All places, newest first."""
        places = [Place(**p) for p in self._load()]
        return sorted(places, key=lambda p: p.created_at, reverse=True)

    async def delete(self, place_id: str) -> bool:
        places = self._load()
        remaining = [p for p in places if p.get("id") != place_id]
        if len(remaining) == len(places):
            return False
        self._save(remaining)
        return True
