"""
Record loading through the response cache.
"""

import copy
from typing import Any

from lead_editor.core.models import ChangeLogEntry
from lead_editor.errors import RecordNotFoundError
from lead_editor.observability.logger import get_logger
from lead_editor.store import RecordStore, TTLCache, cache_key, record_endpoint

logger = get_logger(__name__)


class RecordService:
    """
    Read side of the editors.

    Single-record reads are cached per endpoint for the cache's TTL;
    `force_refresh` skips and replaces the cached copy.
    """

    def __init__(self, store: RecordStore, cache: TTLCache | None = None):
        self.store = store
        self.cache = cache if cache is not None else TTLCache()

    def get_record(self, entity_type: str, record_id: str, force_refresh: bool = False) -> dict[str, Any]:
        """
        Load one record.

        Raises:
            RecordNotFoundError: If the store has no such record
        """
        key = cache_key(record_endpoint(entity_type, record_id))
        if force_refresh:
            self.cache.invalidate(key)
        else:
            cached = self.cache.get(key)
            if cached is not None:
                return copy.deepcopy(cached)

        record = self.store.get(entity_type, record_id)
        if record is None:
            raise RecordNotFoundError(entity_type, record_id)

        self.cache.set(key, record)
        return copy.deepcopy(record)

    def get_parent_property_name(self, room: dict[str, Any]) -> str | None:
        """Name of the property a room belongs to, or None if it cannot be found."""
        property_id = room.get("lead_property_id")
        if not property_id:
            return None
        try:
            return self.get_record("property", str(property_id)).get("name")
        except RecordNotFoundError:
            logger.warning(
                "Room references a missing property",
                extra={"record_id": room.get("id"), "lead_property_id": property_id}
            )
            return None

    def list_rooms(self, property_id: str) -> list[dict[str, Any]]:
        return self.store.list("room", lead_property_id=property_id)

    def list_room_types(self, property_id: str) -> list[dict[str, Any]]:
        return self.store.list("room_type", lead_property_id=property_id)

    def history(self, entity_type: str, record_id: str, limit: int = 100) -> list[ChangeLogEntry]:
        return self.store.history(entity_type, record_id, limit)
