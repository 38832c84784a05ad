"""
Record store boundary.

A RecordStore reads and partially updates room, room type and property
records and keeps the change history of every update. Calls are blocking;
async callers run them in a worker thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from lead_editor.core.models import ENTITY_TYPES, ChangeLogEntry
from lead_editor.errors import StoreError


class RecordStore(ABC):
    """Abstract store for the three editable entity types."""

    @abstractmethod
    def get(self, entity_type: str, record_id: str) -> dict[str, Any] | None:
        """
        Read one record.

        Returns:
            The record, or None if it does not exist
        """

    @abstractmethod
    def put(
        self,
        entity_type: str,
        record_id: str,
        changes: Mapping[str, Any],
        actor: str,
    ) -> dict[str, Any]:
        """
        Apply a partial update and log one history entry per changed field.

        Only the fields in `changes` are written.

        Args:
            entity_type: room, room_type or property
            record_id: Record to update
            changes: Field name to new value
            actor: Identity of the editor (recorded as changed_by)

        Returns:
            The fields as stored after the update

        Raises:
            RecordNotFoundError: If the record does not exist
            StoreError: If the update fails
        """

    @abstractmethod
    def list(self, entity_type: str, **filters: Any) -> list[dict[str, Any]]:
        """Records of an entity type whose fields equal every filter value."""

    @abstractmethod
    def find_duplicates(
        self,
        entity_type: str,
        field_name: str,
        value: Any,
        exclude_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Records other than `exclude_id` whose `field_name` equals `value`."""

    @abstractmethod
    def history(self, entity_type: str, record_id: str, limit: int = 100) -> list[ChangeLogEntry]:
        """Change history of a record, newest first."""

    def close(self) -> None:
        """Release any resources held by the store."""

    @staticmethod
    def check_entity_type(entity_type: str) -> str:
        if entity_type not in ENTITY_TYPES:
            raise StoreError(f"Unknown entity type '{entity_type}'")
        return entity_type
