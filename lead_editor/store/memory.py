"""
In-memory record store.

Used when no database is configured and in tests. It is seeded with a
small sample property so the editors have something to work on.
"""

from __future__ import annotations

import copy
import itertools
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from lead_editor.core.models import ChangeLogEntry
from lead_editor.core.normalizer import normalize
from lead_editor.errors import RecordNotFoundError
from lead_editor.observability.logger import get_logger
from lead_editor.utils.validation import validate_actor, validate_limit, validate_record_id

from .base import RecordStore

logger = get_logger(__name__)


def sample_records() -> dict[str, list[dict[str, Any]]]:
    """Sample property with its rooms and room types."""
    property_name = "サンプル物件"
    rooms = [
        ("R001", "101", "A", "RT001"),
        ("R002", "102", "B", "RT002"),
        ("R003", "103", "運営判断中", None),
        ("R004", "201", "C", "RT002"),
        ("R005", "202", "", None),
    ]
    return {
        "property": [{
            "id": "P001",
            "name": property_name,
            "tag": "タグP001",
            "is_trade": "売買",
            "is_lease": "借上",
            "lead_from": "サンプルlead元",
            "lead_channel": "レインズ",
            "trade_form": "専任",
            "lead_from_representative": "田中太郎",
            "lead_from_representative_phone": "03-1234-5678",
            "lead_from_representative_email": "tanaka@example.com",
            "mt_representative": "MT担当者",
            "create_date": {"value": "2025-06-30"},
            "information_acquisition_date": "2025-06-30",
            "latest_inventory_confirmation_date": "2025-06-30",
            "num_of_occupied_rooms": 5,
            "num_of_vacant_rooms": 3,
            "minpaku_feasibility": "可",
            "key_handling_date": "2025-07-01",
        }],
        "room": [
            {
                "id": room_id,
                "status": status,
                # 201 keeps a legacy name so format checks have something to report
                "name": "201号室" if room_number == "201" else f"{property_name} {room_number}",
                "room_number": room_number,
                "lead_property_id": "P001",
                "lead_room_type_id": room_type_id,
                "create_date": {"value": "2025-06-30"},
                "key_handover_scheduled_date": None,
                "vacate_setup": "",
            }
            for room_id, room_number, status, room_type_id in rooms
        ],
        "room_type": [
            {"id": "RT001", "name": "1K", "lead_property_id": "P001", "floor_area": 25.5, "rent": 85000, "pax": 2},
            {"id": "RT002", "name": "1DK", "lead_property_id": "P001", "floor_area": 30.2, "rent": 98000, "pax": 3},
            {"id": "RT003", "name": "1LDK", "lead_property_id": "P001", "floor_area": 40.0, "rent": 125000, "pax": 4},
            {"id": "RT004", "name": "2DK", "lead_property_id": "P001", "floor_area": 45.8, "rent": 132000, "pax": 4},
        ],
    }


class InMemoryRecordStore(RecordStore):
    """
    Dict-backed RecordStore.

    Records are copied on the way in and out, so callers never share state
    with the store.
    """

    def __init__(self, records: Mapping[str, Iterable[Mapping[str, Any]]] | None = None, seed: bool = False):
        """
        Args:
            records: Entity type to records to load
            seed: Load the sample property when no records are given
        """
        self._lock = threading.Lock()
        self._records: dict[str, dict[str, dict[str, Any]]] = {"property": {}, "room": {}, "room_type": {}}
        self._history: list[ChangeLogEntry] = []
        self._log_ids = itertools.count(1)

        if records is None and seed:
            records = sample_records()
        for entity_type, rows in (records or {}).items():
            self.check_entity_type(entity_type)
            for row in rows:
                self._records[entity_type][str(row["id"])] = copy.deepcopy(dict(row))

    def get(self, entity_type: str, record_id: str) -> dict[str, Any] | None:
        self.check_entity_type(entity_type)
        record_id = validate_record_id(record_id)
        with self._lock:
            record = self._records[entity_type].get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def put(
        self,
        entity_type: str,
        record_id: str,
        changes: Mapping[str, Any],
        actor: str,
    ) -> dict[str, Any]:
        self.check_entity_type(entity_type)
        record_id = validate_record_id(record_id)
        actor = validate_actor(actor)

        with self._lock:
            record = self._records[entity_type].get(record_id)
            if record is None:
                raise RecordNotFoundError(entity_type, record_id)

            for field_name, new_value in changes.items():
                self._history.append(ChangeLogEntry(
                    log_id=next(self._log_ids),
                    entity_type=entity_type,
                    record_id=record_id,
                    field_name=field_name,
                    old_value=record.get(field_name),
                    new_value=new_value,
                    changed_by=actor,
                ))
                record[field_name] = copy.deepcopy(new_value)

            applied = {field_name: copy.deepcopy(record[field_name]) for field_name in changes}

        logger.debug(
            f"Applied {len(applied)} field(s) to {entity_type} {record_id}",
            extra={"entity_type": entity_type, "record_id": record_id, "fields": list(applied)}
        )
        return applied

    def list(self, entity_type: str, **filters: Any) -> list[dict[str, Any]]:
        self.check_entity_type(entity_type)
        with self._lock:
            rows = list(self._records[entity_type].values())
            return [
                copy.deepcopy(row) for row in rows
                if all(normalize(row.get(k)) == normalize(v) for k, v in filters.items())
            ]

    def find_duplicates(
        self,
        entity_type: str,
        field_name: str,
        value: Any,
        exclude_id: str | None = None,
    ) -> list[dict[str, Any]]:
        target = normalize(value)
        if target is None:
            return []
        return [
            row for row in self.list(entity_type)
            if str(row["id"]) != str(exclude_id) and normalize(row.get(field_name)) == target
        ]

    def history(self, entity_type: str, record_id: str, limit: int = 100) -> list[ChangeLogEntry]:
        self.check_entity_type(entity_type)
        record_id = validate_record_id(record_id)
        limit = validate_limit(limit)
        with self._lock:
            entries = [
                entry for entry in reversed(self._history)
                if entry.entity_type == entity_type and entry.record_id == record_id
            ]
        return entries[:limit]
