"""
ChangeLogEntry model: one field-level change written by a submission.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChangeLogEntry(BaseModel):
    """
    History row for a changed field.

    Attributes:
        log_id: Auto-increment primary key (None until stored)
        entity_type: room, room_type or property
        record_id: Which record changed
        field_name: Which field changed
        old_value: Previous value (as string)
        new_value: Submitted value (as string)
        changed_by: Actor identity sent with the submission
        changed_at: When the change was applied
    """

    log_id: int | None = None
    entity_type: str
    record_id: str
    field_name: str
    old_value: str | None = None
    new_value: str | None = None
    changed_by: str
    changed_at: datetime = Field(default_factory=_utcnow)

    @field_validator("old_value", "new_value", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str | None:
        if v is None:
            return None
        if isinstance(v, dict) and "value" in v:
            v = v["value"]
            if v is None:
                return None
        return str(v)

    class Config:
        json_schema_extra = {
            "example": {
                "log_id": 1,
                "entity_type": "room",
                "record_id": "R-0001",
                "field_name": "status",
                "old_value": "A",
                "new_value": "B",
                "changed_by": "user@example.com",
            }
        }
