"""
Exception hierarchy for lead-editor.
"""

from typing import Any


class LeadEditorError(Exception):
    """Base class for all lead-editor errors."""


class NormalizationError(LeadEditorError):
    """Raised in strict mode when a non-empty value cannot be parsed for its field kind."""

    def __init__(self, kind: str, value: Any, field_name: str | None = None):
        self.kind = kind
        self.value = value
        self.field_name = field_name
        target = f" for field '{field_name}'" if field_name else ""
        super().__init__(f"Cannot normalize {value!r} as {kind}{target}")


class SchemaError(LeadEditorError):
    """Raised when an entity schema is malformed or unknown."""


class StoreError(LeadEditorError):
    """Raised by a record store when a read or write fails."""


class RecordNotFoundError(StoreError):
    """Raised when a record id does not exist in the store."""

    def __init__(self, entity_type: str, record_id: str):
        self.entity_type = entity_type
        self.record_id = record_id
        super().__init__(f"{entity_type} '{record_id}' not found")


class InvalidStateError(LeadEditorError):
    """Raised when an edit session is asked for an illegal state transition."""
