"""
FieldDescriptor model declaring the kind of one entity column.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class FieldKind(str, Enum):
    """How a column's values are compared when detecting changes."""

    TEXT = "text"
    NUMERIC = "numeric"
    DATE = "date"
    SELECT = "select"

    @classmethod
    def parse(cls, raw: "str | FieldKind") -> "FieldKind":
        """
        Resolve a kind from its own value or from a column type name.

        Args:
            raw: "numeric", "NUMERIC", "INT64", "DATE", "TIMESTAMP", "dropdown", ...

        Raises:
            ValueError: If the name is not recognised
        """
        if isinstance(raw, FieldKind):
            return raw
        key = str(raw).strip().lower()
        if key in KIND_ALIASES:
            return KIND_ALIASES[key]
        raise ValueError(f"Unsupported field kind: {raw}")


# Warehouse column types and UI widget names seen in schema files
KIND_ALIASES: dict[str, FieldKind] = {
    "text": FieldKind.TEXT,
    "string": FieldKind.TEXT,
    "str": FieldKind.TEXT,
    "textarea": FieldKind.TEXT,
    "numeric": FieldKind.NUMERIC,
    "number": FieldKind.NUMERIC,
    "integer": FieldKind.NUMERIC,
    "int64": FieldKind.NUMERIC,
    "float": FieldKind.NUMERIC,
    "float64": FieldKind.NUMERIC,
    "bignumeric": FieldKind.NUMERIC,
    "date": FieldKind.DATE,
    "timestamp": FieldKind.DATE,
    "datetime": FieldKind.DATE,
    "select": FieldKind.SELECT,
    "dropdown": FieldKind.SELECT,
    "singleselect": FieldKind.SELECT,
    "bool": FieldKind.SELECT,
    "boolean": FieldKind.SELECT,
}


class FieldDescriptor(BaseModel):
    """
    One column of an entity schema.

    Attributes:
        name: Column name ("room_number")
        kind: Comparison kind used by the normalizer
        label: Display name shown by editors ("部屋番号")
        order: Display order
        editable: Whether editors may change the value
        required: Whether the value must be present after normalization
        options: Allowed values for select fields
    """

    name: str = Field(..., min_length=1)
    kind: FieldKind = FieldKind.TEXT
    label: str | None = None
    order: int = 0
    editable: bool = True
    required: bool = False
    options: list[str] | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def parse_kind(cls, v: Any) -> FieldKind:
        return FieldKind.parse(v)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "key_handover_scheduled_date",
                "kind": "date",
                "label": "鍵引き渡し予定日",
                "order": 8,
                "editable": True,
                "required": False,
            }
        }
