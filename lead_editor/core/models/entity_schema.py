"""
EntitySchema model: the ordered field table of one entity type.
"""

from typing import Literal

from pydantic import BaseModel, field_validator

from .field_descriptor import FieldDescriptor, FieldKind

ENTITY_TYPES = ("room", "room_type", "property")

EntityType = Literal["room", "room_type", "property"]


class EntitySchema(BaseModel):
    """
    Declared columns of a room, room type or property record.

    The schema replaces scattered field-name lists: every comparison,
    validation and display decision looks the field up here.
    """

    entity_type: EntityType
    fields: list[FieldDescriptor]

    @field_validator("fields")
    @classmethod
    def check_unique_names(cls, v: list[FieldDescriptor]) -> list[FieldDescriptor]:
        seen: set[str] = set()
        for descriptor in v:
            if descriptor.name in seen:
                raise ValueError(f"Duplicate field '{descriptor.name}'")
            seen.add(descriptor.name)
        return v

    class Config:
        frozen = True

    def get(self, name: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None

    def kind_of(self, name: str) -> FieldKind:
        """Kind of a field, text when undeclared."""
        descriptor = self.get(name)
        return descriptor.kind if descriptor else FieldKind.TEXT

    def kinds(self) -> dict[str, FieldKind]:
        """Field name to kind, in declaration order."""
        return {d.name: d.kind for d in self.fields}

    def required_fields(self) -> list[str]:
        return [d.name for d in self.fields if d.required]

    def editable_fields(self) -> list[str]:
        return [d.name for d in sorted(self.fields, key=lambda d: d.order) if d.editable]
