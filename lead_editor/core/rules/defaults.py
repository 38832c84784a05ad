"""
Built-in validation rules per entity type, used when no rules file is configured.
"""

from typing import Any

from lead_editor.core.models import EntitySchema, FieldKind

from .rule_config import RuleConfigBuilder

# Statuses from which a room must be linked to a room type
ROOM_TYPE_REQUIRED_STATUSES = ["A", "B", "C", "D", "E", "クローズ"]


def default_rules(schema: EntitySchema) -> list[dict[str, Any]]:
    """
    Rules derived from a schema: required editable fields, parse checks on
    numeric and date fields, and the allowed-character check on names.
    """
    builder = RuleConfigBuilder()

    for field in schema.fields:
        if not field.editable:
            continue
        if field.required:
            builder.add_required_field(field.name)
        if field.kind in (FieldKind.NUMERIC, FieldKind.DATE):
            builder.add_type_check(field.name)

    if schema.entity_type == "room":
        builder.add_characters("room_number")
        builder.add_required_when("lead_room_type_id", "status", ROOM_TYPE_REQUIRED_STATUSES)
    else:
        builder.add_characters("name")

    return builder.build()
