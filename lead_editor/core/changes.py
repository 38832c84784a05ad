"""
Change set computation.

`compute_changes` compares a baseline record with the user's edited copy
field by field through the normalizer and returns only the fields whose
normalized values differ, carrying the edited (un-normalized) value so the
store receives what the user entered.
"""

from collections.abc import Mapping
from typing import Any

from lead_editor.core.models import EntitySchema, FieldKind
from lead_editor.core.normalizer import normalize
from lead_editor.errors import NormalizationError

Record = dict[str, Any]
ChangeSet = dict[str, Any]
SchemaLike = Mapping[str, FieldKind] | EntitySchema


def _kinds(schema: SchemaLike | None) -> Mapping[str, FieldKind]:
    if schema is None:
        return {}
    if isinstance(schema, EntitySchema):
        return schema.kinds()
    return schema


def compute_changes(
    baseline: Mapping[str, Any],
    edited: Mapping[str, Any],
    schema: SchemaLike | None = None,
    *,
    strict: bool = False,
) -> ChangeSet:
    """
    Compute the minimal changed-fields map between two records.

    Only fields present in `edited` are considered; a field missing from
    `edited` is never treated as deleted.

    Args:
        baseline: Last loaded copy of the record
        edited: The user's copy
        schema: Field kinds (undeclared fields compare as text)
        strict: Forwarded to the normalizer for edited values

    Returns:
        Field name to edited value for every field that changed

    Raises:
        NormalizationError: strict=True and an edited value does not parse
    """
    kinds = _kinds(schema)
    changes: ChangeSet = {}

    for field_name, edited_value in edited.items():
        kind = kinds.get(field_name, FieldKind.TEXT)
        baseline_value = baseline.get(field_name)
        # Untouched values are never rejected, even in strict mode
        check = strict and edited_value != baseline_value
        try:
            new = normalize(edited_value, kind, strict=check)
        except NormalizationError as e:
            raise NormalizationError(e.kind, e.value, field_name) from e
        old = normalize(baseline_value, kind)
        if new != old:
            changes[field_name] = edited_value

    return changes


def has_changes(
    baseline: Mapping[str, Any],
    edited: Mapping[str, Any],
    schema: SchemaLike | None = None,
) -> bool:
    return bool(compute_changes(baseline, edited, schema))


def is_modified(current: Any, original: Any) -> bool:
    """
    Loose single-value comparison used for per-field dirty markers.

    None and "" are equivalent; everything else is compared as strings.
    """
    def as_text(v: Any) -> str:
        return "" if v is None or v == "" else str(v)

    return as_text(current) != as_text(original)


def merge_applied(baseline: Mapping[str, Any], applied: Mapping[str, Any]) -> Record:
    """Return a new baseline with the store's applied fields laid over it."""
    merged = dict(baseline)
    merged.update(applied)
    return merged
