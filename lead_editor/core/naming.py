"""
Room name derivation.

A room's `name` is denormalized from its parent property's name and its
own room number: "<property name> <room number>". This module keeps that
derivation in one place:

- `reconcile_room_name` folds the derived name into a change set whenever
  the room number changes.
- `check_format` reports whether a stored name matches the derivation.
- `repair_name` assigns the derived name directly.
- `rename_rooms_for_property` recomputes names after a property rename.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from lead_editor.core.models import FieldKind, FormatCheckResult
from lead_editor.core.normalizer import normalize
from lead_editor.observability import metrics
from lead_editor.observability.logger import get_logger

logger = get_logger(__name__)

NAME_SEPARATOR = " "


def derive_room_name(parent_property_name: str, room_number: Any) -> str:
    """Expected room name for a property name and room number."""
    return f"{parent_property_name}{NAME_SEPARATOR}{room_number}"


def _text(value: Any) -> str | None:
    return normalize(value, FieldKind.TEXT)


def reconcile_room_name(
    changes: Mapping[str, Any],
    baseline: Mapping[str, Any],
    parent_property_name: str | None,
) -> dict[str, Any]:
    """
    Add the derived room name to a change set when the room number changed.

    The derived name overrides any `name` already present in `changes`;
    when it equals the stored name, an edited `name` is dropped instead.
    Nothing is derived when the new room number is blank or the parent
    property name is unknown.

    Args:
        changes: Change set from compute_changes (not mutated)
        baseline: Record the change set was computed against
        parent_property_name: Name of the room's property

    Returns:
        A new change set
    """
    reconciled = dict(changes)
    if "room_number" not in reconciled:
        return reconciled

    room_number = _text(reconciled["room_number"])
    if room_number is None:
        logger.info(
            "Room number cleared; leaving room name unchanged",
            extra={"record_id": baseline.get("id")}
        )
        return reconciled

    parent = _text(parent_property_name)
    if parent is None:
        logger.warning(
            "Parent property name unknown; room name not reconciled",
            extra={"record_id": baseline.get("id"), "room_number": room_number}
        )
        return reconciled

    expected_name = derive_room_name(parent, room_number)
    if expected_name == _text(baseline.get("name")):
        # Stored name is already the derived one; an edited name must not replace it
        reconciled.pop("name", None)
    else:
        reconciled["name"] = expected_name
    return reconciled


def check_format(record: Mapping[str, Any], parent_property_name: str | None) -> FormatCheckResult:
    """
    Check whether a room's stored name matches "<property name> <room number>".

    Args:
        record: Room record
        parent_property_name: Name of the room's property

    Returns:
        FormatCheckResult with reason "missing", "incorrect" or "correct"
    """
    name = _text(record.get("name"))
    room_number = _text(record.get("room_number"))

    if name is None or room_number is None:
        result = FormatCheckResult(is_correct=False, reason="missing")
    else:
        expected_name = derive_room_name(parent_property_name or "", room_number)
        if name == expected_name:
            result = FormatCheckResult(is_correct=True, reason="correct")
        else:
            result = FormatCheckResult(
                is_correct=False, reason="incorrect", expected_name=expected_name
            )

    metrics.increment_counter(metrics.name_format_checks_total, 1, reason=result.reason)
    return result


def repair_name(record: Mapping[str, Any], parent_property_name: str) -> dict[str, Any]:
    """
    Return a copy of the record with `name` set to its derived value.

    This is a direct assignment: it does not go through change detection,
    so it converges the name whatever the current diff state is.

    Raises:
        ValueError: If the record has no name or room number to derive from
    """
    result = check_format(record, parent_property_name)
    if result.reason == "missing":
        raise ValueError("Cannot repair a room without a name and room number")

    repaired = dict(record)
    if result.reason == "incorrect":
        repaired["name"] = result.expected_name
    return repaired


def rename_rooms_for_property(
    rooms: Iterable[Mapping[str, Any]],
    old_property_name: str,
    new_property_name: str,
) -> dict[str, str]:
    """
    Compute new room names after a property is renamed.

    Rooms named with the old property name as prefix ("<old> <suffix>")
    get the same suffix under the new name. Rooms named any other way are
    left alone.

    Args:
        rooms: Room records of the property (need "id" and "name")
        old_property_name: Property name before the rename
        new_property_name: Property name after the rename

    Returns:
        Room id to new name, only for rooms whose name changes
    """
    if old_property_name == new_property_name:
        return {}

    prefix = f"{old_property_name}{NAME_SEPARATOR}"
    renamed: dict[str, str] = {}

    for room in rooms:
        name = _text(room.get("name"))
        if name is None or not name.startswith(prefix):
            continue
        suffix = name[len(prefix):]
        renamed[str(room["id"])] = derive_room_name(new_property_name, suffix)

    return renamed
