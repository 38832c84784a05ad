"""
Edit sessions.

An EditSession holds the last loaded copy of a record (the baseline) and
the user's draft, and walks one save through

    VIEWING -> EDITING -> VALIDATING -> SUBMITTING -> VIEWING

Validation failures and store failures return the session to EDITING with
the draft intact. Cancelling while editing discards the draft; cancelling
while a save is in flight stops it before the store is called.
"""

import asyncio
import copy
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from lead_editor.core.changes import compute_changes, merge_applied
from lead_editor.core.models import EntitySchema, FormatCheckResult, SubmitResult
from lead_editor.core.naming import (
    check_format,
    derive_room_name,
    reconcile_room_name,
    rename_rooms_for_property,
)
from lead_editor.core.normalizer import normalize
from lead_editor.core.rules import RuleEngine
from lead_editor.errors import InvalidStateError, NormalizationError
from lead_editor.observability.logger import get_logger

from .submitter import UpdateSubmitter

logger = get_logger(__name__)

DUPLICATE_NAME_MESSAGE = "同じ名前のレコードが既に存在します。"
SUBMIT_ERROR_KEY = "_submit"


class EditState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class SaveOutcome(BaseModel):
    """
    Result of EditSession.save.

    Attributes:
        status: saved, noop, invalid, failed or cancelled
        changes: Change set that was (or would have been) submitted
        errors: Field name to message when invalid or failed
        result: Submitter result, when the submitter was called
        cascade: Room id to submit status for rooms renamed after a property rename
    """

    status: Literal["saved", "noop", "invalid", "failed", "cancelled"]
    changes: dict[str, Any] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    result: SubmitResult | None = None
    cascade: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status in ("saved", "noop")


class EditSession:
    """Diff, validate and submit edits of one record."""

    entity_type: str = ""

    def __init__(
        self,
        baseline: dict[str, Any],
        schema: EntitySchema,
        submitter: UpdateSubmitter,
        rule_engine: RuleEngine | None = None,
        *,
        strict: bool = False,
    ):
        if schema.entity_type != self.entity_type:
            raise ValueError(f"{type(self).__name__} needs a {self.entity_type} schema, got {schema.entity_type}")
        if baseline.get("id") in (None, ""):
            raise ValueError("Baseline record has no id")

        self.baseline = dict(baseline)
        self.schema = schema
        self.submitter = submitter
        self.rule_engine = rule_engine
        self.strict = strict

        self.state = EditState.VIEWING
        self.draft: dict[str, Any] | None = None
        self.errors: dict[str, str] = {}
        self.cancelled = False

    @property
    def record_id(self) -> str:
        return str(self.baseline["id"])

    def _require(self, *states: EditState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidStateError(f"Session is {self.state.value}; expected {allowed}")

    def _to_viewing(self) -> None:
        self.state = EditState.VIEWING
        self.draft = None

    def begin_edit(self) -> dict[str, Any]:
        """Start editing a copy of the baseline and return it."""
        self._require(EditState.VIEWING)
        self.draft = copy.deepcopy(self.baseline)
        self.errors = {}
        self.cancelled = False
        self.state = EditState.EDITING
        return self.draft

    def set_field(self, name: str, value: Any) -> None:
        self._require(EditState.EDITING)
        descriptor = self.schema.get(name)
        if descriptor is not None and not descriptor.editable:
            raise ValueError(f"Field '{name}' is not editable")
        self.draft[name] = value
        self.errors.pop(name, None)

    def is_field_modified(self, name: str) -> bool:
        """Whether one field of the draft differs from the baseline under normalization."""
        if self.draft is None:
            return False
        kind = self.schema.kind_of(name)
        return normalize(self.draft.get(name), kind) != normalize(self.baseline.get(name), kind)

    def pending_changes(self) -> dict[str, Any]:
        """
        Change set the draft would submit now, including derived fields.

        Raises:
            InvalidStateError: If no draft is open
            NormalizationError: In strict mode, for an edited value that does not parse
        """
        if self.draft is None:
            raise InvalidStateError("No draft to diff; call begin_edit() first")
        changes = compute_changes(self.baseline, self.draft, self.schema, strict=self.strict)
        return self.derive(changes)

    def derive(self, changes: dict[str, Any]) -> dict[str, Any]:
        """Add derived fields to a change set."""
        return changes

    def cancel(self) -> None:
        """Abandon the draft, or stop a save that has not reached the store yet."""
        self.cancelled = True
        if self.state is EditState.EDITING:
            self._to_viewing()
            self.errors = {}

    async def before_submit(self, changes: dict[str, Any]) -> dict[str, str]:
        """Checks that need the store; returns field errors."""
        return {}

    async def after_submit(
        self, previous: dict[str, Any], changes: dict[str, Any], outcome: SaveOutcome, actor: str
    ) -> None:
        """Follow-up work after a successful save; `previous` is the baseline before it."""

    async def save(self, actor: str) -> SaveOutcome:
        """
        Validate and submit the draft's changes.

        Args:
            actor: Identity of the editor, recorded with the change

        Returns:
            SaveOutcome; the session is VIEWING after saved, noop and
            cancelled outcomes and EDITING after invalid and failed ones
        """
        self._require(EditState.EDITING)

        try:
            changes = self.pending_changes()
        except NormalizationError as e:
            self.errors = {e.field_name or SUBMIT_ERROR_KEY: str(e)}
            return SaveOutcome(status="invalid", errors=self.errors)

        if not changes:
            result = await self.submitter.submit(self.entity_type, self.record_id, changes, actor)
            self._to_viewing()
            return SaveOutcome(status="noop", result=result)

        self.state = EditState.VALIDATING
        errors: dict[str, str] = {}
        if self.rule_engine is not None:
            errors = dict(self.rule_engine.validate(self.draft, self.record_id).errors)
        if not errors:
            errors = await self.before_submit(changes)
        if errors:
            self.errors = errors
            self.state = EditState.EDITING
            return SaveOutcome(status="invalid", changes=changes, errors=errors)

        if self.cancelled:
            logger.info(
                "Save cancelled before submission",
                extra={"entity_type": self.entity_type, "record_id": self.record_id}
            )
            self._to_viewing()
            return SaveOutcome(status="cancelled", changes=changes)

        self.state = EditState.SUBMITTING
        result = await self.submitter.submit(self.entity_type, self.record_id, changes, actor)
        if not result.ok:
            self.errors = {SUBMIT_ERROR_KEY: result.reason}
            self.state = EditState.EDITING
            return SaveOutcome(status="failed", changes=changes, errors=self.errors, result=result)

        previous = self.baseline
        self.baseline = merge_applied(previous, result.applied_fields)
        outcome = SaveOutcome(status="saved", changes=changes, result=result)
        await self.after_submit(previous, changes, outcome, actor)
        self.errors = {}
        self._to_viewing()
        return outcome


class RoomTypeEditSession(EditSession):
    entity_type = "room_type"


class RoomEditSession(EditSession):
    """
    Room editing with the derived room name.

    The name follows "<property name> <room number>": it is recomputed when
    the room number changes and can be repaired on demand.
    """

    entity_type = "room"

    def __init__(
        self,
        baseline: dict[str, Any],
        schema: EntitySchema,
        submitter: UpdateSubmitter,
        rule_engine: RuleEngine | None = None,
        *,
        parent_property_name: str | None = None,
        check_duplicates: bool = False,
        strict: bool = False,
    ):
        super().__init__(baseline, schema, submitter, rule_engine, strict=strict)
        self.parent_property_name = parent_property_name
        self.check_duplicates = check_duplicates

    def derive(self, changes: dict[str, Any]) -> dict[str, Any]:
        return reconcile_room_name(changes, self.baseline, self.parent_property_name)

    def preview_name(self) -> str | None:
        """Name the room would get from the current room number, if derivable."""
        source = self.draft if self.draft is not None else self.baseline
        room_number = normalize(source.get("room_number"))
        parent = normalize(self.parent_property_name)
        if room_number is None or parent is None:
            return None
        return derive_room_name(parent, room_number)

    def format_check(self) -> FormatCheckResult:
        return check_format(self.baseline, self.parent_property_name)

    async def before_submit(self, changes: dict[str, Any]) -> dict[str, str]:
        if not self.check_duplicates or "name" not in changes:
            return {}
        duplicates = await asyncio.to_thread(
            self.submitter.store.find_duplicates, "room", "name", changes["name"], self.record_id
        )
        if duplicates:
            return {"name": DUPLICATE_NAME_MESSAGE}
        return {}

    async def repair_name(self, actor: str) -> SaveOutcome:
        """
        Assign the derived name directly, without diffing a draft.

        Raises:
            InvalidStateError: Unless the session is VIEWING
            ValueError: If the room has no name or room number
        """
        self._require(EditState.VIEWING)
        check = self.format_check()
        if check.reason == "missing":
            raise ValueError("Cannot repair a room without a name and room number")
        if check.is_correct:
            return SaveOutcome(status="noop")

        changes = {"name": check.expected_name}
        self.state = EditState.SUBMITTING
        result = await self.submitter.submit(self.entity_type, self.record_id, changes, actor)
        self.state = EditState.VIEWING
        if not result.ok:
            return SaveOutcome(
                status="failed", changes=changes, errors={SUBMIT_ERROR_KEY: result.reason}, result=result
            )

        self.baseline = merge_applied(self.baseline, result.applied_fields)
        return SaveOutcome(status="saved", changes=changes, result=result)


class PropertyEditSession(EditSession):
    """
    Property editing; renaming the property renames its rooms.

    Rooms whose names follow "<old name> <room number>" are resubmitted as
    "<new name> <room number>" after the property itself is saved.
    """

    entity_type = "property"

    async def after_submit(
        self, previous: dict[str, Any], changes: dict[str, Any], outcome: SaveOutcome, actor: str
    ) -> None:
        if "name" not in changes:
            return

        old_name = normalize(previous.get("name"))
        new_name = normalize(self.baseline.get("name"))
        if old_name is None or new_name is None or old_name == new_name:
            return

        store = self.submitter.store
        rooms = await asyncio.to_thread(store.list, "room", lead_property_id=self.record_id)
        renames = rename_rooms_for_property(rooms, old_name, new_name)

        for room_id, room_name in renames.items():
            result = await self.submitter.submit("room", room_id, {"name": room_name}, actor)
            outcome.cascade[room_id] = result.status

        failed = [room_id for room_id, status in outcome.cascade.items() if status == "failure"]
        if failed:
            logger.warning(
                f"{len(failed)} room name(s) not updated after property rename",
                extra={"record_id": self.record_id, "room_ids": failed}
            )


SESSION_CLASSES: dict[str, type[EditSession]] = {
    "room": RoomEditSession,
    "room_type": RoomTypeEditSession,
    "property": PropertyEditSession,
}
