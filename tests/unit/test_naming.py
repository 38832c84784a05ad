"""
Unit tests for room name derivation, format checks and repair.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lead_editor.core.changes import compute_changes
from lead_editor.core.naming import (
    check_format,
    derive_room_name,
    reconcile_room_name,
    rename_rooms_for_property,
    repair_name,
)

pytestmark = pytest.mark.unit


class TestReconcileRoomName:
    """Tests for reconcile_room_name"""

    def test_room_number_change_derives_name(self, room_schema):
        baseline = {"id": "R1", "room_number": "101", "name": "Tower X 101"}
        edited = dict(baseline, room_number="102")

        changes = compute_changes(baseline, edited, room_schema)
        reconciled = reconcile_room_name(changes, baseline, "Tower X")

        assert reconciled == {"room_number": "102", "name": "Tower X 102"}

    def test_input_is_not_mutated(self):
        changes = {"room_number": "102"}
        reconcile_room_name(changes, {"name": "Tower X 101"}, "Tower X")

        assert changes == {"room_number": "102"}

    def test_without_room_number_change_nothing_happens(self):
        changes = {"status": "B"}

        assert reconcile_room_name(changes, {"name": "old"}, "Tower X") == {"status": "B"}

    def test_derived_name_overrides_edited_name(self):
        changes = {"room_number": "102", "name": "typed by hand"}

        reconciled = reconcile_room_name(changes, {"name": "Tower X 101"}, "Tower X")

        assert reconciled["name"] == "Tower X 102"

    def test_unchanged_derived_name_is_not_added(self):
        baseline = {"name": "Tower X 102", "room_number": "0102"}
        reconciled = reconcile_room_name({"room_number": "102"}, baseline, "Tower X")

        assert "name" not in reconciled

    def test_edited_name_cannot_replace_derived_name(self):
        baseline = {"name": "Tower X 102", "room_number": "101"}
        edited = {"name": "Foo", "room_number": "102"}

        reconciled = reconcile_room_name(compute_changes(baseline, edited, {}), baseline, "Tower X")

        assert reconciled == {"room_number": "102"}

    def test_edited_name_is_replaced_by_derived_name(self):
        reconciled = reconcile_room_name(
            {"room_number": "102", "name": "Foo"}, {"name": "Tower X 101"}, "Tower X"
        )

        assert reconciled["name"] == "Tower X 102"

    @pytest.mark.parametrize("cleared", [None, ""])
    def test_cleared_room_number_leaves_name_alone(self, cleared):
        reconciled = reconcile_room_name({"room_number": cleared}, {"name": "Tower X 101"}, "Tower X")

        assert reconciled == {"room_number": cleared}

    @pytest.mark.parametrize("parent", [None, ""])
    def test_unknown_parent_is_a_no_op(self, parent):
        reconciled = reconcile_room_name({"room_number": "102"}, {"name": "Tower X 101"}, parent)

        assert reconciled == {"room_number": "102"}

    @given(st.one_of(st.none(), st.just(""), st.text(max_size=8)))
    def test_name_is_derived_only_from_a_present_room_number(self, room_number):
        reconciled = reconcile_room_name({"room_number": room_number}, {"name": "old"}, "Tower X")
        name = reconciled.get("name")

        if room_number in (None, ""):
            assert name is None
        else:
            assert name == f"Tower X {room_number}"


class TestCheckFormat:
    """Tests for check_format"""

    def test_correct(self):
        result = check_format({"name": "Tower X 101", "room_number": "101"}, "Tower X")

        assert result.is_correct is True
        assert result.reason == "correct"

    def test_incorrect(self):
        result = check_format({"name": "101", "room_number": "101"}, "Tower X")

        assert result.is_correct is False
        assert result.reason == "incorrect"
        assert result.expected_name == "Tower X 101"

    @pytest.mark.parametrize("record", [
        {"name": "", "room_number": "101"},
        {"name": "Tower X 101", "room_number": None},
        {},
    ])
    def test_missing(self, record):
        result = check_format(record, "Tower X")

        assert result.reason == "missing"
        assert result.expected_name is None


class TestRepairName:
    """Tests for repair_name"""

    def test_assigns_expected_name(self):
        record = {"id": "R1", "name": "101", "room_number": "101"}
        repaired = repair_name(record, "Tower X")

        assert repaired["name"] == "Tower X 101"
        assert record["name"] == "101"

    def test_correct_record_is_returned_unchanged(self):
        record = {"name": "Tower X 101", "room_number": "101"}

        assert repair_name(record, "Tower X") == record

    def test_missing_raises(self):
        with pytest.raises(ValueError):
            repair_name({"name": "Tower X 101"}, "Tower X")


class TestRenameRoomsForProperty:
    """Tests for the property rename cascade"""

    def test_renames_derived_names(self):
        rooms = [
            {"id": "R1", "name": "Tower X 101", "room_number": "101"},
            {"id": "R2", "name": "Tower X 102", "room_number": "102"},
            {"id": "R3", "name": "201号室", "room_number": "201"},
            {"id": "R4", "name": None, "room_number": "202"},
        ]

        renamed = rename_rooms_for_property(rooms, "Tower X", "Tower Y")

        assert renamed == {"R1": "Tower Y 101", "R2": "Tower Y 102"}

    def test_prefix_must_be_followed_by_separator(self):
        rooms = [{"id": "R1", "name": "Tower XL 101"}]

        assert rename_rooms_for_property(rooms, "Tower X", "Tower Y") == {}

    def test_same_name_renames_nothing(self):
        rooms = [{"id": "R1", "name": "Tower X 101"}]

        assert rename_rooms_for_property(rooms, "Tower X", "Tower X") == {}

    def test_derive_room_name(self):
        assert derive_room_name("サンプル物件", "101") == "サンプル物件 101"
