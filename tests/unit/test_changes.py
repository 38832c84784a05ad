"""
Unit tests for change set computation.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lead_editor.core.changes import compute_changes, has_changes, is_modified, merge_applied
from lead_editor.core.models import FieldKind
from lead_editor.errors import NormalizationError

pytestmark = pytest.mark.unit

KINDS = {
    "status": FieldKind.SELECT,
    "rent": FieldKind.NUMERIC,
    "key_handover_scheduled_date": FieldKind.DATE,
    "note": FieldKind.TEXT,
}

field_values = st.one_of(st.none(), st.text(max_size=10), st.integers(), st.floats(allow_nan=False))
records = st.dictionaries(st.sampled_from(list(KINDS) + ["other"]), field_values, max_size=5)


class TestComputeChanges:
    """Tests for compute_changes"""

    def test_single_field_change(self):
        baseline = {"id": "R1", "status": "A", "note": "x"}
        edited = {"id": "R1", "status": "B", "note": "x"}

        assert compute_changes(baseline, edited, KINDS) == {"status": "B"}

    def test_numeric_string_equals_number(self):
        baseline = {"rent": 1000}
        edited = {"rent": "1000"}

        assert compute_changes(baseline, edited, KINDS) == {}

    def test_boxed_date_equals_plain_date(self):
        baseline = {"key_handover_scheduled_date": {"value": "2025-04-01"}}
        edited = {"key_handover_scheduled_date": "2025-04-01"}

        assert compute_changes(baseline, edited, KINDS) == {}

    def test_cleared_field_is_a_change(self):
        baseline = {"key_handover_scheduled_date": {"value": "2025-04-01"}}
        edited = {"key_handover_scheduled_date": ""}

        assert compute_changes(baseline, edited, KINDS) == {"key_handover_scheduled_date": ""}

    def test_none_and_empty_string_are_equal(self):
        assert compute_changes({"note": None}, {"note": ""}, KINDS) == {}

    def test_edited_value_is_carried_unnormalized(self):
        changes = compute_changes({"rent": 1000}, {"rent": "1,200"}, KINDS)

        assert changes == {"rent": "1,200"}

    def test_fields_missing_from_edited_are_ignored(self):
        baseline = {"status": "A", "note": "keep"}
        edited = {"status": "A"}

        assert compute_changes(baseline, edited, KINDS) == {}

    def test_undeclared_fields_compare_as_text(self):
        assert compute_changes({"other": 5}, {"other": "5"}) == {}
        assert compute_changes({"other": "5"}, {"other": "5.0"}) == {"other": "5.0"}

    def test_accepts_entity_schema(self, room_schema, room_baseline):
        edited = dict(room_baseline, status="B", key_handover_scheduled_date="2025-04-01")

        assert compute_changes(room_baseline, edited, room_schema) == {"status": "B"}

    def test_garbage_numeric_over_blank_is_not_a_change(self):
        assert compute_changes({"rent": None}, {"rent": "abc"}, KINDS) == {}

    def test_strict_mode_names_the_field(self):
        with pytest.raises(NormalizationError) as exc_info:
            compute_changes({"rent": None}, {"rent": "abc"}, KINDS, strict=True)

        assert exc_info.value.field_name == "rent"

    def test_strict_mode_ignores_untouched_values(self):
        baseline = {"key_handover_scheduled_date": {"value": "2025-04-01T10:00:00"}}

        assert compute_changes(baseline, dict(baseline), KINDS, strict=True) == {}

    @settings(deadline=None)
    @given(records)
    def test_record_against_itself_has_no_changes(self, record):
        assert compute_changes(record, record, KINDS) == {}
        assert has_changes(record, record, KINDS) is False


class TestHelpers:
    """Tests for has_changes, is_modified and merge_applied"""

    def test_has_changes(self):
        assert has_changes({"status": "A"}, {"status": "B"}, KINDS) is True

    @pytest.mark.parametrize("current,original,expected", [
        (None, "", False),
        ("", None, False),
        ("101", 101, False),
        ("A", "B", True),
        ("x", None, True),
    ])
    def test_is_modified(self, current, original, expected):
        assert is_modified(current, original) is expected

    def test_merge_applied_overlays_fields(self):
        baseline = {"id": "R1", "status": "A", "name": "Tower X 101"}
        merged = merge_applied(baseline, {"status": "B"})

        assert merged == {"id": "R1", "status": "B", "name": "Tower X 101"}
        assert baseline["status"] == "A"
