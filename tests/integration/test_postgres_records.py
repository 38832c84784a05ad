"""
Integration tests for the PostgreSQL record store and the editors on top of it.

Runs against a real PostgreSQL container seeded with the sample property.
"""

import pytest

from lead_editor.errors import RecordNotFoundError, StoreError
from lead_editor.service import LeadEditor, UpdateSubmitter
from lead_editor.store import PostgresRecordStore, TTLCache

pytestmark = pytest.mark.integration

ACTOR = "editor@example.com"


@pytest.fixture
def store(clean_db) -> PostgresRecordStore:
    return PostgresRecordStore(clean_db)


@pytest.fixture
def editor(store) -> LeadEditor:
    return LeadEditor(store, TTLCache())


class TestPostgresRecordStore:
    """Reads and partial writes against the lead tables"""

    def test_get_boxes_dates_and_unwraps_numbers(self, store):
        room = store.get("room", "R001")
        room_type = store.get("room_type", "RT001")

        assert room["name"] == "サンプル物件 101"
        assert room["create_date"]["value"].startswith("2025-06-30")
        assert room_type["rent"] == 85000.0
        assert store.get("room", "R999") is None

    def test_put_updates_only_changed_columns(self, store):
        applied = store.put("room", "R001", {"status": "B"}, ACTOR)

        assert applied == {"status": "B"}
        room = store.get("room", "R001")
        assert room["status"] == "B"
        assert room["room_number"] == "101"

    def test_put_normalizes_numeric_and_date_input(self, store):
        assert store.put("room_type", "RT001", {"rent": "90,000"}, ACTOR) == {"rent": 90000.0}

        applied = store.put("room", "R001", {"key_handover_scheduled_date": "2025-04-01"}, ACTOR)
        assert applied == {"key_handover_scheduled_date": {"value": "2025-04-01"}}

    def test_put_writes_change_log(self, store):
        store.put("room", "R001", {"status": "B", "vacate_setup": "通常"}, ACTOR)
        store.put("room", "R001", {"status": "C"}, ACTOR)

        history = store.history("room", "R001")

        assert [(e.field_name, e.old_value, e.new_value) for e in history[:1]] == [("status", "B", "C")]
        assert {e.field_name for e in history} == {"status", "vacate_setup"}
        assert all(e.changed_by == ACTOR for e in history)
        assert len(store.history("room", "R001", limit=1)) == 1

    def test_put_missing_record(self, store):
        with pytest.raises(RecordNotFoundError):
            store.put("room", "R999", {"status": "B"}, ACTOR)

        assert store.history("room", "R999") == []

    def test_put_unknown_column_rolls_back(self, store):
        with pytest.raises(StoreError):
            store.put("room", "R001", {"status": "B", "no_such_column": "x"}, ACTOR)

        assert store.get("room", "R001")["status"] == "A"
        assert store.history("room", "R001") == []

    def test_put_rejects_unsafe_column(self, store):
        with pytest.raises(StoreError):
            store.put("room", "R001", {"status; DROP TABLE lead_room": "x"}, ACTOR)

    def test_list_with_filters(self, store):
        rooms = store.list("room", lead_property_id="P001")
        linked = store.list("room", lead_room_type_id="RT002")

        assert [r["id"] for r in rooms] == ["R001", "R002", "R003", "R004", "R005"]
        assert [r["id"] for r in linked] == ["R002", "R004"]

    def test_find_duplicates(self, store):
        duplicates = store.find_duplicates("room", "name", "サンプル物件 102", exclude_id="R001")

        assert [r["id"] for r in duplicates] == ["R002"]
        assert store.find_duplicates("room", "name", "サンプル物件 102", exclude_id="R002") == []
        assert store.find_duplicates("room", "name", "") == []


class TestEditorsOnPostgres:
    """End-to-end saves through edit sessions"""

    @pytest.mark.asyncio
    async def test_submitter_noop_and_success(self, store):
        submitter = UpdateSubmitter(store)

        noop = await submitter.submit("room", "R001", {}, ACTOR)
        success = await submitter.submit("room", "R001", {"status": "D"}, ACTOR)

        assert noop.status == "noop"
        assert success.status == "success"
        assert success.applied_fields == {"status": "D"}

    @pytest.mark.asyncio
    async def test_room_number_change_renames_room(self, editor, store):
        session = editor.open_session("room", "R001")
        session.begin_edit()
        session.set_field("room_number", "111")

        outcome = await session.save(ACTOR)

        assert outcome.status == "saved"
        assert outcome.changes == {"room_number": "111", "name": "サンプル物件 111"}
        assert store.get("room", "R001")["name"] == "サンプル物件 111"

    @pytest.mark.asyncio
    async def test_unchanged_values_do_not_submit(self, editor, store):
        session = editor.open_session("room_type", "RT001")
        session.begin_edit()
        session.set_field("rent", "85000")
        session.set_field("floor_area", "25.50")

        outcome = await session.save(ACTOR)

        assert outcome.status == "noop"
        assert store.history("room_type", "RT001") == []

    @pytest.mark.asyncio
    async def test_property_rename_cascades(self, editor, store):
        session = editor.open_session("property", "P001")
        session.begin_edit()
        session.set_field("name", "新物件")

        outcome = await session.save(ACTOR)

        assert outcome.status == "saved"
        assert set(outcome.cascade) == {"R001", "R002", "R003", "R005"}
        assert store.get("room", "R002")["name"] == "新物件 102"
        assert store.get("room", "R004")["name"] == "201号室"

    @pytest.mark.asyncio
    async def test_repair_name(self, editor, store):
        session = editor.open_session("room", "R004")

        outcome = await session.repair_name(ACTOR)

        assert outcome.status == "saved"
        assert store.get("room", "R004")["name"] == "サンプル物件 201"
        assert store.history("room", "R004")[0].old_value == "201号室"
