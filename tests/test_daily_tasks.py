"""Tests for the daily task synchronizer."""

from datetime import date

import pytest

from dashboard.constants import MISSION_TASKS
from dashboard.state.daily_tasks import DailyTaskSynchronizer, merge_with_template, missing_titles

TODAY = date(2026, 10, 19)
TEMPLATE_TITLES = [entry["title"] for entry in MISSION_TASKS]


@pytest.fixture
def sync(store):
    return DailyTaskSynchronizer(store, "user-1")


class TestSynchronize:
    def test_first_sync_creates_one_row_per_template_title(self, sync, store):
        tasks = sync.synchronize(TODAY)

        assert [task["title"] for task in tasks] == TEMPLATE_TITLES
        assert sorted(row["title"] for row in store.tasks) == sorted(TEMPLATE_TITLES)
        assert all(task["id"] for task in tasks)
        assert len(store.calls_to("insert_tasks")) == 1

    def test_new_rows_use_default_fields(self, sync, store):
        sync.synchronize(TODAY)

        for row in store.tasks:
            assert row["completed"] is False
            assert row["time_spent"] == ""
            assert row["note"] == ""
            assert row["date"] == "2026-10-19"

    def test_second_sync_is_idempotent(self, sync, store):
        sync.synchronize(TODAY)
        sync.synchronize(TODAY)

        assert len(store.tasks) == len(MISSION_TASKS)
        assert len(store.calls_to("insert_tasks")) == 1

    def test_only_missing_titles_are_inserted(self, sync, store):
        store.insert_tasks("user-1", "2026-10-19", ["Deep Work", "Reading"])
        store.calls.clear()

        sync.synchronize(TODAY)

        inserted = store.calls_to("insert_tasks")
        assert len(inserted) == 1
        assert inserted[0][2] == ["Skill Learning", "Exercise", "Journal"]
        assert len(store.tasks) == len(MISSION_TASKS)

    def test_merge_keeps_template_order_not_fetch_order(self, sync, store):
        store.insert_tasks("user-1", "2026-10-19", list(reversed(TEMPLATE_TITLES)))

        tasks = sync.synchronize(TODAY)

        assert [task["title"] for task in tasks] == TEMPLATE_TITLES
        assert [task["key"] for task in tasks] == [entry["key"] for entry in MISSION_TASKS]

    def test_persisted_fields_override_template(self, sync, store):
        store.insert_tasks("user-1", "2026-10-19", TEMPLATE_TITLES)
        store.tasks[0].update({"completed": True, "time_spent": "3h", "note": "focused"})

        tasks = sync.synchronize(TODAY)

        assert tasks[0]["completed"] is True
        assert tasks[0]["time_spent"] == "3h"
        assert tasks[0]["note"] == "focused"
        assert tasks[0]["target"] == "4 hrs"
        assert tasks[0]["has_time"] is True

    def test_other_days_and_users_are_ignored(self, sync, store):
        store.insert_tasks("user-1", "2026-10-18", TEMPLATE_TITLES)
        store.insert_tasks("user-2", "2026-10-19", TEMPLATE_TITLES)

        sync.synchronize(TODAY)

        today_rows = [row for row in store.tasks if row["user_id"] == "user-1" and row["date"] == "2026-10-19"]
        assert len(today_rows) == len(MISSION_TASKS)

    def test_bounded_passes_fall_back_to_template_view(self, store):
        store.insert_tasks = lambda user_id, day, titles: []
        sync = DailyTaskSynchronizer(store, "user-1")

        tasks = sync.synchronize(TODAY)

        assert len(store.calls_to("list_tasks")) == 2
        assert [task["title"] for task in tasks] == TEMPLATE_TITLES
        assert all(task["id"] is None for task in tasks)

    def test_fetch_failure_keeps_previous_tasks(self, sync, store):
        sync.synchronize(TODAY)
        before = sync.tasks
        store.fail("list_tasks")

        result = sync.synchronize(TODAY)

        assert result == before
        assert sync.last_error


class TestToggle:
    def test_toggle_flips_and_persists(self, sync, store):
        sync.synchronize(TODAY)
        task_id = sync.tasks[0]["id"]

        assert sync.toggle(task_id, False) is True

        assert sync.tasks[0]["completed"] is True
        assert store.tasks[0]["completed"] is True

    def test_toggle_reverts_on_write_failure(self, sync, store):
        sync.synchronize(TODAY)
        task_id = sync.tasks[0]["id"]
        store.fail("update_task")

        assert sync.toggle(task_id, False) is False

        assert sync.tasks[0]["completed"] is False
        assert len(store.calls_to("update_task")) == 1

    def test_toggle_unknown_id_is_ignored(self, sync, store):
        sync.synchronize(TODAY)

        assert sync.toggle(None, False) is False
        assert sync.toggle("missing", False) is False
        assert store.calls_to("update_task") == []


class TestFieldEdits:
    def test_update_field_is_local_only(self, sync, store):
        sync.synchronize(TODAY)
        task_id = sync.tasks[1]["id"]

        sync.update_field(task_id, "note", "draft")

        assert sync.tasks[1]["note"] == "draft"
        assert store.calls_to("update_task") == []

    def test_save_field_writes_through(self, sync, store):
        sync.synchronize(TODAY)
        task_id = sync.tasks[1]["id"]

        assert sync.save_field(task_id, "time_spent", "1h") is True
        assert store.calls_to("update_task") == [("user-1", task_id, {"time_spent": "1h"})]

    def test_save_failure_keeps_edited_value(self, sync, store):
        sync.synchronize(TODAY)
        task_id = sync.tasks[1]["id"]
        sync.update_field(task_id, "note", "kept")
        store.fail("update_task")

        assert sync.save_field(task_id, "note", "kept") is False
        assert sync.tasks[1]["note"] == "kept"

    def test_rejects_non_editable_fields(self, sync):
        sync.synchronize(TODAY)
        with pytest.raises(ValueError):
            sync.update_field(sync.tasks[0]["id"], "completed", True)


class TestProgress:
    def test_all_tasks_done_completes_mission(self, sync):
        sync.synchronize(TODAY)
        for task in list(sync.tasks):
            sync.toggle(task["id"], False)

        assert sync.completed_count == 5
        assert sync.progress == 100
        assert sync.mission_complete is True

    def test_partial_progress(self, sync):
        sync.synchronize(TODAY)
        sync.toggle(sync.tasks[0]["id"], False)
        sync.toggle(sync.tasks[1]["id"], False)

        assert sync.progress == 40
        assert sync.mission_complete is False


def test_missing_titles_and_merge_helpers():
    rows = [{"id": "a", "title": "Exercise", "completed": True}]

    assert missing_titles(MISSION_TASKS, rows) == ["Deep Work", "Skill Learning", "Reading", "Journal"]
    merged = merge_with_template(MISSION_TASKS, rows)
    assert merged[2]["id"] == "a"
    assert merged[2]["completed"] is True
    assert merged[0]["id"] is None
    assert merged[0]["completed"] is False
