import asyncio

import pytest

from backend import repositories
from backend.db import dispose_engine
from backend.db_init import init_db


def run(coro_factory):
    async def _main():
        await init_db()
        try:
            return await coro_factory()
        finally:
            await dispose_engine()

    return asyncio.run(_main())


def test_concurrent_journal_inserts_leave_one_row(backend_db):
    async def scenario():
        results = await asyncio.gather(
            repositories.insert_journal_entry("user-x", {"date": "2026-10-19", "well": "first"}),
            repositories.insert_journal_entry("user-x", {"date": "2026-10-19", "well": "second"}),
            return_exceptions=True,
        )
        return results, await repositories.get_journal_entry("user-x", "2026-10-19")

    results, stored = run(scenario)

    inserted = [item for item in results if isinstance(item, dict)]
    rejected = [item for item in results if isinstance(item, BaseException)]
    assert len(inserted) == 1
    assert len(rejected) == 1
    assert isinstance(rejected[0], repositories.DuplicateRecordError)
    assert stored["id"] == inserted[0]["id"]


def test_unique_day_constraint_maps_to_duplicate(backend_db, monkeypatch):
    async def never_found(user_id, day_iso):
        return {}

    async def scenario():
        await repositories.insert_journal_entry("user-x", {"date": "2026-10-19"})
        monkeypatch.setattr(repositories, "get_journal_entry", never_found)
        await repositories.insert_journal_entry("user-x", {"date": "2026-10-19"})

    with pytest.raises(repositories.DuplicateRecordError):
        run(scenario)


def test_task_seeding_skips_existing_titles(backend_db):
    async def scenario():
        first = await repositories.insert_tasks("user-x", "2026-10-19", ["Deep Work", "Reading"])
        second = await repositories.insert_tasks("user-x", "2026-10-19", ["Deep Work", "Exercise"])
        rows = await repositories.list_tasks_for_day("user-x", "2026-10-19")
        return first, second, rows

    first, second, rows = run(scenario)

    assert [row["title"] for row in first] == ["Deep Work", "Reading"]
    assert [row["title"] for row in second] == ["Exercise"]
    assert sorted(row["title"] for row in rows) == ["Deep Work", "Exercise", "Reading"]
