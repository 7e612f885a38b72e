from __future__ import annotations

import logging
from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import text as sql_text
from sqlalchemy.exc import IntegrityError

from backend.db import get_sessionmaker
from backend.schemas import BOOK_STATUSES, EXAM_STATUSES

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"
BOOKS_TABLE = "books"
JOURNAL_TABLE = "journal_entries"
EXAM_UNITS_TABLE = "exam_units"

TASK_COLUMNS = ["id", "user_id", "title", "date", "completed", "time_spent", "note", "created_at", "updated_at"]
BOOK_COLUMNS = ["id", "user_id", "title", "author", "status", "lesson", "created_at", "updated_at"]
JOURNAL_COLUMNS = ["id", "user_id", "date", "well", "avoided", "lesson", "created_at", "updated_at"]
EXAM_UNIT_COLUMNS = ["user_id", "subject", "unit_number", "status", "updated_at"]


class DuplicateRecordError(Exception):
    pass


def _new_id() -> str:
    return uuid4().hex


def _now_iso() -> str:
    return datetime.utcnow().isoformat()


def _normalize_day(value) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value)).isoformat()


def _normalize_task_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    payload["completed"] = bool(payload.get("completed") or 0)
    payload["time_spent"] = payload.get("time_spent") or ""
    payload["note"] = payload.get("note") or ""
    return payload


def _normalize_book_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    payload["author"] = payload.get("author") or ""
    payload["lesson"] = payload.get("lesson") or ""
    return payload


def _normalize_journal_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key in ("well", "avoided", "lesson"):
        payload[key] = payload.get(key) or ""
    return payload


def _build_update(allowed: set, patch: dict) -> tuple[list[str], dict]:
    updates = []
    params = {}
    for key, value in patch.items():
        if key not in allowed or value is None:
            continue
        updates.append(f"{key} = :{key}")
        params[key] = value
    return updates, params


async def list_tasks_for_day(user_id: str, day_iso: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(TASK_COLUMNS)}
                FROM {TASKS_TABLE}
                WHERE user_id = :user_id AND date = :date
                ORDER BY created_at
                """
            ),
            {"user_id": user_id, "date": _normalize_day(day_iso)},
        )).mappings().all()
    return [_normalize_task_row(row) for row in rows]


async def insert_tasks(user_id: str, day_iso: str, titles: list[str]) -> list[dict]:
    day_iso = _normalize_day(day_iso)
    clean_titles = []
    for title in titles:
        value = " ".join(str(title or "").split())
        if value and value not in clean_titles:
            clean_titles.append(value)
    if not clean_titles:
        return []
    now = _now_iso()
    records = [
        {
            "id": _new_id(),
            "user_id": user_id,
            "title": title,
            "date": day_iso,
            "completed": 0,
            "time_spent": "",
            "note": "",
            "created_at": now,
            "updated_at": now,
        }
        for title in clean_titles
    ]
    inserted = []
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        for record in records:
            result = await session.execute(
                sql_text(
                    f"""
                    INSERT INTO {TASKS_TABLE}
                    (id, user_id, title, date, completed, time_spent, note, created_at, updated_at)
                    VALUES
                    (:id, :user_id, :title, :date, :completed, :time_spent, :note, :created_at, :updated_at)
                    ON CONFLICT(user_id, date, title) DO NOTHING
                    """
                ),
                record,
            )
            if result.rowcount:
                inserted.append(_normalize_task_row(record))
        await session.commit()
    if len(inserted) < len(records):
        logger.info(
            "Skipped %s already-present task rows for %s on %s",
            len(records) - len(inserted),
            user_id,
            day_iso,
        )
    return inserted


async def get_task(user_id: str, task_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(TASK_COLUMNS)} FROM {TASKS_TABLE} "
                "WHERE id = :id AND user_id = :user_id"
            ),
            {"id": task_id, "user_id": user_id},
        )).mappings().fetchone()
    return _normalize_task_row(row)


async def update_task(user_id: str, task_id: str, patch: dict) -> dict:
    clean = dict(patch or {})
    if "completed" in clean and clean["completed"] is not None:
        clean["completed"] = int(bool(clean["completed"]))
    updates, params = _build_update({"completed", "time_spent", "note"}, clean)
    if not updates:
        raise ValueError("No changes provided")
    updates.append("updated_at = :updated_at")
    params.update({"id": task_id, "user_id": user_id, "updated_at": _now_iso()})
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {TASKS_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_task(user_id, task_id)


async def get_earliest_task_date(user_id: str) -> str | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"""
                SELECT date FROM {TASKS_TABLE}
                WHERE user_id = :user_id
                ORDER BY date ASC
                LIMIT 1
                """
            ),
            {"user_id": user_id},
        )).fetchone()
    return row[0] if row else None


async def list_task_completions(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT date, completed FROM {TASKS_TABLE}
                WHERE user_id = :user_id
                ORDER BY date DESC
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [{"date": row["date"], "completed": bool(row["completed"] or 0)} for row in rows]


async def count_tasks(user_id: str, completed: bool | None = None) -> int:
    clauses = ["user_id = :user_id"]
    params = {"user_id": user_id}
    if completed is not None:
        clauses.append("COALESCE(completed, 0) = :completed")
        params["completed"] = int(bool(completed))
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        count = (await session.execute(
            sql_text(f"SELECT COUNT(*) FROM {TASKS_TABLE} WHERE {' AND '.join(clauses)}"),
            params,
        )).scalar_one()
    return int(count or 0)


async def list_books(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(BOOK_COLUMNS)}
                FROM {BOOKS_TABLE}
                WHERE user_id = :user_id
                ORDER BY created_at DESC
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [_normalize_book_row(row) for row in rows]


async def create_book(user_id: str, title: str, author: str = "") -> dict:
    title = " ".join(str(title or "").split())
    if not title:
        raise ValueError("Book title cannot be empty")
    now = _now_iso()
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "title": title,
        "author": " ".join(str(author or "").split()),
        "status": "To Read",
        "lesson": "",
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {BOOKS_TABLE}
                (id, user_id, title, author, status, lesson, created_at, updated_at)
                VALUES
                (:id, :user_id, :title, :author, :status, :lesson, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return record


async def get_book(user_id: str, book_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(BOOK_COLUMNS)} FROM {BOOKS_TABLE} "
                "WHERE id = :id AND user_id = :user_id"
            ),
            {"id": book_id, "user_id": user_id},
        )).mappings().fetchone()
    return _normalize_book_row(row)


async def update_book(user_id: str, book_id: str, patch: dict) -> dict:
    status = (patch or {}).get("status")
    if status is not None and status not in BOOK_STATUSES:
        raise ValueError(f"Unknown book status: {status}")
    updates, params = _build_update({"status", "lesson"}, patch or {})
    if not updates:
        raise ValueError("No changes provided")
    updates.append("updated_at = :updated_at")
    params.update({"id": book_id, "user_id": user_id, "updated_at": _now_iso()})
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {BOOKS_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_book(user_id, book_id)


async def delete_book(user_id: str, book_id: str) -> None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(f"DELETE FROM {BOOKS_TABLE} WHERE user_id = :user_id AND id = :id"),
            {"user_id": user_id, "id": book_id},
        )
        await session.commit()


async def count_books(user_id: str, status: str | None = None) -> int:
    clauses = ["user_id = :user_id"]
    params = {"user_id": user_id}
    if status:
        clauses.append("status = :status")
        params["status"] = status
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        count = (await session.execute(
            sql_text(f"SELECT COUNT(*) FROM {BOOKS_TABLE} WHERE {' AND '.join(clauses)}"),
            params,
        )).scalar_one()
    return int(count or 0)


async def get_journal_entry(user_id: str, day_iso: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(JOURNAL_COLUMNS)} FROM {JOURNAL_TABLE} "
                "WHERE user_id = :user_id AND date = :date"
            ),
            {"user_id": user_id, "date": _normalize_day(day_iso)},
        )).mappings().fetchone()
    return _normalize_journal_row(row)


async def get_journal_entry_by_id(user_id: str, entry_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(JOURNAL_COLUMNS)} FROM {JOURNAL_TABLE} "
                "WHERE user_id = :user_id AND id = :id"
            ),
            {"user_id": user_id, "id": entry_id},
        )).mappings().fetchone()
    return _normalize_journal_row(row)


async def insert_journal_entry(user_id: str, payload: dict) -> dict:
    day_iso = _normalize_day(payload.get("date") or date.today())
    if await get_journal_entry(user_id, day_iso):
        raise DuplicateRecordError(f"Journal entry already exists for {day_iso}")
    now = _now_iso()
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "date": day_iso,
        "well": payload.get("well") or "",
        "avoided": payload.get("avoided") or "",
        "lesson": payload.get("lesson") or "",
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        try:
            await session.execute(
                sql_text(
                    f"""
                    INSERT INTO {JOURNAL_TABLE}
                    (id, user_id, date, well, avoided, lesson, created_at, updated_at)
                    VALUES
                    (:id, :user_id, :date, :well, :avoided, :lesson, :created_at, :updated_at)
                    """
                ),
                record,
            )
            await session.commit()
        except IntegrityError as exc:
            # Another session inserted the same day between the lookup and this write.
            await session.rollback()
            raise DuplicateRecordError(f"Journal entry already exists for {day_iso}") from exc
    return record


async def update_journal_entry(user_id: str, entry_id: str, payload: dict) -> dict:
    updates, params = _build_update({"well", "avoided", "lesson"}, payload or {})
    if not updates:
        raise ValueError("No changes provided")
    updates.append("updated_at = :updated_at")
    params.update({"id": entry_id, "user_id": user_id, "updated_at": _now_iso()})
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {JOURNAL_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_journal_entry_by_id(user_id, entry_id)


async def list_exam_units(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(EXAM_UNIT_COLUMNS)}
                FROM {EXAM_UNITS_TABLE}
                WHERE user_id = :user_id
                ORDER BY subject, unit_number
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [dict(row) for row in rows]


async def upsert_exam_unit(user_id: str, subject: str, unit_number: int, status: str) -> dict:
    if status not in EXAM_STATUSES:
        raise ValueError(f"Unknown unit status: {status}")
    subject = str(subject or "").strip()
    if not subject:
        raise ValueError("Subject cannot be empty")
    record = {
        "user_id": user_id,
        "subject": subject,
        "unit_number": int(unit_number),
        "status": status,
        "updated_at": _now_iso(),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {EXAM_UNITS_TABLE} (user_id, subject, unit_number, status, updated_at)
                VALUES (:user_id, :subject, :unit_number, :status, :updated_at)
                ON CONFLICT(user_id, subject, unit_number)
                DO UPDATE SET status=EXCLUDED.status, updated_at=EXCLUDED.updated_at
                """
            ),
            record,
        )
        await session.commit()
    return record
