from __future__ import annotations

import logging

from sqlalchemy import text as sql_text

from backend.db import get_engine

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"
BOOKS_TABLE = "books"
JOURNAL_TABLE = "journal_entries"
EXAM_UNITS_TABLE = "exam_units"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {TASKS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    date TEXT NOT NULL,
                    completed INTEGER DEFAULT 0,
                    time_spent TEXT DEFAULT '',
                    note TEXT DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT,
                    UNIQUE (user_id, date, title)
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {BOOKS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    author TEXT DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'To Read',
                    lesson TEXT DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {JOURNAL_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    well TEXT DEFAULT '',
                    avoided TEXT DEFAULT '',
                    lesson TEXT DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT,
                    UNIQUE (user_id, date)
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {EXAM_UNITS_TABLE} (
                    user_id TEXT NOT NULL,
                    subject TEXT NOT NULL,
                    unit_number INTEGER NOT NULL,
                    status TEXT NOT NULL DEFAULT 'Not Started',
                    updated_at TEXT,
                    PRIMARY KEY (user_id, subject, unit_number)
                )
                """
            )
        )

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except Exception as exc:
            logger.warning("Index creation skipped: %s", exc)

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TASKS_TABLE}_user_date "
        f"ON {TASKS_TABLE} (user_id, date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{BOOKS_TABLE}_user_created "
        f"ON {BOOKS_TABLE} (user_id, created_at)"
    )
