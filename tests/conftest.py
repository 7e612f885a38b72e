"""
Shared fixtures for Ghost Mode 90.

``store`` is an in-memory stand-in for the record store with per-operation
failure injection. ``api`` is a FastAPI test client bound to a throwaway
SQLite database.
"""

from __future__ import annotations

import os
from itertools import count

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BACKEND_SESSION_SECRET", "test-secret")

from dashboard.data import api_client
from dashboard.data.repositories import NotFoundError, StoreError

BACKEND_SECRET = "test-secret"
USER_ID = "user-1"


class FakeStore:
    def __init__(self):
        self.tasks = []
        self.books = []
        self.journal = []
        self.exam_units = {}
        self.calls = []
        self.failing = set()
        self._ids = count(1)

    def fail(self, *operations):
        self.failing.update(operations)

    def recover(self, *operations):
        self.failing.difference_update(operations or set(self.failing))

    def _record(self, operation, *args):
        self.calls.append((operation, args))
        if operation in self.failing:
            raise StoreError(f"{operation} failed", status_code=500)

    def calls_to(self, operation):
        return [args for name, args in self.calls if name == operation]

    def _next_id(self, prefix):
        return f"{prefix}-{next(self._ids)}"

    def list_tasks(self, user_id, day):
        self._record("list_tasks", user_id, day)
        return [dict(row) for row in self.tasks if row["user_id"] == user_id and row["date"] == str(day)]

    def insert_tasks(self, user_id, day, titles):
        self._record("insert_tasks", user_id, day, list(titles))
        inserted = []
        for title in titles:
            row = {
                "id": self._next_id("task"),
                "user_id": user_id,
                "title": title,
                "date": str(day),
                "completed": False,
                "time_spent": "",
                "note": "",
            }
            self.tasks.append(row)
            inserted.append(dict(row))
        return inserted

    def update_task(self, user_id, task_id, patch):
        self._record("update_task", user_id, task_id, dict(patch))
        for row in self.tasks:
            if row["id"] == task_id and row["user_id"] == user_id:
                row.update(patch)
                return dict(row)
        raise NotFoundError("not_found", status_code=404)

    def earliest_task_date(self, user_id):
        self._record("earliest_task_date", user_id)
        dates = sorted(row["date"] for row in self.tasks if row["user_id"] == user_id)
        return dates[0] if dates else None

    def list_task_completions(self, user_id):
        self._record("list_task_completions", user_id)
        return [
            {"date": row["date"], "completed": row["completed"]}
            for row in self.tasks
            if row["user_id"] == user_id
        ]

    def count_tasks(self, user_id, completed=None):
        self._record("count_tasks", user_id, completed)
        return sum(
            1
            for row in self.tasks
            if row["user_id"] == user_id and (completed is None or bool(row["completed"]) == completed)
        )

    def list_books(self, user_id):
        self._record("list_books", user_id)
        return [dict(book) for book in reversed(self.books) if book["user_id"] == user_id]

    def create_book(self, user_id, title, author=""):
        self._record("create_book", user_id, title, author)
        book = {
            "id": self._next_id("book"),
            "user_id": user_id,
            "title": title,
            "author": author,
            "status": "To Read",
            "lesson": "",
        }
        self.books.append(book)
        return dict(book)

    def update_book(self, user_id, book_id, patch):
        self._record("update_book", user_id, book_id, dict(patch))
        for book in self.books:
            if book["id"] == book_id:
                book.update(patch)
                return dict(book)
        raise NotFoundError("not_found", status_code=404)

    def delete_book(self, user_id, book_id):
        self._record("delete_book", user_id, book_id)
        self.books = [book for book in self.books if book["id"] != book_id]

    def count_books(self, user_id, status=None):
        self._record("count_books", user_id, status)
        return sum(1 for book in self.books if book["user_id"] == user_id and (status is None or book["status"] == status))

    def get_journal_entry(self, user_id, day):
        self._record("get_journal_entry", user_id, day)
        day_iso = day.isoformat() if hasattr(day, "isoformat") else str(day)
        for entry in self.journal:
            if entry["user_id"] == user_id and entry["date"] == day_iso:
                return dict(entry)
        return None

    def insert_journal_entry(self, user_id, payload):
        self._record("insert_journal_entry", user_id, dict(payload))
        entry = {"id": self._next_id("journal"), "user_id": user_id, **payload}
        self.journal.append(entry)
        return dict(entry)

    def update_journal_entry(self, user_id, entry_id, payload):
        self._record("update_journal_entry", user_id, entry_id, dict(payload))
        for entry in self.journal:
            if entry["id"] == entry_id:
                entry.update(payload)
                return dict(entry)
        raise NotFoundError("not_found", status_code=404)

    def list_exam_units(self, user_id):
        self._record("list_exam_units", user_id)
        return [
            {"user_id": uid, "subject": subject, "unit_number": number, "status": status}
            for (uid, subject, number), status in self.exam_units.items()
            if uid == user_id
        ]

    def upsert_exam_unit(self, user_id, subject, unit_number, status):
        self._record("upsert_exam_unit", user_id, subject, unit_number, status)
        self.exam_units[(user_id, subject, unit_number)] = status
        return {"user_id": user_id, "subject": subject, "unit_number": unit_number, "status": status}


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def backend_db(tmp_path, monkeypatch):
    """Point the backend at a fresh SQLite file and drop any cached engine."""
    from backend import db, settings

    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'ghost.db'}")
    monkeypatch.setenv("BACKEND_SESSION_SECRET", BACKEND_SECRET)
    monkeypatch.delenv("ALLOWED_EMAILS", raising=False)
    monkeypatch.delenv("ACCESS_PASSWORD", raising=False)
    settings.reset_settings()
    db._engine = None
    db._session_factory = None
    yield
    settings.reset_settings()
    db._engine = None
    db._session_factory = None


@pytest.fixture
def api(backend_db):
    """Backend test client over a fresh SQLite file."""
    from fastapi.testclient import TestClient

    from backend.main import create_app

    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def auth_headers():
    return {"X-Backend-Token": BACKEND_SECRET, "X-User-Id": USER_ID}


@pytest.fixture
def api_request(api):
    """A drop-in for ``api_client.request`` that talks to the test client."""

    def request(method, path, user_id=None, params=None, json=None, timeout=10):
        headers = {"X-Backend-Token": BACKEND_SECRET}
        if user_id:
            headers["X-User-Id"] = user_id
        response = api.request(method, path, params=params, json=json, headers=headers)
        if response.status_code >= 400:
            raise api_client.ApiError(response.status_code, response.reason_phrase, response.json().get("detail"))
        return response.json()

    return request
