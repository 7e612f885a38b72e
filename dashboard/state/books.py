import logging

from dashboard.constants import BOOK_STATUS_FINISHED, BOOK_STATUSES
from dashboard.data.repositories import StoreError
from dashboard.state.optimistic import find_item, patch_item

logger = logging.getLogger(__name__)


class BookShelf:
    def __init__(self, store, user_id):
        self.store = store
        self.user_id = user_id
        self.books = []

    def fetch(self):
        try:
            self.books = self.store.list_books(self.user_id)
        except StoreError as exc:
            logger.exception("Error fetching books: %s", exc)
        return self.books

    def add(self, title, author=""):
        title = (title or "").strip()
        if not title:
            return None
        try:
            record = self.store.create_book(self.user_id, title, (author or "").strip())
        except StoreError as exc:
            logger.error("Error adding book: %s", exc)
            return None
        self.books = [record, *self.books]
        return record

    def update_status(self, book_id, status):
        if status not in BOOK_STATUSES:
            raise ValueError(f"Unknown book status: {status}")
        if find_item(self.books, book_id) is None:
            return False
        self.books = patch_item(self.books, book_id, {"status": status})
        try:
            self.store.update_book(self.user_id, book_id, {"status": status})
        except StoreError as exc:
            logger.error("Error updating status: %s", exc)
            self.fetch()
            return False
        return True

    def update_lesson(self, book_id, lesson):
        self.books = patch_item(self.books, book_id, {"lesson": lesson})

    def save_lesson(self, book_id, lesson):
        try:
            self.store.update_book(self.user_id, book_id, {"lesson": lesson})
        except StoreError as exc:
            logger.error("Error saving lesson: %s", exc)
            return False
        return True

    def delete(self, book_id):
        self.books = [book for book in self.books if book.get("id") != book_id]
        try:
            self.store.delete_book(self.user_id, book_id)
        except StoreError as exc:
            logger.error("Error deleting book: %s", exc)
            self.fetch()
            return False
        return True

    @property
    def finished_count(self):
        return sum(1 for book in self.books if book.get("status") == BOOK_STATUS_FINISHED)
