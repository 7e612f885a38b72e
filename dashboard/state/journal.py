import logging
import time
from datetime import date

from dashboard.constants import JOURNAL_FIELDS, JOURNAL_SAVED_SECONDS
from dashboard.data.repositories import StoreError

logger = logging.getLogger(__name__)

JOURNAL_FIELD_KEYS = [key for key, _ in JOURNAL_FIELDS]


class JournalSaveError(RuntimeError):
    pass


def _empty_entry():
    return {key: "" for key in JOURNAL_FIELD_KEYS}


class JournalSession:
    """Today's journal entry: at most one per user and day.

    The first save inserts and remembers the new id; every later save in the
    same session updates that row.
    """

    def __init__(self, store, user_id, clock=time.monotonic, saved_seconds=JOURNAL_SAVED_SECONDS):
        self.store = store
        self.user_id = user_id
        self.clock = clock
        self.saved_seconds = saved_seconds
        self.entry = _empty_entry()
        self.entry_id = None
        self.saving = False
        self._saved_at = None

    def fetch_for_today(self, today=None):
        today = today or date.today()
        try:
            row = self.store.get_journal_entry(self.user_id, today)
        except StoreError as exc:
            logger.exception("Error fetching journal: %s", exc)
            return None
        if row:
            self.entry = {key: row.get(key) or "" for key in JOURNAL_FIELD_KEYS}
            self.entry_id = row.get("id")
        return row

    def change(self, field, value):
        if field not in JOURNAL_FIELD_KEYS:
            raise ValueError(f"Unknown journal field: {field}")
        self.entry = {**self.entry, field: value}
        self._saved_at = None

    def save(self, today=None):
        today = today or date.today()
        payload = {"date": today.isoformat(), **self.entry}
        self.saving = True
        try:
            if self.entry_id:
                self.store.update_journal_entry(self.user_id, self.entry_id, payload)
            else:
                row = self.store.insert_journal_entry(self.user_id, payload)
                if row:
                    self.entry_id = row.get("id")
        except StoreError as exc:
            logger.error("Error saving journal: %s", exc)
            raise JournalSaveError("Failed to save journal") from exc
        finally:
            self.saving = False
        self._saved_at = self.clock()

    @property
    def saved(self):
        if self._saved_at is None:
            return False
        return self.clock() - self._saved_at < self.saved_seconds
