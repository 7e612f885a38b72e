import logging
from datetime import date

from dashboard.constants import EDITABLE_TASK_FIELDS, MISSION_TASKS
from dashboard.data.repositories import StoreError
from dashboard.state.optimistic import begin, find_item, patch_item, settle

logger = logging.getLogger(__name__)

# Fetch + gap insert, then one confirming fetch.
MAX_SYNC_PASSES = 2


def _default_task_fields():
    return {"completed": False, "time_spent": "", "note": ""}


def missing_titles(template, rows):
    present = {row.get("title") for row in rows}
    return [entry["title"] for entry in template if entry["title"] not in present]


def merge_with_template(template, rows):
    by_title = {}
    for row in rows:
        by_title.setdefault(row.get("title"), row)
    merged = []
    for entry in template:
        persisted = by_title.get(entry["title"])
        view = {**entry, **_default_task_fields(), **(persisted or {})}
        view["id"] = persisted.get("id") if persisted else None
        merged.append(view)
    return merged


class DailyTaskSynchronizer:
    """Keeps today's fixed task template in step with the persisted rows."""

    def __init__(self, store, user_id, template=None, max_passes=MAX_SYNC_PASSES):
        self.store = store
        self.user_id = user_id
        self.template = list(template if template is not None else MISSION_TASKS)
        self.max_passes = max_passes
        self.tasks = []
        self.day = None
        self.last_error = None

    def synchronize(self, today=None):
        today = today or date.today()
        day_iso = today.isoformat() if isinstance(today, date) else str(today)
        rows = []
        try:
            for attempt in range(self.max_passes):
                rows = self.store.list_tasks(self.user_id, day_iso)
                gaps = missing_titles(self.template, rows)
                if not gaps:
                    break
                if attempt == self.max_passes - 1:
                    logger.warning(
                        "Tasks still missing for %s on %s after %s passes: %s",
                        self.user_id,
                        day_iso,
                        self.max_passes,
                        gaps,
                    )
                    break
                logger.info("Initializing %s task rows for %s", len(gaps), day_iso)
                self.store.insert_tasks(self.user_id, day_iso, gaps)
        except StoreError as exc:
            logger.exception("Error fetching tasks: %s", exc)
            self.last_error = str(exc)
            return self.tasks
        self.last_error = None
        self.day = day_iso
        self.tasks = merge_with_template(self.template, rows)
        return self.tasks

    def toggle(self, task_id, current_completed):
        if find_item(self.tasks, task_id) is None:
            logger.debug("Ignoring toggle for unknown task %s", task_id)
            return False
        pending = begin(bool(current_completed), not current_completed)
        self.tasks = patch_item(self.tasks, task_id, {"completed": pending.tentative})
        succeeded = True
        try:
            self.store.update_task(self.user_id, task_id, {"completed": pending.tentative})
        except StoreError as exc:
            logger.error("Error updating task %s: %s", task_id, exc)
            succeeded = False
        self.tasks = patch_item(self.tasks, task_id, {"completed": settle(pending, succeeded)})
        return succeeded

    def update_field(self, task_id, field, value):
        if field not in EDITABLE_TASK_FIELDS:
            raise ValueError(f"Field {field!r} is not editable")
        if find_item(self.tasks, task_id) is None:
            return
        self.tasks = patch_item(self.tasks, task_id, {field: value})

    def save_field(self, task_id, field, value):
        if field not in EDITABLE_TASK_FIELDS:
            raise ValueError(f"Field {field!r} is not editable")
        if find_item(self.tasks, task_id) is None:
            return False
        try:
            self.store.update_task(self.user_id, task_id, {field: value})
        except StoreError as exc:
            logger.error("Error updating %s: %s", field, exc)
            return False
        return True

    @property
    def completed_count(self):
        return sum(1 for task in self.tasks if task.get("completed"))

    @property
    def total(self):
        return len(self.template)

    @property
    def progress(self):
        if not self.template:
            return 0.0
        return self.completed_count / len(self.template) * 100

    @property
    def mission_complete(self):
        return bool(self.template) and self.completed_count == len(self.template)
