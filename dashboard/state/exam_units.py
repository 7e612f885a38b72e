import logging

from dashboard.constants import SYLLABUS, UNIT_COMPLETED, UNIT_NOT_STARTED
from dashboard.data.repositories import StoreError
from dashboard.state.optimistic import begin, patch_mapping, settle

logger = logging.getLogger(__name__)


def unit_key(subject, unit_number):
    return f"{subject}-{int(unit_number)}"


class ExamUnitTracker:
    def __init__(self, store, user_id, syllabus=None):
        self.store = store
        self.user_id = user_id
        self.syllabus = list(syllabus if syllabus is not None else SYLLABUS)
        self.units = {}

    def load(self):
        try:
            rows = self.store.list_exam_units(self.user_id)
        except StoreError as exc:
            logger.exception("Error fetching exam progress: %s", exc)
            return self.units
        self.units = {unit_key(row["subject"], row["unit_number"]): row["status"] for row in rows}
        return self.units

    def status(self, subject, index):
        return self.units.get(unit_key(subject, index + 1), UNIT_NOT_STARTED)

    def is_done(self, subject, index):
        return self.status(subject, index) == UNIT_COMPLETED

    def toggle(self, subject, index, currently_done):
        """Flip one unit. ``index`` is 0-based; the stored unit number is 1-based."""
        unit_number = index + 1
        key = unit_key(subject, unit_number)
        prior_status = self.units.get(key, UNIT_NOT_STARTED)
        new_status = UNIT_NOT_STARTED if currently_done else UNIT_COMPLETED
        pending = begin(prior_status, new_status)
        self.units = patch_mapping(self.units, key, pending.tentative)
        succeeded = True
        try:
            self.store.upsert_exam_unit(self.user_id, subject, unit_number, new_status)
        except StoreError as exc:
            logger.error("Error updating unit %s: %s", key, exc)
            succeeded = False
        self.units = patch_mapping(self.units, key, settle(pending, succeeded))
        return succeeded

    def subject_progress(self, subject):
        for entry in self.syllabus:
            if entry["name"] == subject:
                total = len(entry["units"])
                done = sum(1 for idx in range(total) if self.is_done(subject, idx))
                return done, total
        return 0, 0

    def overall_progress(self):
        done = 0
        total = 0
        for entry in self.syllabus:
            subject_done, subject_total = self.subject_progress(entry["name"])
            done += subject_done
            total += subject_total
        if not total:
            return 0.0
        return round(done / total * 100, 1)
