from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List

from dashboard.constants import BOOK_STATUS_FINISHED
from dashboard.data.repositories import StoreError
from dashboard.metrics import build_consistency_grid, compute_day_count, count_active_days

logger = logging.getLogger(__name__)


@dataclass
class StatsSummary:
    total_missions: int = 0
    books_read: int = 0
    active_days: int = 0
    consistency: List[Dict[str, Any]] = field(default_factory=list)


def load_day_count(store, user_id, now=None):
    now = now or datetime.now()
    try:
        earliest = store.earliest_task_date(user_id)
    except StoreError as exc:
        logger.exception("Error calculating day: %s", exc)
        return 1
    return compute_day_count(earliest, now)


def load_stats(store, user_id, today=None):
    today = today or date.today()
    summary = StatsSummary(consistency=build_consistency_grid([], today))
    try:
        summary.total_missions = store.count_tasks(user_id, completed=True)
        summary.books_read = store.count_books(user_id, status=BOOK_STATUS_FINISHED)
        rows = store.list_task_completions(user_id)
    except StoreError as exc:
        logger.exception("Error fetching stats: %s", exc)
        return summary
    summary.active_days = count_active_days(rows)
    summary.consistency = build_consistency_grid(rows, today)
    return summary
