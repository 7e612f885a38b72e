from __future__ import annotations

import math
from datetime import date, datetime, timedelta

import pandas as pd

from dashboard.constants import (
    CONSISTENCY_WINDOW_DAYS,
    DEFAULT_EXAM_START,
    DEFAULT_PLAN_START,
    INTENSITY_THRESHOLDS,
    PROGRAM_DAYS,
)

SECONDS_PER_DAY = 24 * 60 * 60


def _as_date(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _as_naive_datetime(value):
    if not isinstance(value, datetime):
        return datetime.combine(value, datetime.min.time())
    if value.tzinfo is not None:
        return value.replace(tzinfo=None)
    return value


def _days_since_midnight(start_day, now):
    """Partial days round up: 10:00 on the start day is already day 1."""
    start = datetime.combine(start_day, datetime.min.time())
    elapsed = abs((_as_naive_datetime(now) - start).total_seconds())
    return math.ceil(elapsed / SECONDS_PER_DAY)


def compute_day_count(earliest, now):
    start_day = _as_date(earliest)
    if start_day is None:
        return 1
    return _days_since_midnight(start_day, now) or 1


def program_progress(day_count, total_days=PROGRAM_DAYS):
    if total_days <= 0:
        return 0.0
    return min(day_count / total_days * 100, 100.0)


def completion_intensity(completions):
    intensity = 0.0
    for threshold, value in INTENSITY_THRESHOLDS:
        if completions >= threshold:
            intensity = value
    return intensity


def completions_by_date(rows):
    if not rows:
        return {}
    frame = pd.DataFrame(list(rows), columns=["date", "completed"])
    frame["date"] = frame["date"].astype(str).str[:10]
    done = frame[frame["completed"].fillna(False).astype(bool)]
    if done.empty:
        return {}
    return {str(day): int(count) for day, count in done.groupby("date").size().items()}


def build_consistency_grid(rows, today, days=CONSISTENCY_WINDOW_DAYS):
    counts = completions_by_date(rows)
    grid = []
    for offset in range(days):
        day_iso = (today - timedelta(days=offset)).isoformat()
        completions = counts.get(day_iso, 0)
        grid.append({
            "date": day_iso,
            "completions": completions,
            "intensity": completion_intensity(completions),
        })
    grid.reverse()
    return grid


def count_active_days(rows):
    return sum(1 for count in completions_by_date(rows).values() if count > 0)


def exam_plan_message(now, plan_start=DEFAULT_PLAN_START, exam_start=DEFAULT_EXAM_START):
    now = _as_naive_datetime(now)
    if now < datetime.combine(plan_start, datetime.min.time()):
        return "PRE-GAME PREP"
    day_diff = _days_since_midnight(plan_start, now)
    if day_diff in (0, 1):
        return "HIGH INTENSITY: Clear Physics Unit 1-3"
    if 2 <= day_diff <= 4:
        return "PONGAL BREAK: Formula Reading & Light Revision (Physics/Maths)"
    if day_diff in (5, 6):
        return "CRITICAL MASS: Complete all Physics Units. Start Math Rev."
    if now >= datetime.combine(exam_start, datetime.min.time()):
        return "WAR MODE: Exam Cycle Active. Focus on Next Paper."
    return "STAY HARD: Clear pending backlogs."
