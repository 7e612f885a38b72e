from datetime import date, datetime, timedelta, timezone

import pytest

from dashboard.metrics import (
    build_consistency_grid,
    completion_intensity,
    completions_by_date,
    compute_day_count,
    count_active_days,
    exam_plan_message,
    program_progress,
)
from dashboard.visualizations import build_consistency_matrix

TODAY = date(2026, 10, 19)


@pytest.mark.parametrize(
    "completions, expected",
    [(0, 0.0), (1, 0.4), (3, 0.4), (4, 0.7), (5, 1.0)],
)
def test_completion_intensity(completions, expected):
    assert completion_intensity(completions) == expected


class TestDayCount:
    def test_partial_day_rounds_up(self):
        assert compute_day_count("2026-10-10", datetime(2026, 10, 19, 12, 0)) == 10

    def test_exactly_ten_days_after_first_task(self):
        assert compute_day_count("2026-10-09", datetime(2026, 10, 19, 0, 0)) == 10

    def test_first_midnight_counts_as_day_one(self):
        assert compute_day_count("2026-10-19", datetime(2026, 10, 19, 0, 0)) == 1

    def test_same_day_afternoon_is_day_one(self):
        assert compute_day_count("2026-10-19", datetime(2026, 10, 19, 15, 30)) == 1

    def test_no_tasks_yet(self):
        assert compute_day_count(None, datetime(2026, 10, 19, 9, 0)) == 1

    def test_accepts_aware_now_and_date_values(self):
        now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert compute_day_count(date(2026, 10, 10), now) == 10


def test_program_progress_caps_at_full():
    assert program_progress(45) == 50
    assert program_progress(120) == 100.0


class TestConsistencyGrid:
    def test_window_runs_oldest_to_today(self):
        grid = build_consistency_grid([], TODAY)

        assert len(grid) == 90
        assert grid[-1]["date"] == "2026-10-19"
        assert grid[0]["date"] == (TODAY - timedelta(days=89)).isoformat()
        assert all(cell["intensity"] == 0.0 for cell in grid)

    def test_counts_only_completed_rows(self):
        rows = [
            {"date": "2026-10-19", "completed": True},
            {"date": "2026-10-19", "completed": True},
            {"date": "2026-10-19", "completed": False},
            {"date": "2026-10-18", "completed": True},
            {"date": "2026-10-18", "completed": True},
            {"date": "2026-10-18", "completed": True},
            {"date": "2026-10-18", "completed": True},
            {"date": "2026-10-18", "completed": True},
        ]

        grid = build_consistency_grid(rows, TODAY)

        assert grid[-1] == {"date": "2026-10-19", "completions": 2, "intensity": 0.4}
        assert grid[-2] == {"date": "2026-10-18", "completions": 5, "intensity": 1.0}

    def test_rows_outside_window_are_ignored(self):
        rows = [{"date": "2025-01-01", "completed": True}]
        grid = build_consistency_grid(rows, TODAY, days=7)

        assert len(grid) == 7
        assert sum(cell["completions"] for cell in grid) == 0

    def test_matrix_is_seven_rows_of_week_columns(self):
        z, text = build_consistency_matrix(build_consistency_grid([], TODAY))

        assert z.shape == (7, 13)
        assert text[0][0].startswith((TODAY - timedelta(days=89)).strftime("%b %d"))


def test_completions_by_date_and_active_days():
    rows = [
        {"date": "2026-10-01", "completed": True},
        {"date": "2026-10-01", "completed": 1},
        {"date": "2026-10-02", "completed": False},
        {"date": "2026-10-03", "completed": True},
    ]

    assert completions_by_date(rows) == {"2026-10-01": 2, "2026-10-03": 1}
    assert count_active_days(rows) == 2
    assert completions_by_date([]) == {}
    assert count_active_days([{"date": "2026-10-02", "completed": False}]) == 0


@pytest.mark.parametrize(
    "now, prefix",
    [
        (datetime(2026, 1, 12, 10, 0), "PRE-GAME PREP"),
        (datetime(2026, 1, 13, 0, 0), "HIGH INTENSITY"),
        (datetime(2026, 1, 13, 10, 0), "HIGH INTENSITY"),
        (datetime(2026, 1, 14, 10, 0), "PONGAL BREAK"),
        (datetime(2026, 1, 16, 10, 0), "PONGAL BREAK"),
        (datetime(2026, 1, 17, 10, 0), "CRITICAL MASS"),
        (datetime(2026, 1, 18, 10, 0), "CRITICAL MASS"),
        (datetime(2026, 1, 19, 10, 0), "STAY HARD"),
        (datetime(2026, 1, 20, 10, 0), "WAR MODE"),
        (datetime(2026, 3, 1, 10, 0), "WAR MODE"),
    ],
)
def test_exam_plan_message(now, prefix):
    assert exam_plan_message(now).startswith(prefix)


def test_exam_plan_partial_day_counts_as_next_bucket():
    assert exam_plan_message(datetime(2026, 1, 14, 0, 0)).startswith("HIGH INTENSITY")
    assert exam_plan_message(datetime(2026, 1, 14, 0, 1)).startswith("PONGAL BREAK")


def test_exam_plan_message_backlog_before_exams():
    message = exam_plan_message(
        datetime(2026, 1, 21, 10, 0),
        plan_start=date(2026, 1, 13),
        exam_start=date(2026, 2, 1),
    )
    assert message == "STAY HARD: Clear pending backlogs."
