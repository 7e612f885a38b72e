from __future__ import annotations

import logging
from datetime import date as dt_date

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.schemas import TaskPatch, TaskSeed
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_day(day: str) -> str:
    try:
        return dt_date.fromisoformat(day).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")


@router.get("/v1/tasks/earliest")
async def earliest_task_date(user_id: str = Depends(require_user_id)):
    return {"date": await repositories.get_earliest_task_date(user_id)}


@router.get("/v1/tasks/completions")
async def list_completions(user_id: str = Depends(require_user_id)):
    return {"items": await repositories.list_task_completions(user_id)}


@router.get("/v1/tasks/count")
async def count_tasks(
    completed: bool | None = Query(default=None),
    user_id: str = Depends(require_user_id),
):
    return {"count": await repositories.count_tasks(user_id, completed=completed)}


@router.get("/v1/tasks/day/{day}")
async def list_day_tasks(day: str, user_id: str = Depends(require_user_id)):
    day_iso = _parse_day(day)
    items = await repositories.list_tasks_for_day(user_id, day_iso)
    return {"date": day_iso, "items": items}


@router.post("/v1/tasks/day/{day}")
async def seed_day_tasks(day: str, payload: TaskSeed, user_id: str = Depends(require_user_id)):
    day_iso = _parse_day(day)
    if not payload.titles:
        raise HTTPException(status_code=400, detail="No titles provided")
    items = await repositories.insert_tasks(user_id, day_iso, payload.titles)
    return {"date": day_iso, "items": items}


@router.patch("/v1/tasks/{task_id}")
async def patch_task(task_id: str, payload: TaskPatch, user_id: str = Depends(require_user_id)):
    try:
        record = await repositories.update_task(user_id, task_id, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not record:
        raise HTTPException(status_code=404, detail="not_found")
    return record
