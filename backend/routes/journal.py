from __future__ import annotations

from datetime import date as dt_date

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import require_user_id
from backend import repositories
from backend.schemas import JournalPayload

router = APIRouter()


@router.get("/v1/journal/{day}")
async def get_journal_entry(day: str, user_id: str = Depends(require_user_id)):
    try:
        day_iso = dt_date.fromisoformat(day).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")
    entry = await repositories.get_journal_entry(user_id, day_iso)
    if not entry:
        raise HTTPException(status_code=404, detail="not_found")
    return entry


@router.post("/v1/journal")
async def create_journal_entry(payload: JournalPayload, user_id: str = Depends(require_user_id)):
    data = payload.model_dump()
    try:
        return await repositories.insert_journal_entry(user_id, data)
    except repositories.DuplicateRecordError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/v1/journal/{entry_id}")
async def patch_journal_entry(entry_id: str, payload: JournalPayload, user_id: str = Depends(require_user_id)):
    data = payload.model_dump(exclude={"date"})
    try:
        record = await repositories.update_journal_entry(user_id, entry_id, data)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not record:
        raise HTTPException(status_code=404, detail="not_found")
    return record
