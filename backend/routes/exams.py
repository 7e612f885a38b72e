from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import require_user_id
from backend import repositories
from backend.schemas import ExamUnitUpsert

router = APIRouter()


@router.get("/v1/exams/units")
async def list_exam_units(user_id: str = Depends(require_user_id)):
    return {"items": await repositories.list_exam_units(user_id)}


@router.put("/v1/exams/units")
async def upsert_exam_unit(payload: ExamUnitUpsert, user_id: str = Depends(require_user_id)):
    try:
        return await repositories.upsert_exam_unit(
            user_id,
            payload.subject,
            payload.unit_number,
            payload.status,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
