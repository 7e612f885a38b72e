from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend import repositories
from backend.schemas import BookCreate, BookPatch

router = APIRouter()


@router.get("/v1/books")
async def list_books(user_id: str = Depends(require_user_id)):
    return {"items": await repositories.list_books(user_id)}


@router.get("/v1/books/count")
async def count_books(
    status: str | None = Query(default=None),
    user_id: str = Depends(require_user_id),
):
    return {"count": await repositories.count_books(user_id, status=status)}


@router.post("/v1/books")
async def create_book(payload: BookCreate, user_id: str = Depends(require_user_id)):
    try:
        return await repositories.create_book(user_id, payload.title, payload.author)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/v1/books/{book_id}")
async def patch_book(book_id: str, payload: BookPatch, user_id: str = Depends(require_user_id)):
    try:
        record = await repositories.update_book(user_id, book_id, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if not record:
        raise HTTPException(status_code=404, detail="not_found")
    return record


@router.delete("/v1/books/{book_id}")
async def delete_book(book_id: str, user_id: str = Depends(require_user_id)):
    await repositories.delete_book(user_id, book_id)
    return {"ok": True}
