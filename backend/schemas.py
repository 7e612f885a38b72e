from __future__ import annotations

from typing import Optional, List

from pydantic import BaseModel, Field

BOOK_STATUSES = ("To Read", "Reading", "Finished")
EXAM_STATUSES = ("Not Started", "Completed")


class SessionRequest(BaseModel):
    email: str
    password: Optional[str] = None


class SessionResponse(BaseModel):
    id: str
    email: str


class TaskSeed(BaseModel):
    titles: List[str] = Field(default_factory=list)


class TaskPatch(BaseModel):
    completed: Optional[bool] = None
    time_spent: Optional[str] = None
    note: Optional[str] = None


class BookCreate(BaseModel):
    title: str
    author: str = ""


class BookPatch(BaseModel):
    status: Optional[str] = None
    lesson: Optional[str] = None


class JournalPayload(BaseModel):
    date: Optional[str] = None
    well: str = ""
    avoided: str = ""
    lesson: str = ""


class ExamUnitUpsert(BaseModel):
    subject: str
    unit_number: int = Field(..., ge=1)
    status: str
