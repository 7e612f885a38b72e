from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from backend.auth import authenticate, require_backend_token
from backend.schemas import SessionRequest, SessionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/v1/session", response_model=SessionResponse, dependencies=[Depends(require_backend_token)])
async def create_session(payload: SessionRequest):
    user = authenticate(payload.email, payload.password)
    logger.info("Signed in %s", user["email"])
    return user
