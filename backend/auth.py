from __future__ import annotations

import hmac
from uuid import NAMESPACE_URL, uuid5

from fastapi import Header, HTTPException

from backend.settings import get_settings


def user_id_for_email(email: str) -> str:
    return uuid5(NAMESPACE_URL, f"ghost-mode-90:{email.strip().lower()}").hex


async def require_backend_token(
    x_backend_token: str | None = Header(default=None, alias="X-Backend-Token"),
) -> None:
    settings = get_settings()
    if not x_backend_token or not hmac.compare_digest(x_backend_token, settings.backend_session_secret):
        raise HTTPException(status_code=401, detail="Invalid backend token")


async def require_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    x_backend_token: str | None = Header(default=None, alias="X-Backend-Token"),
) -> str:
    await require_backend_token(x_backend_token)
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Missing user id")
    return user_id


def authenticate(email: str, password: str | None) -> dict:
    settings = get_settings()
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise HTTPException(status_code=400, detail="Invalid email")
    if not settings.is_email_allowed(email):
        raise HTTPException(status_code=403, detail="User not allowed")
    if settings.access_password:
        if not password or not hmac.compare_digest(password, settings.access_password):
            raise HTTPException(status_code=401, detail="Invalid credentials")
    return {"id": user_id_for_email(email), "email": email}
