import logging
import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

_SECRET_GETTER = None


class ApiError(RuntimeError):
    def __init__(self, status_code, reason, detail):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        super().__init__(f"API error {status_code} {reason}: {detail}")


def _build_session():
    session = requests.Session()
    # Reads only; a failed write is reported to the caller, never replayed.
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


_SESSION = _build_session()


def configure(secret_getter):
    global _SECRET_GETTER
    _SECRET_GETTER = secret_getter


def get_session():
    return _SESSION


def _get_secret(path, default=None):
    if _SECRET_GETTER is None:
        return default
    return _SECRET_GETTER(path, default)


def api_base_url():
    return (
        _get_secret(("app", "API_BASE_URL"))
        or _get_secret(("API_BASE_URL",))
        or os.getenv("API_BASE_URL")
        or ""
    )


def backend_token():
    return (
        _get_secret(("app", "BACKEND_SESSION_SECRET"))
        or _get_secret(("BACKEND_SESSION_SECRET",))
        or os.getenv("BACKEND_SESSION_SECRET")
        or ""
    )


def is_enabled():
    return bool(api_base_url() and backend_token())


def request(
    method: str,
    path: str,
    user_id: str | None = None,
    params: dict | None = None,
    json: dict | None = None,
    timeout: int = 10,
) -> Any:
    base = api_base_url().rstrip("/")
    if not base:
        raise RuntimeError("API_BASE_URL not configured")
    token = backend_token()
    if not token:
        raise RuntimeError("BACKEND_SESSION_SECRET not configured")
    headers = {"X-Backend-Token": token}
    if user_id:
        headers["X-User-Id"] = user_id
    url = f"{base}{path}"
    try:
        response = _SESSION.request(method, url, params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise ApiError(None, "connection error", str(exc)) from exc
    if not response.ok:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        if isinstance(detail, dict) and "detail" in detail:
            detail = detail["detail"]
        raise ApiError(response.status_code, response.reason, detail)
    if response.status_code == 204:
        return None
    return response.json()
