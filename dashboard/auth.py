from __future__ import annotations

import logging
import os
from datetime import date

from dashboard.constants import DEFAULT_EXAM_START, DEFAULT_PLAN_START
from dashboard.data import api_client

logger = logging.getLogger(__name__)

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")

ENV_FALLBACK_KEYS = {
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
    ("app", "ENFORCE_SIGN_IN"): "ENFORCE_SIGN_IN",
    ("exams", "plan_start"): "PLAN_START",
    ("exams", "exam_start"): "EXAM_START",
}

SESSION_USER_KEY = "auth.user"
SESSION_PROVIDER_KEY = "auth.provider"
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    import streamlit as st

    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except (FileNotFoundError, KeyError, TypeError):
        return default
    return current


def _parse_flag(value):
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _parse_date(value, default):
    if not value:
        return default
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        logger.warning("Ignoring invalid date setting %r", value)
        return default


def sign_in_enforced(secret_getter=get_secret):
    return _parse_flag(secret_getter(("app", "ENFORCE_SIGN_IN"), "false"))


def exam_schedule(secret_getter=get_secret):
    return (
        _parse_date(secret_getter(("exams", "plan_start")), DEFAULT_PLAN_START),
        _parse_date(secret_getter(("exams", "exam_start")), DEFAULT_EXAM_START),
    )


def api_authenticate(email, password):
    return api_client.request("POST", "/v1/session", json={"email": email, "password": password})


class SessionProvider:
    """Current user identity kept in a mutable mapping (``st.session_state`` in the app)."""

    def __init__(self, storage, authenticate=api_authenticate):
        self.storage = storage
        self.authenticate = authenticate
        self._listeners = []

    def current_user(self):
        return self.storage.get(SESSION_USER_KEY)

    def current_user_id(self):
        user = self.current_user()
        return user.get("id") if user else None

    def sign_in(self, email, password=None):
        user = self.authenticate((email or "").strip().lower(), password)
        self.storage[SESSION_USER_KEY] = user
        logger.info("Signed in as %s", user.get("email"))
        self._notify(SIGNED_IN, user)
        return user

    def sign_out(self):
        if SESSION_USER_KEY in self.storage:
            del self.storage[SESSION_USER_KEY]
        self._notify(SIGNED_OUT, None)

    def subscribe(self, callback):
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, event, user):
        for callback in list(self._listeners):
            callback(event, user)


def get_session_provider(storage, on_change=None, authenticate=api_authenticate):
    """Return the provider kept in ``storage``, creating and subscribing it once."""
    provider = storage.get(SESSION_PROVIDER_KEY)
    if provider is None:
        provider = SessionProvider(storage, authenticate=authenticate)
        if on_change is not None:
            provider.subscribe(on_change)
        storage[SESSION_PROVIDER_KEY] = provider
    return provider
