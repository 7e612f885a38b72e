from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg"
LOCAL_HOSTS = {"localhost", "127.0.0.1"}


def _normalize_database_url(database_url: str) -> str:
    """Route Postgres URLs through asyncpg; SQLite URLs pass through."""
    url = str(database_url or "").strip()
    scheme, sep, rest = url.partition("://")
    if not sep or scheme not in {"postgres", "postgresql"}:
        return url
    parsed = urlparse(f"{ASYNC_POSTGRES_SCHEME}://{rest}")
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    # asyncpg rejects libpq's sslmode.
    if query.pop("sslmode", None):
        query["ssl"] = "true"
    return urlunparse(parsed._replace(query=urlencode(query)))


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = _normalize_database_url(get_settings().database_url)
        if db_url.startswith("sqlite"):
            _engine = create_async_engine(db_url, future=True)
        else:
            host = urlparse(db_url).hostname or ""
            connect_args = {"ssl": True} if host and host not in LOCAL_HOSTS else {}
            logger.info("Connecting to Postgres at %s", host or "default host")
            _engine = create_async_engine(
                db_url,
                connect_args=connect_args,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=5,
                future=True,
            )
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
