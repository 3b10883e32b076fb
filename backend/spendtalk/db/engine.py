# spendtalk/db/engine.py
from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from spendtalk.core.config import settings


def _ensure_sqlite_folder(url: str) -> None:
    u = make_url(url)
    if u.get_backend_name() == "sqlite" and u.database and u.database != ":memory:":
        Path(u.database).parent.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=None)
def engine_for(url: str) -> Engine:
    _ensure_sqlite_folder(url)
    return create_engine(url, future=True, pool_pre_ping=True)


def get_engine() -> Engine:
    return engine_for(settings.DATABASE_URL)
