"""SQLAlchemy engine singleton and session helpers."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.loader import DATABASE_URL_ENV, get_reader_config

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_database_url() -> str:
    return os.environ.get(DATABASE_URL_ENV) or get_reader_config().database_url


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def _engine_options(url: str) -> Dict[str, Any]:
    if _is_memory_sqlite(url):
        # A single shared connection keeps in-memory databases alive across sessions.
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
            "echo": False,
        }
    if make_url(url).get_backend_name() == "sqlite":
        # File databases need one connection per session so transactions stay apart.
        return {"connect_args": {"check_same_thread": False}, "echo": False}
    return {
        "pool_size": 10,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "echo": False,
    }


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        url = get_database_url()
        _engine = create_engine(url, **_engine_options(url))
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            expire_on_commit=False,
        )
    return _session_factory


@contextmanager
def get_db_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    factory = get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema() -> None:
    """Create every registered table on the configured database."""
    from . import models  # noqa: F401  (registers models with Base.metadata)
    from .base import Base

    Base.metadata.create_all(get_engine())


def dispose_engine() -> None:
    """Dispose the global engine and clear the factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
