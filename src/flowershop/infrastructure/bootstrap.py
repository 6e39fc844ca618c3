"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from flowershop.infrastructure.config import Settings
from flowershop.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    create_session_factory,
)
from flowershop.infrastructure.persistence.unit_of_work import SqlUnitOfWork


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    cfg = settings()
    db_engine = create_db_engine(cfg.database_url, timeout=cfg.db_timeout)
    create_schema(db_engine)
    return db_engine


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    return create_session_factory(engine())


def unit_of_work() -> SqlUnitOfWork:
    """A fresh transactional context; callers use it as a context manager."""
    return SqlUnitOfWork(session_factory())


def reset() -> None:
    """Forget cached settings and connections (used when the environment changes)."""
    if engine.cache_info().currsize:
        engine().dispose()
    settings.cache_clear()
    engine.cache_clear()
    session_factory.cache_clear()
