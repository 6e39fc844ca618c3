"""Shared fixtures: a throwaway SQLite database per test."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from flowershop.infrastructure import bootstrap
from flowershop.infrastructure.logging import configure_logging
from flowershop.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    create_session_factory,
)
from flowershop.infrastructure.persistence.tables import CustomerRecord, FlowerRecord
from flowershop.infrastructure.persistence.unit_of_work import SqlUnitOfWork


def pytest_configure(config: pytest.Config) -> None:
    configure_logging("test")


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'flowershop.db'}"


@pytest.fixture
def engine(db_url):
    db_engine = create_db_engine(db_url, timeout=30.0)
    create_schema(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def uow_factory(session_factory):
    return lambda: SqlUnitOfWork(session_factory)


@pytest.fixture
def add_flower(session_factory):
    """Insert a flower row directly and return its ID."""

    def _add(
        name: str,
        price: str,
        stock: int,
        flower_id: int | None = None,
        active: bool = True,
        category: str | None = None,
    ) -> int:
        with session_factory() as session, session.begin():
            record = FlowerRecord(
                id=flower_id,
                name=name,
                price=Decimal(price),
                stock=stock,
                is_active=active,
                category=category,
            )
            session.add(record)
            session.flush()
            return record.id

    return _add


@pytest.fixture
def add_customer(session_factory):
    """Insert a customer row directly and return its ID."""

    def _add(email: str, name: str = "Jane Doe", active: bool = True) -> int:
        with session_factory() as session, session.begin():
            record = CustomerRecord(email=email, name=name, is_active=active)
            session.add(record)
            session.flush()
            return record.id

    return _add


@pytest.fixture
def stock_of(session_factory):
    def _stock(flower_id: int) -> int:
        with session_factory() as session:
            return session.get(FlowerRecord, flower_id).stock

    return _stock


@pytest.fixture
def count_rows(session_factory):
    def _count(model) -> int:
        with session_factory() as session:
            return session.scalar(select(func.count()).select_from(model))

    return _count


@pytest.fixture
def cli_env(db_url, monkeypatch):
    """Point the CLI's composition root at the test database."""
    monkeypatch.setenv("FLOWERSHOP_DATABASE_URL", db_url)
    monkeypatch.setenv("FLOWERSHOP_ENV", "test")
    bootstrap.reset()
    yield db_url
    bootstrap.reset()
