"""SQLAlchemy-backed UnitOfWork: one Session, one database transaction."""

from __future__ import annotations

import structlog
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from flowershop.domain.exceptions import TransientFailure
from flowershop.domain.repository.unit_of_work import UnitOfWork
from flowershop.infrastructure.persistence.sql_customer_repository import (
    SqlCustomerRepository,
)
from flowershop.infrastructure.persistence.sql_flower_repository import (
    SqlFlowerRepository,
)
from flowershop.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)

logger = structlog.get_logger(__name__)


def is_transient(exc: BaseException) -> bool:
    """Lock contention, timeouts and dropped connections are worth retrying."""
    if isinstance(exc, (OperationalError, PoolTimeoutError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        self._finished = False

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self._finished = False
        self.flowers = SqlFlowerRepository(self._session)
        self.customers = SqlCustomerRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None
        if exc is not None and is_transient(exc):
            raise TransientFailure("The shop is busy, please retry") from exc

    def commit(self) -> None:
        if self._finished:
            raise RuntimeError("Unit of work already finished")
        self._session.commit()
        self._finished = True

    def rollback(self) -> None:
        if self._finished or self._session is None:
            return
        self._finished = True
        try:
            self._session.rollback()
        except SQLAlchemyError:
            # The original error is still propagating; closing the session
            # discards the connection.
            logger.warning("rollback_failed", exc_info=True)
