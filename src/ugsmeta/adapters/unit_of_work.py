"""SQLAlchemy-backed Unit of Work for UGSMETA.

Provides a context-managed UnitOfWork that opens one SQLAlchemy Connection and
binds the project index, sequence allocator and both metadata stores to it, so
every write of a command shares a single transaction.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ugsmeta.adapters.metadata_store.sqlalchemy_adapters import (
    SqlAlchemyBadgeStore,
    SqlAlchemyProjectIndex,
    SqlAlchemySequenceAllocator,
    SqlAlchemyUserEventStore,
)
from ugsmeta.domain.utils import unix_micros
from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    Args:
        engine: Engine the connection is drawn from on every ``with`` block.
        clock: Unix-microsecond clock handed to the sequence allocator.
    """

    def __init__(self, engine: Engine, clock: Callable[[], int] = unix_micros):
        self.engine = engine
        self.clock = clock
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.projects = SqlAlchemyProjectIndex(self.connection)
        self.sequences = SqlAlchemySequenceAllocator(self.connection, self.clock)
        self.badges = SqlAlchemyBadgeStore(self.connection)
        self.user_events = SqlAlchemyUserEventStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()
