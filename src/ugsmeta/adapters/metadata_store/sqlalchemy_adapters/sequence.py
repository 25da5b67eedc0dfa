"""SQLAlchemy-backed global sequence allocator.

Sequence numbers are hybrid timestamps: each allocation returns
``max(now_in_unix_microseconds, last + 1)`` and stores it in the single
``sequence_counter`` row with one ``UPDATE ... RETURNING``. Values therefore
look like microsecond timestamps (as clients and older rows expect) while
staying strictly increasing across restarts and backwards clock steps.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, case, literal, select, update
from sqlalchemy.exc import DBAPIError

from ugsmeta.adapters.db.dialects import DialectName, build_insert_ignore
from ugsmeta.domain.utils import unix_micros
from ugsmeta.interfaces.sequence import SequenceAllocator
from ugsmeta.interfaces.storage import StorageError, StoreUnavailableError

from ..schema import GLOBAL_SEQUENCE_NAME, sequence_counter

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class SqlAlchemySequenceAllocator(SequenceAllocator):
    """Restart-safe allocator persisted in the ``sequence_counter`` table.

    Args:
        connection: Connection whose transaction the allocation joins.
        clock: Returns the current time in Unix microseconds.
    """

    def __init__(
        self, connection: Connection, clock: Callable[[], int] = unix_micros
    ):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)
        self._clock = clock

    def allocate(self) -> int:
        try:
            if (value := self._bump(self._clock())) is None:
                self._seed()
                value = self._bump(self._clock())
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        if value is None:  # pragma: no cover
            raise StorageError("sequence_counter row is missing after seeding")
        return value

    def current(self) -> int:
        stmt = select(sequence_counter.c.value).where(
            sequence_counter.c.name == GLOBAL_SEQUENCE_NAME
        )
        try:
            value = self.connection.execute(stmt).scalar_one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return 0 if value is None else int(value)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _bump(self, now: int) -> int | None:
        """Advance the counter to max(now, value + 1) and return the new value."""
        now_param = literal(now, BigInteger)
        next_value = sequence_counter.c.value + 1
        stmt = (
            update(sequence_counter)
            .where(sequence_counter.c.name == GLOBAL_SEQUENCE_NAME)
            .values(value=case((next_value > now_param, next_value), else_=now_param))
            .returning(sequence_counter.c.value)
        )
        value = self.connection.execute(stmt).scalar_one_or_none()
        return None if value is None else int(value)

    def _seed(self) -> None:
        """Create the counter row (at 0) if it does not exist yet."""
        self.connection.execute(
            build_insert_ignore(
                self.dialect,
                sequence_counter,
                {"name": GLOBAL_SEQUENCE_NAME, "value": 0},
            )
        )
