"""SQLAlchemy-backed BadgeStore adapter.

Badges are append-only: this adapter only inserts and selects. Stored result
codes are decoded strictly; an unknown code raises `CorruptRecordError` for
the whole fetch rather than being skipped or mapped to a default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Select, func, insert, select
from sqlalchemy.exc import DBAPIError, IntegrityError

from ugsmeta.domain.errors import UnknownCodeError
from ugsmeta.domain.value_objects import BadgeResult
from ugsmeta.interfaces.metadata_store import BadgeRow, BadgeStore, ChangeFilter
from ugsmeta.interfaces.storage import (
    CorruptRecordError,
    RecordConflictError,
    StoreUnavailableError,
)

from ..schema import badges

if TYPE_CHECKING:
    from sqlalchemy import RowMapping
    from sqlalchemy.engine import Connection


class SqlAlchemyBadgeStore(BadgeStore):
    """SQLAlchemy-backed BadgeStore using the ``badges`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def append(self, badge: BadgeRow) -> None:
        stmt = insert(badges).values(
            sequence=badge.sequence,
            change_number=badge.change,
            added_at=badge.added_at,
            build_type=badge.build_type,
            result=int(badge.result),
            url=badge.url,
            project_id=badge.project_id,
        )
        try:
            self.connection.execute(stmt)
        except IntegrityError as e:
            raise RecordConflictError(str(e.orig or e)) from e
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    def fetch(self, project_id: int, change_filter: ChangeFilter) -> list[BadgeRow]:
        stmt: Select = (
            select(badges)
            .where(badges.c.project_id == project_id)
            .where(badges.c.change_number >= change_filter.min_change)
            .order_by(badges.c.sequence.asc())
        )
        if change_filter.max_change is not None:
            stmt = stmt.where(badges.c.change_number <= change_filter.max_change)
        if change_filter.since_sequence is not None:
            stmt = stmt.where(badges.c.sequence > change_filter.since_sequence)

        try:
            rows = self.connection.execute(stmt).mappings().all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return [self._to_row(row) for row in rows]

    def latest_sequence(self, project_id: int) -> int | None:
        stmt = select(func.max(badges.c.sequence)).where(
            badges.c.project_id == project_id
        )
        try:
            return self.connection.execute(stmt).scalar_one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    @staticmethod
    def _to_row(row: RowMapping) -> BadgeRow:
        try:
            result = BadgeResult.from_code(row["result"])
        except UnknownCodeError as e:
            raise CorruptRecordError("badges", row["id"], str(e)) from e

        return BadgeRow(
            sequence=row["sequence"],
            project_id=row["project_id"],
            change=row["change_number"],
            added_at=row["added_at"],
            build_type=row["build_type"],
            result=result,
            url=row["url"],
        )
