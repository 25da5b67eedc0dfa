"""SQLAlchemy-backed UserEventStore adapter."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, insert, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError

from ugsmeta.domain.errors import UnknownCodeError
from ugsmeta.domain.user_event import UserEventState
from ugsmeta.domain.value_objects import UserVote
from ugsmeta.interfaces.metadata_store import (
    ChangeFilter,
    UserEventRow,
    UserEventStore,
)
from ugsmeta.interfaces.storage import (
    CorruptRecordError,
    RecordConflictError,
    StoreUnavailableError,
)

from ..schema import user_events

if TYPE_CHECKING:
    from sqlalchemy import RowMapping
    from sqlalchemy.engine import Connection


class SqlAlchemyUserEventStore(UserEventStore):
    """SQLAlchemy-backed UserEventStore using the ``user_events`` table.

    Rows are unique per (project_id, user_name, change_number). `save` inserts
    new rows and updates existing ones in place, keeping their id.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(self, project_id: int, user: str, change: int) -> UserEventRow | None:
        stmt = select(user_events).where(
            user_events.c.project_id == project_id,
            user_events.c.user_name == user,
            user_events.c.change_number == change,
        )
        try:
            row = self.connection.execute(stmt).mappings().one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return None if row is None else self._to_row(row)

    def save(self, event: UserEventRow) -> UserEventRow:
        values = self._to_values(event)
        try:
            if event.id is None:
                new_id = self.connection.execute(
                    insert(user_events).values(**values).returning(user_events.c.id)
                ).scalar_one()
                return replace(event, id=new_id)

            self.connection.execute(
                update(user_events).where(user_events.c.id == event.id).values(**values)
            )
        except IntegrityError as e:
            raise RecordConflictError(str(e.orig or e)) from e
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return event

    def fetch(
        self, project_id: int, change_filter: ChangeFilter
    ) -> list[UserEventRow]:
        stmt: Select = (
            select(user_events)
            .where(user_events.c.project_id == project_id)
            .where(user_events.c.change_number >= change_filter.min_change)
            .order_by(user_events.c.sequence.asc())
        )
        if change_filter.max_change is not None:
            stmt = stmt.where(user_events.c.change_number <= change_filter.max_change)
        if change_filter.since_sequence is not None:
            stmt = stmt.where(user_events.c.sequence > change_filter.since_sequence)

        try:
            rows = self.connection.execute(stmt).mappings().all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return [self._to_row(row) for row in rows]

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    @staticmethod
    def _to_values(event: UserEventRow) -> dict[str, Any]:
        state = event.state
        return {
            "project_id": event.project_id,
            "change_number": event.change,
            "user_name": event.user,
            "sequence": event.sequence,
            "updated_at": event.updated_at,
            "synced_at": state.synced_at,
            "vote": None if state.vote is None else int(state.vote),
            "investigating": state.investigating,
            "starred": state.starred,
            "comment": state.comment,
        }

    @staticmethod
    def _to_row(row: RowMapping) -> UserEventRow:
        try:
            vote = None if row["vote"] is None else UserVote.from_code(row["vote"])
        except UnknownCodeError as e:
            raise CorruptRecordError("user_events", row["id"], str(e)) from e

        return UserEventRow(
            id=row["id"],
            project_id=row["project_id"],
            change=row["change_number"],
            user=row["user_name"],
            sequence=row["sequence"],
            updated_at=row["updated_at"],
            state=UserEventState(
                synced_at=row["synced_at"],
                vote=vote,
                investigating=row["investigating"],
                starred=row["starred"],
                comment=row["comment"],
            ),
        )
