"""In-memory UserEventStore."""

from dataclasses import replace

from ugsmeta.interfaces.metadata_store import (
    ChangeFilter,
    UserEventRow,
    UserEventStore,
)
from ugsmeta.interfaces.storage import RecordConflictError

from .filtering import matches


class InMemoryUserEventStore(UserEventStore):
    """In-memory UserEventStore keyed by row id.

    Note: not thread-safe; callers serialize writes.
    """

    def __init__(self):
        self.rows: dict[int, UserEventRow] = {}
        self._next_id = 1

    def get(self, project_id: int, user: str, change: int) -> UserEventRow | None:
        for row in self.rows.values():
            if (row.project_id, row.user, row.change) == (project_id, user, change):
                return row
        return None

    def save(self, event: UserEventRow) -> UserEventRow:
        if event.id is None:
            if self.get(event.project_id, event.user, event.change) is not None:
                raise RecordConflictError(
                    f"user event for {event.user!r} on change {event.change} exists"
                )
            event = replace(event, id=self._next_id)
            self._next_id += 1
        elif event.id not in self.rows:
            # Mirrors an UPDATE matching no row: nothing is written.
            return event
        self.rows[event.id] = event
        return event

    def fetch(
        self, project_id: int, change_filter: ChangeFilter
    ) -> list[UserEventRow]:
        return sorted(
            (
                row
                for row in self.rows.values()
                if row.project_id == project_id
                and matches(change_filter, row.change, row.sequence)
            ),
            key=lambda row: row.sequence,
        )
