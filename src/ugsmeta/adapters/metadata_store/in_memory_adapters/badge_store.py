"""In-memory BadgeStore.

Badges are kept in insertion order in a plain list. Use for unit tests or
prototyping; nothing survives the instance.
"""

from ugsmeta.interfaces.metadata_store import BadgeRow, BadgeStore, ChangeFilter
from ugsmeta.interfaces.storage import RecordConflictError

from .filtering import matches


class InMemoryBadgeStore(BadgeStore):
    """In-memory BadgeStore for testing and non-durable use cases."""

    def __init__(self):
        self.rows: list[BadgeRow] = []

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def append(self, badge: BadgeRow) -> None:
        if any(row.sequence == badge.sequence for row in self.rows):
            raise RecordConflictError(f"duplicate badge sequence {badge.sequence}")
        self.rows.append(badge)

    def fetch(self, project_id: int, change_filter: ChangeFilter) -> list[BadgeRow]:
        return sorted(
            (
                row
                for row in self.rows
                if row.project_id == project_id
                and matches(change_filter, row.change, row.sequence)
            ),
            key=lambda row: row.sequence,
        )

    def latest_sequence(self, project_id: int) -> int | None:
        return max(
            (row.sequence for row in self.rows if row.project_id == project_id),
            default=None,
        )
