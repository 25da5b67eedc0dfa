"""Folding of raw badge and user-event rows into per-changelist records.

The folder is fed rows project by project, each kind in ascending sequence
order. It keeps one `MetadataRecord` per (project, change), created on the
first row that mentions the pair, and tracks the highest sequence seen so the
caller can hand it back to the client as the next cursor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .metadata import BadgeEntry, MetadataList, MetadataRecord

if TYPE_CHECKING:
    from .metadata import UserEntry
    from .value_objects import BadgeResult


class MetadataFolder:
    """Accumulates aggregate records in first-appearance order."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, int], MetadataRecord] = {}
        self.sequence_number = 0

    def _record(self, project: str, change: int, sequence: int) -> MetadataRecord:
        self.sequence_number = max(self.sequence_number, sequence)
        key = (project, change)
        if (record := self._records.get(key)) is None:
            record = self._records[key] = MetadataRecord(project=project, change=change)
        return record

    def add_badge(  # pylint: disable=too-many-arguments
        self,
        project: str,
        change: int,
        sequence: int,
        *,
        name: str,
        url: str,
        state: BadgeResult,
    ) -> None:
        """Append a badge to the record for (project, change)."""
        self._record(project, change, sequence).badges.append(
            BadgeEntry(name=name, url=url, state=state)
        )

    def add_user(
        self, project: str, change: int, sequence: int, entry: UserEntry
    ) -> None:
        """Append a user's state to the record for (project, change)."""
        self._record(project, change, sequence).users.append(entry)

    def result(self) -> MetadataList:
        """Return the folded records and the cursor (0 when nothing was added)."""
        return MetadataList(
            sequence_number=self.sequence_number, items=list(self._records.values())
        )
