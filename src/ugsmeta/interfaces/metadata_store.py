"""Metadata store interfaces for UGSMETA.

This module defines:
- The persisted row DTOs `BadgeRow` and `UserEventRow`.
- `ChangeFilter`, the predicate shared by every delta fetch.
- The `BadgeStore` (append-only) and `UserEventStore` (mutable by key) ports.

Contract overview
-----------------
Writes:
- `BadgeStore.append` inserts one immutable badge row. Rows are never updated
  or deleted.
- `UserEventStore.save` inserts a new row (``id is None``) or replaces the
  mutable fields of an existing row (same id, new sequence/timestamp/state).
- Adapters raise `StoreUnavailableError` for driver failures and
  `RecordConflictError` for constraint violations.

Reads:
- `fetch(project_id, change_filter)` returns rows with
  ``change >= min_change``, ``change <= max_change`` (if set) and
  ``sequence > since_sequence`` (if set), ascending by ``sequence``.
- A stored result/vote code outside the enum range raises
  `CorruptRecordError` for the whole fetch; rows are never silently dropped
  or coerced.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ugsmeta.domain.user_event import UserEventState

if TYPE_CHECKING:
    from datetime import datetime

    from ugsmeta.domain.value_objects import BadgeResult


@dataclass(frozen=True, slots=True)
class ChangeFilter:
    """Changelist/sequence window applied to a delta fetch.

    Any window is valid. An inverted one (``max_change < min_change``) simply
    matches no rows.
    """

    min_change: int = 0
    max_change: int | None = None
    since_sequence: int | None = None


@dataclass(frozen=True, slots=True)
class BadgeRow:
    """One persisted build-status report."""

    # pylint: disable=too-many-instance-attributes

    sequence: int
    project_id: int
    change: int
    added_at: datetime
    build_type: str
    result: BadgeResult
    url: str


@dataclass(frozen=True, slots=True)
class UserEventRow:
    """One user's persisted review state for a (project, changelist).

    `id` is None before the first save and assigned by the store.
    """

    # pylint: disable=too-many-instance-attributes

    project_id: int
    change: int
    user: str
    sequence: int
    updated_at: datetime
    state: UserEventState = field(default_factory=UserEventState)
    id: int | None = None


class BadgeStore(abc.ABC):
    """Append-only storage of badges."""

    @abc.abstractmethod
    def append(self, badge: BadgeRow) -> None:
        """Persist one badge row.

        Raises:
            StoreUnavailableError: For operational/connection errors.
            RecordConflictError: If a storage constraint rejects the row.
        """

    @abc.abstractmethod
    def fetch(self, project_id: int, change_filter: ChangeFilter) -> list[BadgeRow]:
        """Return the badges of one project matching `change_filter`.

        Returns:
            list[BadgeRow]: Rows ascending by sequence (may be empty).

        Raises:
            CorruptRecordError: If a stored result code cannot be decoded.
            StoreUnavailableError: For operational/connection errors.
        """

    @abc.abstractmethod
    def latest_sequence(self, project_id: int) -> int | None:
        """Return the highest badge sequence of a project, or None."""


class UserEventStore(abc.ABC):
    """Storage of user events, unique per (project, user, changelist)."""

    @abc.abstractmethod
    def get(self, project_id: int, user: str, change: int) -> UserEventRow | None:
        """Return the stored row for the key, or None if there is none yet.

        Raises:
            CorruptRecordError: If the stored vote code cannot be decoded.
        """

    @abc.abstractmethod
    def save(self, event: UserEventRow) -> UserEventRow:
        """Insert (``event.id is None``) or update (same id) a user event.

        Returns:
            UserEventRow: The persisted row, with `id` assigned.

        Raises:
            RecordConflictError: On insert, if the key already exists.
            StoreUnavailableError: For operational/connection errors.
        """

    @abc.abstractmethod
    def fetch(
        self, project_id: int, change_filter: ChangeFilter
    ) -> list[UserEventRow]:
        """Return the user events of one project matching `change_filter`.

        Returns:
            list[UserEventRow]: Rows ascending by sequence (may be empty).

        Raises:
            CorruptRecordError: If a stored vote code cannot be decoded.
            StoreUnavailableError: For operational/connection errors.
        """
