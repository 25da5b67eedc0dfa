"""Per-user review state for one (project, changelist) pair.

A user event is cumulative: every submission is merged into the stored state
rather than replacing it. Each optional field follows "set if provided, else
keep". ``synced=True`` stamps the sync time; there is no way to clear it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from .value_objects import UserVote


@dataclass(frozen=True, slots=True)
class UserEventState:
    """The mergeable fields of a user event."""

    synced_at: datetime | None = None
    vote: UserVote | None = None
    investigating: bool | None = None
    starred: bool | None = None
    comment: str | None = None

    def merge(  # pylint: disable=too-many-arguments
        self,
        *,
        now: datetime,
        synced: bool | None = None,
        vote: UserVote | None = None,
        investigating: bool | None = None,
        starred: bool | None = None,
        comment: str | None = None,
    ) -> UserEventState:
        """Return a new state with the provided fields applied.

        Args:
            now: Timestamp recorded as the sync time when `synced` is True.
            synced: True to stamp the sync time; False or None keeps it.
            vote: New vote, or None to keep the current one.
            investigating: New flag, or None to keep the current one.
            starred: New flag, or None to keep the current one.
            comment: New comment, or None to keep the current one.

        Returns:
            The merged state. `self` is left untouched.
        """
        return replace(
            self,
            synced_at=now if synced else self.synced_at,
            vote=self.vote if vote is None else vote,
            investigating=(
                self.investigating if investigating is None else investigating
            ),
            starred=self.starred if starred is None else starred,
            comment=self.comment if comment is None else comment,
        )
