"""Client-facing metadata records.

These are the shapes returned to polling clients. `to_wire()` renders each
record as a JSON-ready dict with the PascalCase keys that UnrealGameSync
expects; enum fields are rendered as their stable integer codes. Timestamps
are Unix seconds, except in the legacy badge listing, which sends ISO-8601 UTC
strings ending in ``Z``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .value_objects import BadgeResult, UserVote


def _unix_seconds(value: datetime | None) -> int | None:
    return None if value is None else int(value.timestamp())


def _iso_utc(value: datetime) -> str:
    return value.astimezone(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


@dataclass(frozen=True, slots=True)
class BadgeEntry:
    """One badge inside an aggregate record."""

    name: str
    url: str
    state: BadgeResult

    def to_wire(self) -> dict[str, Any]:
        return {"Name": self.name, "Url": self.url, "State": int(self.state)}


@dataclass(frozen=True, slots=True)
class UserEntry:
    """One user's merged review state inside an aggregate record."""

    # pylint: disable=too-many-instance-attributes

    user: str
    sync_time: datetime | None = None
    vote: UserVote | None = None
    comment: str | None = None
    investigating: bool | None = None
    starred: bool | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "User": self.user,
            "SyncTime": _unix_seconds(self.sync_time),
            "Vote": None if self.vote is None else int(self.vote),
            "Comment": self.comment or "",
            "Investigating": self.investigating,
            "Starred": self.starred,
        }


@dataclass(slots=True)
class MetadataRecord:
    """All badges and user events for one (project, changelist).

    Sub-lists are filled in ascending sequence order of the underlying writes.
    """

    project: str
    change: int
    users: list[UserEntry] = field(default_factory=list)
    badges: list[BadgeEntry] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "Change": self.change,
            "Project": self.project,
            "Users": [user.to_wire() for user in self.users],
            "Badges": [badge.to_wire() for badge in self.badges],
        }


@dataclass(frozen=True, slots=True)
class MetadataList:
    """Response of a delta query.

    `sequence_number` is the cursor to send back as ``since_sequence`` on the
    next poll. It is 0 when nothing matched.
    """

    sequence_number: int
    items: list[MetadataRecord]

    def to_wire(self) -> dict[str, Any]:
        return {
            "SequenceNumber": self.sequence_number,
            "Items": [item.to_wire() for item in self.items],
        }


@dataclass(frozen=True, slots=True)
class LatestSummary:
    """Newest ids known for a project (legacy polling call)."""

    last_build_id: int = 0
    last_event_id: int = 0
    last_comment_id: int = 0
    version: int | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "Version": self.version,
            "LastEventId": self.last_event_id,
            "LastCommentId": self.last_comment_id,
            "LastBuildId": self.last_build_id,
        }


@dataclass(frozen=True, slots=True)
class BadgeRecord:
    """A single badge as returned by the legacy per-project badge listing."""

    # pylint: disable=too-many-instance-attributes

    id: int
    change_number: int
    added_at: datetime
    build_type: str
    result: BadgeResult
    url: str
    stream: str
    project: str

    def to_wire(self) -> dict[str, Any]:
        return {
            "Id": self.id,
            "ChangeNumber": self.change_number,
            "AddedAt": _iso_utc(self.added_at),
            "BuildType": self.build_type,
            "Result": int(self.result),
            "Url": self.url,
            "Stream": self.stream,
            "Project": self.project,
        }
