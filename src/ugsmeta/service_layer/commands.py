"""Module defining Commands.

Commands check field types on construction so that a malformed submission
is rejected before the gate is taken or a connection is opened. Integer
result/vote codes are decoded into their enums here. Beyond that, values are
stored as given, so an empty URL or a negative changelist is accepted. The
project path itself is parsed by the handlers.
"""

from dataclasses import dataclass

from ugsmeta.domain.errors import InvalidSubmission, UnknownCodeError
from ugsmeta.domain.value_objects import BadgeResult, UserVote

# pylint: disable=too-many-instance-attributes


def _require_change(change: object) -> None:
    if isinstance(change, bool) or not isinstance(change, int):
        raise InvalidSubmission("change", "must be an integer")


def _require_text(field: str, value: object) -> None:
    if not isinstance(value, str):
        raise InvalidSubmission(field, "must be a string")


def _require_optional_flag(field: str, value: object) -> None:
    if value is not None and not isinstance(value, bool):
        raise InvalidSubmission(field, "must be a boolean")


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


@dataclass(frozen=True)
class SubmitBadge(Command):
    """Record the status of one build of one changelist."""

    project: str
    change: int
    build_type: str
    result: BadgeResult
    url: str

    def __post_init__(self) -> None:
        _require_text("project", self.project)
        _require_change(self.change)
        _require_text("build_type", self.build_type)
        _require_text("url", self.url)
        try:
            object.__setattr__(self, "result", BadgeResult.from_code(self.result))
        except UnknownCodeError as e:
            raise InvalidSubmission("result", str(e)) from e


@dataclass(frozen=True)
class SubmitUserEvent(Command):
    """Merge one user's review state for a changelist.

    Every optional field left as None keeps the stored value.
    """

    project: str
    change: int
    user: str
    synced: bool | None = None
    vote: UserVote | None = None
    investigating: bool | None = None
    starred: bool | None = None
    comment: str | None = None

    def __post_init__(self) -> None:
        _require_text("project", self.project)
        _require_change(self.change)
        _require_text("user", self.user)
        _require_optional_flag("synced", self.synced)
        _require_optional_flag("investigating", self.investigating)
        _require_optional_flag("starred", self.starred)
        if self.comment is not None and not isinstance(self.comment, str):
            raise InvalidSubmission("comment", "must be a string")
        if self.vote is not None:
            try:
                object.__setattr__(self, "vote", UserVote.from_code(self.vote))
            except UnknownCodeError as e:
                raise InvalidSubmission("vote", str(e)) from e
