"""Value objects shared across UGSMETA.

The integer codes of `BadgeResult` and `UserVote` are part of the wire format
understood by older clients. Members must never be reordered or renumbered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Self

from .errors import InvalidProjectPath, UnknownCodeError

PATH_PREFIX = "//"


class _WireEnum(IntEnum):
    """IntEnum with strict decoding from stored or submitted codes."""

    @classmethod
    def from_code(cls, code: object) -> Self:
        """Decode an integer code without coercion.

        Args:
            code: The raw code (from a client or from storage).

        Returns:
            The matching enum member.

        Raises:
            UnknownCodeError: If `code` is not an int or is out of range.
        """
        if isinstance(code, bool) or not isinstance(code, int):
            raise UnknownCodeError(cls.__name__, code)
        try:
            return cls(code)
        except ValueError as e:
            raise UnknownCodeError(cls.__name__, code) from e


class BadgeResult(_WireEnum):
    """Outcome reported for one build of one changelist."""

    STARTING = 0
    FAILURE = 1
    WARNING = 2
    SUCCESS = 3
    SKIPPED = 4


class UserVote(_WireEnum):
    """A user's verdict on a changelist."""

    NONE = 0
    COMPILE_SUCCESS = 1
    COMPILE_FAILURE = 2
    GOOD = 3
    BAD = 4


@dataclass(frozen=True, slots=True)
class ProjectPath:
    """Normalized (stream, project) identity parsed from a depot path.

    ``//UE5/Main/Samples/Lyra/Lyra.uproject`` parses to
    ``stream="//ue5/main"`` and ``project="samples/lyra/lyra.uproject"``.
    Original casing is not kept.
    """

    stream: str
    project: str

    @property
    def qualified_name(self) -> str:
        """The full lowercased path, ``<stream>/<project>``."""
        return f"{self.stream}/{self.project}"

    @classmethod
    def parse(cls, path: str) -> ProjectPath:
        """Split a depot path into its stream and project halves.

        The stream is ``//<domain>/<stream-name>``, i.e. everything before the
        second ``/`` following the leading ``//``. The remainder is the project.

        Args:
            path: A path such as ``//depot/main/Game/Game.uproject``.

        Returns:
            The lowercased `ProjectPath`.

        Raises:
            InvalidProjectPath: If the prefix is missing, the stream cannot be
                delimited, or either half is empty.
        """
        if not isinstance(path, str) or not path.startswith(PATH_PREFIX):
            raise InvalidProjectPath(str(path), f"must start with {PATH_PREFIX!r}")

        start = len(PATH_PREFIX)
        domain_end = path.find("/", start)
        if domain_end == -1:
            raise InvalidProjectPath(path, "missing stream name")
        stream_end = path.find("/", domain_end + 1)
        if stream_end == -1:
            raise InvalidProjectPath(path, "missing project after stream")

        if domain_end == start or stream_end == domain_end + 1:
            raise InvalidProjectPath(path, "empty path segment in stream")

        stream, project = path[:stream_end], path[stream_end + 1 :]
        if not project:
            raise InvalidProjectPath(path, "project name is empty")

        return cls(stream=stream.lower(), project=project.lower())
