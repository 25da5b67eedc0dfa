"""Interfaces for mapping (stream, project) identities to project ids.

Defines the `ProjectIndex` abstraction used to bind a normalized project path
to a durable integer id. Creation is idempotent and safe under concurrent
callers: the storage layer arbitrates races through a uniqueness constraint.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ugsmeta.domain.value_objects import ProjectPath


@dataclass(frozen=True, slots=True)
class ProjectEntry:
    """Index row describing one project."""

    project_id: int
    stream: str
    project: str

    @property
    def qualified_name(self) -> str:
        """The full lowercased path, ``<stream>/<project>``."""
        return f"{self.stream}/{self.project}"


class ProjectIndex(abc.ABC):
    """(stream, project) → project id lookup with idempotent creation."""

    @abc.abstractmethod
    def resolve_or_create(self, path: ProjectPath) -> int:
        """Return the id bound to `path`, creating the project if needed.

        Concurrent callers creating the same identity all receive the same id
        and exactly one row is stored.

        Args:
            path: The normalized project identity.

        Returns:
            int: The project id.
        """

    @abc.abstractmethod
    def resolve(self, stream: str, project: str) -> int | None:
        """Look up a project id without creating anything.

        Inputs are lowercased before lookup.

        Args:
            stream: Stream portion, e.g. ``//depot/main``.
            project: Project portion, e.g. ``game/game.uproject``.

        Returns:
            int | None: The project id, or ``None`` if unknown.
        """

    @abc.abstractmethod
    def find(self, stream: str, project: str | None = None) -> list[ProjectEntry]:
        """List the projects of a stream, optionally narrowed to one project.

        Inputs are lowercased before lookup.

        Args:
            stream: Stream portion of the identity.
            project: If given, only this project is returned.

        Returns:
            list[ProjectEntry]: Matching projects ordered by id (may be empty).
        """
