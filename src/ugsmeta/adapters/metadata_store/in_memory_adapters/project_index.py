"""In-memory ProjectIndex implementation for testing purposes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ugsmeta.interfaces.project_index import ProjectEntry, ProjectIndex

if TYPE_CHECKING:
    from ugsmeta.domain.value_objects import ProjectPath


class InMemoryProjectIndex(ProjectIndex):
    """In-memory ProjectIndex implementation for testing purposes.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-threaded test scenarios
    """

    def __init__(self):
        self.entries: dict[tuple[str, str], int] = {}
        self._next_id = 1

    # --- lookups ---

    def resolve(self, stream: str, project: str) -> int | None:
        return self.entries.get((stream.lower(), project.lower()))

    def find(self, stream: str, project: str | None = None) -> list[ProjectEntry]:
        stream = stream.lower()
        wanted = None if project is None else project.lower()
        return sorted(
            (
                ProjectEntry(project_id, key_stream, key_project)
                for (key_stream, key_project), project_id in self.entries.items()
                if key_stream == stream and wanted in (None, key_project)
            ),
            key=lambda entry: entry.project_id,
        )

    # --- creation ---

    def resolve_or_create(self, path: ProjectPath) -> int:
        key = (path.stream, path.project)
        if key not in self.entries:
            self.entries[key] = self._next_id
            self._next_id += 1
        return self.entries[key]
