"""Implementation of ProjectIndex using SQLAlchemy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError

from ugsmeta.adapters.db.dialects import DialectName, build_insert_ignore
from ugsmeta.interfaces.project_index import ProjectEntry, ProjectIndex
from ugsmeta.interfaces.storage import ProjectConflictError, StoreUnavailableError

from ..schema import projects

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

    from ugsmeta.domain.value_objects import ProjectPath

logger = logging.getLogger(__name__)


class SqlAlchemyProjectIndex(ProjectIndex):
    """ProjectIndex implementation that supports both Postgres and SQLite.

    Creation is a no-throw insert followed by an authoritative read, so the
    ``UNIQUE(stream, project)`` constraint decides races between concurrent
    creators instead of a read-then-insert check.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- lookups ---

    def resolve(self, stream: str, project: str) -> int | None:
        stmt = select(projects.c.project_id).where(
            projects.c.stream == stream.lower(),
            projects.c.project == project.lower(),
        )
        try:
            return self.connection.execute(stmt).scalar_one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    def find(self, stream: str, project: str | None = None) -> list[ProjectEntry]:
        stmt = (
            select(projects.c.project_id, projects.c.stream, projects.c.project)
            .where(projects.c.stream == stream.lower())
            .order_by(projects.c.project_id.asc())
        )
        if project is not None:
            stmt = stmt.where(projects.c.project == project.lower())

        try:
            rows = self.connection.execute(stmt).all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return [ProjectEntry(row.project_id, row.stream, row.project) for row in rows]

    # --- creation: no-throw insert + decide outcome via reads ---

    def resolve_or_create(self, path: ProjectPath) -> int:
        if (existing := self.resolve(path.stream, path.project)) is not None:
            return existing

        stmt = build_insert_ignore(
            self.dialect,
            projects,
            {"stream": path.stream, "project": path.project},
        )
        try:
            result = self.connection.execute(stmt)
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        if result.rowcount == 1:
            logger.info("Created project %s", path.qualified_name)

        # Whether we inserted or lost the race, the stored row is authoritative.
        if (project_id := self.resolve(path.stream, path.project)) is None:
            raise ProjectConflictError(
                f"insert of {path.qualified_name!r} was skipped but no row exists"
            )
        return project_id
