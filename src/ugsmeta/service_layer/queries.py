"""Read side of the service layer.

`MetadataQueries` answers client polls. Each call opens a fresh unit of work
(and so a fresh connection) and holds the consistency gate in shared mode for
its whole duration, so the several statements of one query all observe the
same committed state even while writers are queued.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ugsmeta.domain.aggregation import MetadataFolder
from ugsmeta.domain.metadata import (
    BadgeRecord,
    LatestSummary,
    MetadataList,
    UserEntry,
)
from ugsmeta.domain.value_objects import ProjectPath
from ugsmeta.interfaces.metadata_store import ChangeFilter
from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork

from .consistency_gate import ConsistencyGate

logger = logging.getLogger(__name__)


class MetadataQueries:
    """Query facade over the metadata stores.

    Args:
        uow_factory: Returns a new, unopened unit of work per call.
        gate: Gate shared with the message bus.
    """

    def __init__(
        self,
        uow_factory: Callable[[], AbstractUnitOfWork],
        gate: ConsistencyGate,
    ) -> None:
        self.uow_factory = uow_factory
        self.gate = gate

    def query_metadata(  # pylint: disable=too-many-arguments
        self,
        stream: str,
        project: str | None = None,
        min_change: int = 0,
        max_change: int | None = None,
        since_sequence: int | None = None,
    ) -> MetadataList:
        """Return aggregate records for a stream, optionally one project.

        Args:
            stream: Stream such as ``//depot/main`` (case-insensitive).
            project: Project within the stream; all projects when None.
            min_change: Lowest changelist included.
            max_change: Highest changelist included, unbounded when None.
            since_sequence: Only rows written after this cursor.

        Returns:
            MetadataList: Records plus the cursor for the next poll.

        Raises:
            CorruptRecordError: If a stored code cannot be decoded.
            StoreUnavailableError: If the store cannot be reached.
        """
        change_filter = ChangeFilter(
            min_change=min_change,
            max_change=max_change,
            since_sequence=since_sequence,
        )
        folder = MetadataFolder()
        badge_count = event_count = 0

        with self.gate.shared(), self.uow_factory() as uow:
            for entry in uow.projects.find(stream, project):
                name = entry.qualified_name

                for badge in uow.badges.fetch(entry.project_id, change_filter):
                    badge_count += 1
                    folder.add_badge(
                        name,
                        badge.change,
                        badge.sequence,
                        name=badge.build_type,
                        url=badge.url,
                        state=badge.result,
                    )

                for event in uow.user_events.fetch(entry.project_id, change_filter):
                    event_count += 1
                    folder.add_user(
                        name,
                        event.change,
                        event.sequence,
                        UserEntry(
                            user=event.user,
                            sync_time=event.state.synced_at,
                            vote=event.state.vote,
                            comment=event.state.comment,
                            investigating=event.state.investigating,
                            starred=event.state.starred,
                        ),
                    )

        result = folder.result()
        logger.debug(
            "Metadata query stream=%s project=%s changes=[%d, %s] since=%s: "
            "%d badges, %d user events, %d records, sequence=%d",
            stream,
            project,
            min_change,
            max_change,
            since_sequence,
            badge_count,
            event_count,
            len(result.items),
            result.sequence_number,
        )
        return result

    def latest(self, path: str) -> LatestSummary:
        """Return the newest badge id of a project (0 when it has none).

        Raises:
            InvalidProjectPath: If `path` cannot be parsed.
        """
        project_path = ProjectPath.parse(path)
        with self.gate.shared(), self.uow_factory() as uow:
            project_id = uow.projects.resolve(project_path.stream, project_path.project)
            last = None if project_id is None else uow.badges.latest_sequence(project_id)
        return LatestSummary(last_build_id=last or 0)

    def list_badges(self, path: str, since_sequence: int = 0) -> list[BadgeRecord]:
        """Return a project's badges written after `since_sequence`, oldest first.

        Raises:
            InvalidProjectPath: If `path` cannot be parsed.
        """
        project_path = ProjectPath.parse(path)
        change_filter = ChangeFilter(since_sequence=since_sequence)
        with self.gate.shared(), self.uow_factory() as uow:
            project_id = uow.projects.resolve(project_path.stream, project_path.project)
            if project_id is None:
                return []
            rows = uow.badges.fetch(project_id, change_filter)

        return [
            BadgeRecord(
                id=row.sequence,
                change_number=row.change,
                added_at=row.added_at,
                build_type=row.build_type,
                result=row.result,
                url=row.url,
                stream=project_path.stream,
                project=project_path.project,
            )
            for row in rows
        ]
