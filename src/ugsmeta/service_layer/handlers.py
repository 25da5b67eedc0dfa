"""Service layer handlers (the write path).

Each handler runs one unit of work: resolve (or create) the project, allocate
a sequence number, write the row and commit. Anything raised before the commit
leaves the unit of work to roll back, so a failed submission consumes no
sequence number and leaves no partial row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ugsmeta.domain.utils import utc_now
from ugsmeta.domain.value_objects import ProjectPath
from ugsmeta.interfaces.metadata_store import BadgeRow, UserEventRow
from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork

from . import commands

logger = logging.getLogger(__name__)


def submit_badge(
    cmd: commands.SubmitBadge,
    uow: AbstractUnitOfWork,
    clock: Callable[[], datetime] = utc_now,
) -> None:
    """Append a badge for (project, change)."""

    path = ProjectPath.parse(cmd.project)

    with uow:
        project_id = uow.projects.resolve_or_create(path)
        sequence = uow.sequences.allocate()
        uow.badges.append(
            BadgeRow(
                sequence=sequence,
                project_id=project_id,
                change=cmd.change,
                added_at=clock(),
                build_type=cmd.build_type,
                result=cmd.result,
                url=cmd.url,
            )
        )
        uow.commit()

    logger.debug(
        "Badge %r (%s) for %s@%d stored: project_id=%d sequence=%d",
        cmd.build_type,
        cmd.result.name,
        path.qualified_name,
        cmd.change,
        project_id,
        sequence,
    )


def submit_user_event(
    cmd: commands.SubmitUserEvent,
    uow: AbstractUnitOfWork,
    clock: Callable[[], datetime] = utc_now,
) -> None:
    """Merge a user's review state for (project, change) into the stored row."""

    path = ProjectPath.parse(cmd.project)
    now = clock()

    with uow:
        project_id = uow.projects.resolve_or_create(path)
        existing = uow.user_events.get(project_id, cmd.user, cmd.change)

        base = (
            existing
            if existing is not None
            else UserEventRow(
                project_id=project_id,
                change=cmd.change,
                user=cmd.user,
                sequence=0,
                updated_at=now,
            )
        )
        state = base.state.merge(
            now=now,
            synced=cmd.synced,
            vote=cmd.vote,
            investigating=cmd.investigating,
            starred=cmd.starred,
            comment=cmd.comment,
        )

        sequence = uow.sequences.allocate()
        saved = uow.user_events.save(
            UserEventRow(
                id=base.id,
                project_id=project_id,
                change=cmd.change,
                user=cmd.user,
                sequence=sequence,
                updated_at=now,
                state=state,
            )
        )
        uow.commit()

    logger.debug(
        "User event for %r on %s@%d %s: id=%s sequence=%d",
        cmd.user,
        path.qualified_name,
        cmd.change,
        "created" if existing is None else "updated",
        saved.id,
        sequence,
    )


COMMAND_HANDLERS: dict[type[commands.Command], Callable[..., None]] = {
    commands.SubmitBadge: submit_badge,
    commands.SubmitUserEvent: submit_user_event,
}
