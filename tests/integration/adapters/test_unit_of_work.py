"""Integration tests for SqlAlchemyUnitOfWork.

Covers commit, rollback on exit without commit, rollback after a failure
mid-write, and restart safety of the sequence counter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import func, select

from tests.helpers.clocks import ManualMicrosClock
from ugsmeta.adapters.db.engine import make_engine
from ugsmeta.adapters.metadata_store.schema import badges, projects
from ugsmeta.adapters.unit_of_work import SqlAlchemyUnitOfWork
from ugsmeta.domain.value_objects import ProjectPath
from ugsmeta.interfaces.metadata_store import ChangeFilter
from ugsmeta.interfaces.storage import RecordConflictError

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=magic-value-comparison

ENGINES = ["sqlite_engine_memory", "sqlite_engine_file", "postgres_engine"]
GAME = ProjectPath.parse("//depot/main/Game/Game.uproject")


def _count(engine: Engine, table) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_commit_persists_all_writes(engine: Engine, make_badge_row):
    uow = SqlAlchemyUnitOfWork(engine, clock=ManualMicrosClock(1_000))
    with uow:
        project_id = uow.projects.resolve_or_create(GAME)
        uow.badges.append(
            make_badge_row(project_id=project_id, sequence=uow.sequences.allocate())
        )
        uow.commit()

    with uow:
        (row,) = uow.badges.fetch(project_id, ChangeFilter())
        assert row.sequence == 1_000
        assert uow.sequences.current() == 1_000


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_exit_without_commit_rolls_back(engine: Engine, make_badge_row):
    uow = SqlAlchemyUnitOfWork(engine, clock=ManualMicrosClock(1_000))
    with uow:
        before = uow.sequences.current()

    with uow:
        project_id = uow.projects.resolve_or_create(GAME)
        uow.badges.append(
            make_badge_row(project_id=project_id, sequence=uow.sequences.allocate())
        )

    assert _count(engine, projects) == 0
    assert _count(engine, badges) == 0
    with uow:
        assert uow.sequences.current() == before


@pytest.mark.parametrize("engine", ENGINES, indirect=True)
def test_failed_write_consumes_no_sequence(engine: Engine, make_badge_row):
    uow = SqlAlchemyUnitOfWork(engine, clock=ManualMicrosClock(1_000))
    with uow:
        project_id = uow.projects.resolve_or_create(GAME)
        uow.badges.append(make_badge_row(project_id=project_id, sequence=5_000))
        uow.commit()

    with pytest.raises(RecordConflictError), uow:
        uow.sequences.allocate()
        uow.badges.append(make_badge_row(project_id=project_id, sequence=5_000))
        uow.commit()

    with uow:
        assert uow.sequences.current() == 0
        assert [row.sequence for row in uow.badges.fetch(project_id, ChangeFilter())] == [
            5_000
        ]


def test_sequence_survives_restart_with_clock_behind(sqlite_url_file: str):
    """A new engine continues above the stored counter even if its clock lags."""
    first = make_engine(sqlite_url_file)
    uow = SqlAlchemyUnitOfWork(first, clock=ManualMicrosClock(9_000_000))
    with uow:
        assert uow.sequences.allocate() == 9_000_000
        uow.commit()
    first.dispose()

    second = make_engine(sqlite_url_file)
    uow = SqlAlchemyUnitOfWork(second, clock=ManualMicrosClock(1_000))
    try:
        with uow:
            assert uow.sequences.allocate() == 9_000_001
            uow.commit()
    finally:
        second.dispose()
