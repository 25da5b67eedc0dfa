"""Fixtures for metadata store contract tests.

Every port is exercised against the in-memory adapters and the SQLAlchemy
adapters on in-memory SQLite, file SQLite and PostgreSQL. SQL backends run
inside one connection that is never committed, so each test starts clean.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import pytest

from tests.helpers.clocks import ManualMicrosClock
from ugsmeta.adapters.metadata_store.in_memory_adapters import (
    InMemoryBadgeStore,
    InMemoryProjectIndex,
    InMemorySequenceAllocator,
    InMemoryUserEventStore,
)
from ugsmeta.adapters.metadata_store.sqlalchemy_adapters import (
    SqlAlchemyBadgeStore,
    SqlAlchemyProjectIndex,
    SqlAlchemySequenceAllocator,
    SqlAlchemyUserEventStore,
)
from ugsmeta.domain.value_objects import ProjectPath
from ugsmeta.interfaces.metadata_store import BadgeStore, UserEventStore
from ugsmeta.interfaces.project_index import ProjectIndex
from ugsmeta.interfaces.sequence import SequenceAllocator

# pylint: disable=redefined-outer-name

ENGINE_FIXTURES = {
    "sqlite_memory": "sqlite_engine_memory",
    "sqlite_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


@dataclass
class Backend:
    """One backend's adapters, sharing a connection where there is one."""

    projects: ProjectIndex
    sequences: SequenceAllocator
    badges: BadgeStore
    user_events: UserEventStore
    clock: ManualMicrosClock


@pytest.fixture(params=["memory", "sqlite_memory", "sqlite_file", "postgres"])
def backend(request: pytest.FixtureRequest) -> Iterator[Backend]:
    """Fresh adapters for the requested backend.

    The allocator's clock starts at 0 so that allocations count up from 1
    until a test moves it.
    """
    clock = ManualMicrosClock()

    if request.param == "memory":
        yield Backend(
            InMemoryProjectIndex(),
            InMemorySequenceAllocator(clock=clock),
            InMemoryBadgeStore(),
            InMemoryUserEventStore(),
            clock,
        )
        return

    try:
        fixture_name = ENGINE_FIXTURES[request.param]
    except KeyError as e:
        raise ValueError(f"unknown backend: {request.param}") from e

    engine = request.getfixturevalue(fixture_name)
    with engine.connect() as conn:
        yield Backend(
            SqlAlchemyProjectIndex(conn),
            SqlAlchemySequenceAllocator(conn, clock),
            SqlAlchemyBadgeStore(conn),
            SqlAlchemyUserEventStore(conn),
            clock,
        )


@pytest.fixture
def project_id(backend: Backend) -> int:
    """Id of ``//depot/main/game/game.uproject`` in the backend."""
    return backend.projects.resolve_or_create(
        ProjectPath.parse("//depot/main/Game/Game.uproject")
    )


@pytest.fixture
def other_project_id(backend: Backend) -> int:
    """Id of a second project in the same stream."""
    return backend.projects.resolve_or_create(
        ProjectPath.parse("//depot/main/Tool/Tool.uproject")
    )
