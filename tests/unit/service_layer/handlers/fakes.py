"""Fake implementations for testing service layer handlers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from tests.helpers.clocks import SteppingClock
from ugsmeta.adapters.metadata_store.in_memory_adapters import (
    InMemoryBadgeStore,
    InMemoryProjectIndex,
    InMemorySequenceAllocator,
    InMemoryUserEventStore,
)
from ugsmeta.bootstrap.bootstrap import build_message_bus
from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork
from ugsmeta.service_layer.handlers import COMMAND_HANDLERS
from ugsmeta.service_layer.messagebus import MessageBus
from ugsmeta.service_layer.queries import MetadataQueries


class FakeUoW(AbstractUnitOfWork):
    """A fake unit of work over in-memory adapters.

    Writes are not undone on rollback; tests check `committed` instead.
    """

    def __init__(self, micros_clock: Callable[[], int] | None = None):
        self.projects = InMemoryProjectIndex()
        self.sequences = (
            InMemorySequenceAllocator()
            if micros_clock is None
            else InMemorySequenceAllocator(clock=micros_clock)
        )
        self.badges = InMemoryBadgeStore()
        self.user_events = InMemoryUserEventStore()
        self.committed = False
        self.rollbacks = 0

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rollbacks += 1


def bootstrap_test_bus(
    clock: Callable[[], datetime] | None = None,
    micros_clock: Callable[[], int] | None = None,
) -> MessageBus:
    """Bootstrap a message bus over a FakeUoW for testing purposes."""
    uow = FakeUoW(micros_clock)
    return build_message_bus(
        uow=uow,
        command_handlers=COMMAND_HANDLERS,
        extra_dependencies={"clock": clock or SteppingClock()},
    )


def queries_for(bus: MessageBus) -> MetadataQueries:
    """Query facade reading the same FakeUoW and sharing the bus gate."""
    return MetadataQueries(lambda: bus.uow, bus.gate)
