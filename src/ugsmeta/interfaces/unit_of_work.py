"""Unit of Work interface for UGSMETA.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the project index, the sequence allocator and both metadata stores,
with abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .metadata_store import BadgeStore, UserEventStore
from .project_index import ProjectIndex
from .sequence import SequenceAllocator


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    projects: ProjectIndex
    sequences: SequenceAllocator
    badges: BadgeStore
    user_events: UserEventStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
