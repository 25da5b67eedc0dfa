"""In-memory metadata store adapters.

Ephemeral implementations of the project index, sequence allocator and both
metadata stores. They are suitable for unit tests and prototyping: nothing is
durable and all data is lost when the instances are discarded.
"""

from .badge_store import InMemoryBadgeStore
from .project_index import InMemoryProjectIndex
from .sequence import InMemorySequenceAllocator
from .user_event_store import InMemoryUserEventStore

__all__ = [
    "InMemoryBadgeStore",
    "InMemoryProjectIndex",
    "InMemorySequenceAllocator",
    "InMemoryUserEventStore",
]
