"""SQLAlchemy adapters for the metadata store ports.

Durable implementations of the project index, the sequence allocator and both
metadata stores on top of a relational database (SQLite or PostgreSQL). Each
adapter works on a caller-supplied Connection so that all of them share one
transaction inside a unit of work.
"""

from .badge_store import SqlAlchemyBadgeStore
from .project_index import SqlAlchemyProjectIndex
from .sequence import SqlAlchemySequenceAllocator
from .user_event_store import SqlAlchemyUserEventStore

__all__ = [
    "SqlAlchemyBadgeStore",
    "SqlAlchemyProjectIndex",
    "SqlAlchemySequenceAllocator",
    "SqlAlchemyUserEventStore",
]
