"""Interface for the global sequence allocator."""

import abc


class SequenceAllocator(abc.ABC):
    """Contract for a strictly increasing, restart-safe sequence source.

    One allocator domain is shared by badges and user events. Values are
    comparable as signed 64-bit integers and never repeat, even across process
    restarts or a wall clock that steps backwards.
    """

    @abc.abstractmethod
    def allocate(self) -> int:
        """Reserve and return the next sequence number.

        The allocation takes part in the caller's transaction: if the write it
        belongs to is rolled back, so is the allocation.
        """

    @abc.abstractmethod
    def current(self) -> int:
        """Return the last allocated sequence number (0 if none)."""
