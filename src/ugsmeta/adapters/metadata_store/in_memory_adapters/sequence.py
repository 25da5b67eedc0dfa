"""In-memory SequenceAllocator using the same hybrid-timestamp rule as the
durable allocator."""

from collections.abc import Callable

from ugsmeta.domain.utils import unix_micros
from ugsmeta.interfaces.sequence import SequenceAllocator


class InMemorySequenceAllocator(SequenceAllocator):
    """Non-durable allocator; `start` plays the role of the stored counter."""

    def __init__(self, clock: Callable[[], int] = unix_micros, start: int = 0):
        self._clock = clock
        self._last = start

    def allocate(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last

    def current(self) -> int:
        return self._last
