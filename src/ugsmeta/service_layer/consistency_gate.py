"""Readers/writer gate shared by the write path and the read path.

A query reads several tables with several statements. Holding the gate in
shared mode for the whole query while writers take it exclusively guarantees
that all of those statements see the same committed state.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ConsistencyGate:
    """Writer-preferring readers/writer lock.

    - Any number of readers may hold the gate at once.
    - A writer holds it alone: no readers and no other writer.
    - Once a writer is waiting, newly arriving readers wait behind it, so a
      steady stream of readers cannot starve writers.

    The gate is not re-entrant. Acquiring it again from the thread that
    already holds it deadlocks.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def shared(self) -> Iterator[None]:
        """Hold the gate as one of possibly many readers."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the gate as the only writer."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()

    # --- introspection (tests / diagnostics) ---

    @property
    def readers(self) -> int:
        """Number of readers currently holding the gate."""
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        """True while a writer holds the gate."""
        with self._cond:
            return self._writer
