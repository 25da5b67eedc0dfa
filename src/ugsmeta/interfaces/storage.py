"""Storage error hierarchy shared by every metadata adapter.

Adapters translate driver exceptions into these so that the service layer and
entrypoints can react without knowing which backend is in use.
"""


class StorageError(Exception):
    """Base class for backing-store failures."""


class StoreUnavailableError(StorageError):
    """Operational/timeout/connection errors reported by the driver."""


class RecordConflictError(StorageError):
    """A write violated a storage-level constraint."""


class CorruptRecordError(StorageError):
    """A stored row could not be decoded (e.g. an out-of-range enum code).

    Attributes:
        table (str): The table the row came from.
        row_id (int): Identifier of the offending row.
        detail (str): What could not be decoded.
    """

    def __init__(self, table: str, row_id: int, detail: str) -> None:
        super().__init__(f"Corrupt row {row_id} in {table}: {detail}")
        self.table = table
        self.row_id = row_id
        self.detail = detail


class ProjectConflictError(StorageError):
    """A project insert was skipped but no existing row could be read back."""
