"""Python rendition of the ChangeFilter predicate used by the SQL adapters."""

from ugsmeta.interfaces.metadata_store import ChangeFilter


def matches(change_filter: ChangeFilter, change: int, sequence: int) -> bool:
    """Return True if a row with `change` and `sequence` passes the filter."""
    if change < change_filter.min_change:
        return False
    if change_filter.max_change is not None and change > change_filter.max_change:
        return False
    if (
        change_filter.since_sequence is not None
        and sequence <= change_filter.since_sequence
    ):
        return False
    return True
