"""Service layer for UGSMETA.

Commands and their handlers form the write path; `MetadataQueries` is the read
path. Both sides coordinate through a single `ConsistencyGate` so that readers
never observe a half-applied write.
"""
