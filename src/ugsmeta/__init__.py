"""UGSMETA

Metadata server core for UnrealGameSync-style clients. Build-status badges and
per-user review state are recorded under one global sequence so that clients
can poll for only what changed since their last poll.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
