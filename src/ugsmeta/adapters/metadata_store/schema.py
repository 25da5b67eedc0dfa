"""Metadata store schema.

Defines the tables behind the project index, the sequence allocator and both
metadata stores. All tables attach to the shared naming-convention metadata.

Constraints (enforced here):

| Constraint                                         | Purpose                              |
|----------------------------------------------------|--------------------------------------|
| UNIQUE(projects.stream, projects.project)          | one id per (stream, project)         |
| UNIQUE(badges.sequence)                            | one global order                     |
| UNIQUE(user_events.sequence)                       | one global order                     |
| UNIQUE(user_events.project_id, user_name, change)  | one mutable row per user & change    |
| FK badges/user_events.project_id → projects        | no orphaned rows                     |

Result and vote codes are deliberately *not* range-checked by the database so
that rows written by older servers can still be read; decoding happens in the
adapters, which raise `CorruptRecordError` on unknown codes.

Append-only enforcement for ``badges`` is applied in migrations.
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Identity,
    Index,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)

from ugsmeta.adapters.db.metadata import metadata
from ugsmeta.adapters.db.sa_types import BIGINT_PK, UTCDateTime

__all__ = ["badges", "projects", "sequence_counter", "user_events"]

GLOBAL_SEQUENCE_NAME = "global"

projects = Table(
    "projects",
    metadata,
    Column(
        "project_id",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Durable project id, assigned on first use.",
    ),
    Column(
        "stream",
        String(512),
        nullable=False,
        comment="Lowercased stream, e.g. //depot/main.",
    ),
    Column(
        "project",
        String(1024),
        nullable=False,
        comment="Lowercased project path within the stream.",
    ),
    UniqueConstraint("stream", "project"),
    comment="(stream, project) identities. Never updated or deleted.",
)

badges = Table(
    "badges",
    metadata,
    Column("id", BIGINT_PK, Identity(start=1), primary_key=True),
    Column(
        "sequence",
        BigInteger,
        nullable=False,
        unique=True,
        comment="Global sequence number assigned when the badge was accepted.",
    ),
    Column("change_number", BigInteger, nullable=False),
    Column("added_at", UTCDateTime(), nullable=False),
    Column("build_type", String(256), nullable=False),
    Column(
        "result",
        SmallInteger,
        nullable=False,
        comment="BadgeResult wire code (0-4).",
    ),
    Column("url", Text, nullable=False),
    Column(
        "project_id",
        BIGINT_PK,
        ForeignKey("projects.project_id"),
        nullable=False,
    ),
    Index(None, "project_id", "sequence", "change_number"),
    comment="Append-only build-status reports.",
)

user_events = Table(
    "user_events",
    metadata,
    Column("id", BIGINT_PK, Identity(start=1), primary_key=True),
    Column(
        "project_id",
        BIGINT_PK,
        ForeignKey("projects.project_id"),
        nullable=False,
    ),
    Column("change_number", BigInteger, nullable=False),
    Column("user_name", String(256), nullable=False),
    Column(
        "sequence",
        BigInteger,
        nullable=False,
        unique=True,
        comment="Global sequence number of the latest mutation.",
    ),
    Column("updated_at", UTCDateTime(), nullable=False),
    Column("synced_at", UTCDateTime(), nullable=True),
    Column(
        "vote",
        SmallInteger,
        nullable=True,
        comment="UserVote wire code (0-4).",
    ),
    Column("investigating", Boolean, nullable=True),
    Column("starred", Boolean, nullable=True),
    Column("comment", Text, nullable=True),
    UniqueConstraint("project_id", "user_name", "change_number"),
    Index(None, "project_id", "sequence", "change_number"),
    comment="Cumulative per-user review state, one row per (project, user, change).",
)

sequence_counter = Table(
    "sequence_counter",
    metadata,
    Column("name", String(32), primary_key=True),
    Column(
        "value",
        BigInteger,
        nullable=False,
        server_default="0",
        comment="Last allocated sequence number.",
    ),
    comment="Restart-safe state of the global sequence allocator.",
)
