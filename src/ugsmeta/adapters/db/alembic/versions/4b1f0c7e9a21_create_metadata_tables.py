"""Create metadata tables

Revision ID: 4b1f0c7e9a21
Revises:
Create Date: 2026-09-28

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from ugsmeta.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# deal with alembic stuff
# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "4b1f0c7e9a21"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    # The migration context also knows the dialect in offline (--sql) mode.
    dialect = op.get_context().dialect.name

    op.create_table(
        "projects",
        sa.Column(
            "project_id",
            BIGINT_PK,
            sa.Identity(start=1),
            nullable=False,
            comment="Durable project id, assigned on first use.",
        ),
        sa.Column(
            "stream",
            sa.String(length=512),
            nullable=False,
            comment="Lowercased stream, e.g. //depot/main.",
        ),
        sa.Column(
            "project",
            sa.String(length=1024),
            nullable=False,
            comment="Lowercased project path within the stream.",
        ),
        sa.PrimaryKeyConstraint("project_id", name=op.f("pk_projects")),
        sa.UniqueConstraint(
            "stream", "project", name=op.f("uq_projects_stream_project")
        ),
        comment="(stream, project) identities. Never updated or deleted.",
    )

    op.create_table(
        "badges",
        sa.Column("id", BIGINT_PK, sa.Identity(start=1), nullable=False),
        sa.Column(
            "sequence",
            sa.BigInteger(),
            nullable=False,
            comment="Global sequence number assigned when the badge was accepted.",
        ),
        sa.Column("change_number", sa.BigInteger(), nullable=False),
        sa.Column("added_at", UTCDateTime(), nullable=False),
        sa.Column("build_type", sa.String(length=256), nullable=False),
        sa.Column(
            "result",
            sa.SmallInteger(),
            nullable=False,
            comment="BadgeResult wire code (0-4).",
        ),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("project_id", BIGINT_PK, nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.project_id"],
            name=op.f("fk_badges_project_id_projects"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_badges")),
        sa.UniqueConstraint("sequence", name=op.f("uq_badges_sequence")),
        comment="Append-only build-status reports.",
    )
    op.create_index(
        op.f("ix_badges_project_id_sequence_change_number"),
        "badges",
        ["project_id", "sequence", "change_number"],
        unique=False,
    )

    op.create_table(
        "user_events",
        sa.Column("id", BIGINT_PK, sa.Identity(start=1), nullable=False),
        sa.Column("project_id", BIGINT_PK, nullable=False),
        sa.Column("change_number", sa.BigInteger(), nullable=False),
        sa.Column("user_name", sa.String(length=256), nullable=False),
        sa.Column(
            "sequence",
            sa.BigInteger(),
            nullable=False,
            comment="Global sequence number of the latest mutation.",
        ),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.Column("synced_at", UTCDateTime(), nullable=True),
        sa.Column(
            "vote",
            sa.SmallInteger(),
            nullable=True,
            comment="UserVote wire code (0-4).",
        ),
        sa.Column("investigating", sa.Boolean(), nullable=True),
        sa.Column("starred", sa.Boolean(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.project_id"],
            name=op.f("fk_user_events_project_id_projects"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_user_events")),
        sa.UniqueConstraint("sequence", name=op.f("uq_user_events_sequence")),
        sa.UniqueConstraint(
            "project_id",
            "user_name",
            "change_number",
            name=op.f("uq_user_events_project_id_user_name_change_number"),
        ),
        comment="Cumulative per-user review state, one row per (project, user, change).",
    )
    op.create_index(
        op.f("ix_user_events_project_id_sequence_change_number"),
        "user_events",
        ["project_id", "sequence", "change_number"],
        unique=False,
    )

    sequence_counter = op.create_table(
        "sequence_counter",
        sa.Column("name", sa.String(length=32), nullable=False),
        sa.Column(
            "value",
            sa.BigInteger(),
            server_default="0",
            nullable=False,
            comment="Last allocated sequence number.",
        ),
        sa.PrimaryKeyConstraint("name", name=op.f("pk_sequence_counter")),
        comment="Restart-safe state of the global sequence allocator.",
    )
    op.bulk_insert(sequence_counter, [{"name": "global", "value": 0}])

    # ---- APPEND-ONLY ENFORCEMENT ----
    if dialect == "postgresql":  # pylint: disable=magic-value-comparison
        op.execute(
            """
            CREATE OR REPLACE FUNCTION badges_forbid_mod() RETURNS trigger
            LANGUAGE plpgsql AS $$
            BEGIN
              RAISE EXCEPTION 'badges is append-only; % not allowed', TG_OP
              USING ERRCODE = '0A000'; -- feature_not_supported
            END;
            $$;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_badges_append_only
            BEFORE UPDATE OR DELETE ON badges
            FOR EACH ROW
            EXECUTE FUNCTION badges_forbid_mod();
            """
        )
    else:
        op.execute(
            """
            CREATE TRIGGER tr_badges_no_update
            BEFORE UPDATE ON badges
            BEGIN
              SELECT RAISE(ABORT, 'badges is append-only; UPDATE not allowed');
            END;
            """
        )
        op.execute(
            """
            CREATE TRIGGER tr_badges_no_delete
            BEFORE DELETE ON badges
            BEGIN
              SELECT RAISE(ABORT, 'badges is append-only; DELETE not allowed');
            END;
            """
        )


def downgrade() -> None:
    """Downgrade schema."""
    dialect = op.get_context().dialect.name

    if dialect == "postgresql":  # pylint: disable=magic-value-comparison,R6103
        op.execute("DROP TRIGGER IF EXISTS tr_badges_append_only ON badges;")
        op.execute("DROP FUNCTION IF EXISTS badges_forbid_mod();")
    else:
        op.execute("DROP TRIGGER IF EXISTS tr_badges_no_delete;")
        op.execute("DROP TRIGGER IF EXISTS tr_badges_no_update;")

    op.drop_table("sequence_counter")
    op.drop_index(
        op.f("ix_user_events_project_id_sequence_change_number"),
        table_name="user_events",
    )
    op.drop_table("user_events")
    op.drop_index(
        op.f("ix_badges_project_id_sequence_change_number"), table_name="badges"
    )
    op.drop_table("badges")
    op.drop_table("projects")
