"""Alembic environment for the UGSMETA metadata store.

The URL comes from ``alembic -x url=...``, then ``sqlalchemy.url`` in the
config (set by `ugsmeta.config.build_alembic_config`), then UGSMETA_DB_URL.
Online runs go through `make_engine` so SQLite migrations see the same
PRAGMAs (foreign keys, busy timeout) as the running service.
"""

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import pool

# Registers projects/badges/user_events/sequence_counter on `metadata`.
import ugsmeta.adapters.metadata_store.schema  # noqa: F401 # pylint: disable=unused-import
from ugsmeta.adapters.db.engine import is_sqlite, make_engine
from ugsmeta.adapters.db.metadata import metadata
from ugsmeta.config import get_db_url

# pylint: disable=no-member

config = context.config

# Only an .ini file configures logging here; the CLI sets up its own handlers.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def resolve_url() -> str:
    """Return the database URL to migrate.

    Raises:
        DatabaseUrlNotSetError: If no source provides a URL.
    """
    url = context.get_x_argument(as_dictionary=True).get("url")
    if not url:
        url = config.get_main_option("sqlalchemy.url")
    if not url or "%(" in url:  # unexpanded ini placeholder
        url = get_db_url()
    return url


def _context_options(url: str) -> dict[str, Any]:
    return {
        "target_metadata": metadata,
        "compare_type": True,
        "compare_server_default": True,
        # ALTER TABLE on SQLite needs Alembic's copy-and-move batch mode.
        "render_as_batch": is_sqlite(url),
    }


def run_migrations_offline(url: str) -> None:
    """Emit the migration SQL to Alembic's output instead of executing it."""
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    """Apply the migrations over a dedicated, unpooled connection."""
    engine = make_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_context_options(url))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline(resolve_url())
else:
    run_migrations_online(resolve_url())
