"""Entry points for UGSMETA (command-line interface).

Entry points talk to the application only through `ugsmeta.bootstrap`, apart
from the `db` commands, which drive Alembic and the engine factory directly.
"""
