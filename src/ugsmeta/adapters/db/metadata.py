"""The `MetaData` every UGSMETA table is declared on.

Constraint and index names are derived from `NAMING_CONVENTION`, so the
tables built by ``metadata.create_all`` and by the Alembic revision carry the
same names (``uq_badges_sequence``,
``ix_badges_project_id_sequence_change_number``, ...).
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
