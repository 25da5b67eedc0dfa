"""Alembic migration environment and revisions for UGSMETA."""
