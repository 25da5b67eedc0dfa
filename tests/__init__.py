"""UGSMETA test suite.

Folder taxonomy
- unit/         : Fast checks of one module/class/function, no real database.
- contract/     : Port behaviour shared by the in-memory and SQLAlchemy adapters.
- integration/  : Migrations, unit of work and bootstrap against real databases.
- functional/   : The ``ugsmeta`` CLI driven through Click's test runner.
- fixtures/     : Engine and container fixtures loaded as pytest plugins.
- helpers/      : Shared utilities (no tests here).

Markers are applied per folder by the conftest files; ``slow`` marks tests
that need a PostgreSQL container.
"""
