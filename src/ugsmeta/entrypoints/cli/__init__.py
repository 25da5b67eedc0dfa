"""The ``ugsmeta`` command-line interface."""
