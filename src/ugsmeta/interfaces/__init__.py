"""Ports (abstract interfaces) for UGSMETA.

Layering & dependency rules:
- May import from `ugsmeta.domain`.
- Must NOT import from adapters, service_layer, bootstrap or entrypoints.
"""
