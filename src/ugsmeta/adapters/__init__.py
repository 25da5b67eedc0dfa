"""Adapters (infrastructure) for UGSMETA.

Provide concrete implementations of the ports in `ugsmeta.interfaces`
(project index, sequence allocator, badge and user-event stores, unit of
work), plus persistence mapping and related wiring (engines, metadata,
migrations).

Dependency rule: may import `ugsmeta.domain` and `ugsmeta.interfaces`; the
domain must not import this package.
"""
