"""Bootstrap (composition root) for UGSMETA.

Assembles the application at runtime: builds the engine from configuration,
wires the SQLAlchemy unit of work into the command handlers, and shares one
`ConsistencyGate` between the message bus and the query facade.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `ugsmeta.adapters`, `ugsmeta.service_layer`,
  `ugsmeta.interfaces`, `ugsmeta.domain`, and `ugsmeta.config`.
- Inner layers must not import `ugsmeta.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap

__all__ = ["AppContainer", "bootstrap"]
