"""Bootstrap the message bus and query facade around one engine."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ugsmeta import config
from ugsmeta.adapters.db.engine import make_engine
from ugsmeta.adapters.unit_of_work import SqlAlchemyUnitOfWork
from ugsmeta.service_layer.consistency_gate import ConsistencyGate
from ugsmeta.service_layer.handlers import COMMAND_HANDLERS
from ugsmeta.service_layer.messagebus import MessageBus
from ugsmeta.service_layer.queries import MetadataQueries

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork
    from ugsmeta.service_layer.commands import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Everything an entrypoint needs: the write side, the read side, the gate
    they share and the engine behind them.

    Call `dispose()` when done to close the engine's pooled connections.
    """

    message_bus: MessageBus
    queries: MetadataQueries
    gate: ConsistencyGate
    engine: Engine

    def dispose(self) -> None:
        self.engine.dispose()


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: dict[type[Command], Callable[..., None]],
    gate: ConsistencyGate | None = None,
    extra_dependencies: Mapping[str, object] | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    `extra_dependencies` lets callers supply e.g. a fixed ``clock`` to the
    handlers that ask for one.
    """
    dependencies = {"uow": uow, **(extra_dependencies or {})}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(uow, command_handlers=injected_command_handlers, gate=gate)


def build_app(engine: Engine) -> AppContainer:
    """Wire an `AppContainer` around an existing engine."""
    gate = ConsistencyGate()
    message_bus = build_message_bus(
        SqlAlchemyUnitOfWork(engine), COMMAND_HANDLERS, gate=gate
    )
    queries = MetadataQueries(lambda: SqlAlchemyUnitOfWork(engine), gate)
    return AppContainer(
        message_bus=message_bus, queries=queries, gate=gate, engine=engine
    )


def bootstrap(url: str | None = None) -> AppContainer:
    """Build the application for `url` (default: ``UGSMETA_DB_URL``).

    Raises:
        DatabaseUrlNotSetError: If no URL is given and none is configured.
    """
    engine = make_engine(url or config.get_db_url())
    logger.debug("Bootstrapped against %s", engine.url.render_as_string())
    return build_app(engine)


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
