"""Message bus implementation for handling commands."""

import logging
from collections.abc import Callable

from ugsmeta.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command
from .consistency_gate import ConsistencyGate

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """Routes commands to their handlers, one at a time.

    Every dispatch runs inside the exclusive section of `gate`, so readers
    holding the gate in shared mode never see a write in progress. This also
    makes sharing one unit of work across dispatches safe.

    Args:
        uow: The unit of work injected into the handlers, exposed here for
            convenience.
        command_handlers: Mapping of command types to single-argument
            callables (dependencies already injected).
        gate: Gate shared with the read side. A private gate is created when
            omitted.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: dict[type[Command], Callable[..., None]],
        gate: ConsistencyGate | None = None,
    ) -> None:
        self.uow = uow
        self.gate = gate or ConsistencyGate()
        self._command_handlers = command_handlers

    def handle(self, cmd: Command) -> None:
        """Handle a command by dispatching it to the appropriate handler.

        Args:
            cmd: The command to handle.

        Raises:
            NoHandlerForCommand: If no handler is found for the command type.
            Exception: If the handler raises an exception.
        """

        if handler := self._command_handlers.get(type(cmd)):
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling command %s with handler %s", cmd, handler_name)
            try:
                with self.gate.exclusive():
                    handler(cmd)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling command %s with handler %s", cmd, handler_name
                )
                raise
        else:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

    @staticmethod
    def _get_handler_name(fn: Callable[..., None]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
