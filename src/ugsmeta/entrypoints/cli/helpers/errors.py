"""Translation of application errors into Click errors.

User input problems (`DomainError` such as bad project paths or invalid
submissions) and storage failures (`StorageError`) become
`click.ClickException` so the CLI prints one readable line and exits with
status 1 instead of a traceback. Anything else propagates.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import click

from ugsmeta.config import DatabaseUrlNotSetError
from ugsmeta.domain.errors import DomainError
from ugsmeta.interfaces.storage import StorageError

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def translate_errors(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorate a Click command so known errors surface as ClickException."""

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return fn(*args, **kwargs)
        except DatabaseUrlNotSetError as e:
            raise click.ClickException(
                "UGSMETA_DB_URL is not set. Point it at the metadata database."
            ) from e
        except DomainError as e:
            raise click.ClickException(str(e)) from e
        except StorageError as e:
            logger.debug("Storage failure", exc_info=True)
            raise click.ClickException(f"Storage error: {e}") from e

    return wrapper
