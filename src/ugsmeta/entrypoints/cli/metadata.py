"""UGSMETA metadata CLI: submit badges and user events, query metadata.

Write commands go through the message bus; read commands go through the query
facade. Query results are printed to **stdout** as JSON in the same shape
that polling clients receive, so the output can be piped into other tools.

Requirements
- ``UGSMETA_DB_URL`` must be set and the schema upgraded (``ugsmeta db upgrade``).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click
import click_extra as clickx

from ugsmeta.bootstrap import AppContainer, bootstrap
from ugsmeta.service_layer.commands import SubmitBadge, SubmitUserEvent

from .helpers import success, translate_errors
from .helpers.params import BADGE_RESULT, USER_VOTE

logger = logging.getLogger(__name__)


@contextmanager
def _app() -> Iterator[AppContainer]:
    app = bootstrap()
    try:
        yield app
    finally:
        app.dispose()


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group(cls=clickx.ExtraGroup)
def metadata() -> None:
    """Badge and user-event metadata commands."""


# ============================================================================
#                               Write commands
# ============================================================================


@metadata.command("submit-badge")
@click.argument("project")
@click.argument("change", type=int)
@click.argument("build_type")
@click.argument("result", type=BADGE_RESULT)
@click.argument("url")
@translate_errors
def submit_badge(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    project: str, change: int, build_type: str, result: Any, url: str
) -> None:
    """Record the RESULT of BUILD_TYPE for CHANGE of PROJECT.

    PROJECT is a depot path such as //depot/main/Game/Game.uproject.
    """
    cmd = SubmitBadge(
        project=project, change=change, build_type=build_type, result=result, url=url
    )
    with _app() as app:
        app.message_bus.handle(cmd)
    success(f"Badge {build_type!r} recorded for change {change}")


@metadata.command("submit-event")
@click.argument("project")
@click.argument("change", type=int)
@click.argument("user")
@click.option("--synced", is_flag=True, default=None, help="Mark the change synced now.")
@click.option("--vote", type=USER_VOTE, default=None, help="Vote on the change.")
@click.option(
    "--investigating/--not-investigating",
    default=None,
    help="Set or clear the investigating flag.",
)
@click.option(
    "--starred/--not-starred", default=None, help="Set or clear the starred flag."
)
@click.option("--comment", default=None, help="Replace the user's comment.")
@translate_errors
def submit_event(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    project: str,
    change: int,
    user: str,
    synced: bool | None,
    vote: Any,
    investigating: bool | None,
    starred: bool | None,
    comment: str | None,
) -> None:
    """Merge USER's review state for CHANGE of PROJECT.

    Options that are not given keep their stored value.
    """
    cmd = SubmitUserEvent(
        project=project,
        change=change,
        user=user,
        synced=synced or None,
        vote=vote,
        investigating=investigating,
        starred=starred,
        comment=comment,
    )
    with _app() as app:
        app.message_bus.handle(cmd)
    success(f"User event for {user!r} recorded for change {change}")


# ============================================================================
#                               Read commands
# ============================================================================


@metadata.command("query")
@click.argument("stream")
@click.option("--project", default=None, help="Limit to one project of STREAM.")
@click.option("--min-change", type=int, default=0, show_default=True)
@click.option("--max-change", type=int, default=None)
@click.option(
    "--since",
    "since_sequence",
    type=int,
    default=None,
    help="Only rows written after this sequence number.",
)
@translate_errors
def query(
    stream: str,
    project: str | None,
    min_change: int,
    max_change: int | None,
    since_sequence: int | None,
) -> None:
    """Print aggregated metadata for STREAM (e.g. //depot/main) as JSON."""
    with _app() as app:
        result = app.queries.query_metadata(
            stream,
            project=project,
            min_change=min_change,
            max_change=max_change,
            since_sequence=since_sequence,
        )
    _emit(result.to_wire())


@metadata.command("latest")
@click.argument("project")
@translate_errors
def latest(project: str) -> None:
    """Print the newest badge id of PROJECT as JSON."""
    with _app() as app:
        summary = app.queries.latest(project)
    _emit(summary.to_wire())


@metadata.command("badges")
@click.argument("project")
@click.option(
    "--since",
    "since_sequence",
    type=int,
    default=0,
    show_default=True,
    help="Only badges with an id above this one.",
)
@translate_errors
def badges(project: str, since_sequence: int) -> None:
    """Print the badges of PROJECT as JSON, oldest first."""
    with _app() as app:
        records = app.queries.list_badges(project, since_sequence=since_sequence)
    _emit([record.to_wire() for record in records])
