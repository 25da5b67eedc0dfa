"""Unit tests for the ``-L/--logger-level`` callback."""

import logging

import click
import pytest

from ugsmeta.entrypoints.cli.helpers.log_level_parser import (
    DEFAULT_LIB_LEVELS,
    parse_log_level,
)


def parse(value):
    # The callback ignores ctx and param.
    return parse_log_level(None, None, value)  # type: ignore[arg-type]


def test_no_items_returns_library_defaults():
    assert parse(()) == DEFAULT_LIB_LEVELS
    assert parse(()) is not DEFAULT_LIB_LEVELS


def test_later_items_win():
    out = parse(("sqlalchemy=INFO", "ugsmeta=DEBUG", "sqlalchemy=ERROR"))
    assert out == {
        "sqlalchemy": logging.ERROR,
        "alembic": logging.WARNING,
        "ugsmeta": logging.DEBUG,
    }


@pytest.mark.parametrize(
    "value",
    [
        "ugsmeta.service_layer=debug, alembic=ERROR",
        "ugsmeta.service_layer=Debug  alembic=error",
        ("ugsmeta.service_layer=DEBUG,alembic=ERROR",),
    ],
)
def test_env_style_lists_and_case(value):
    out = parse(value)
    assert out["ugsmeta.service_layer"] == logging.DEBUG
    assert out["alembic"] == logging.ERROR


@pytest.mark.parametrize("item", ["sqlalchemy", "=INFO", "sqlalchemy=LOUD"])
def test_malformed_items_are_rejected(item):
    with pytest.raises(click.BadParameter):
        parse((item,))
