"""Functional tests for UGSMETA's CLI help and version output."""

from __future__ import annotations

import re
from textwrap import dedent

import pytest
from click.testing import CliRunner

import ugsmeta
from ugsmeta.entrypoints.cli import main

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _normalize(s: str) -> str:
    """Collapse whitespace so the check survives Click's reflowing."""
    return re.sub(r"\s+", " ", s.strip())


class TestNewUgsmetaUser:
    """A new user, unfamiliar with the tool, tries to get help."""

    @staticmethod
    @pytest.mark.parametrize("args", (["-h"], ["--help"]))
    def test_help_output(args: list[str]):
        result = CliRunner().invoke(main.ugsmeta, args)

        assert result.exit_code == 0, result.output
        text = ANSI_RE.sub("", result.output)
        assert _normalize(dedent(main.HELP)) in _normalize(text)
        assert "Usage:" in text
        assert "Options:" in text
        assert re.search(r"^\s+db\b", text, re.MULTILINE)
        assert re.search(r"^\s+metadata\b", text, re.MULTILINE)

    @staticmethod
    def test_metadata_help_lists_commands():
        result = CliRunner().invoke(main.ugsmeta, ["metadata", "--help"])

        assert result.exit_code == 0, result.output
        for name in ("submit-badge", "submit-event", "query", "latest", "badges"):
            assert name in result.output

    @staticmethod
    def test_version_output():
        result = CliRunner().invoke(main.ugsmeta, ["--version"])

        assert result.exit_code == 0
        assert ugsmeta.__version__ in result.output
