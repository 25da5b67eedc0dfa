"""Functional tests for the ``ugsmeta metadata`` subcommands.

A build system posts badges and a developer records review state through the
CLI; a polling client then reads the JSON back. Everything runs against a
scratch SQLite file upgraded with ``ugsmeta db upgrade --force``.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from ugsmeta.entrypoints.cli import metadata as metadata_cli
from ugsmeta.entrypoints.cli.main import ugsmeta as ugsmeta_cli

from .conftest import make_runner

PROJECT = "//Depot/Main/Game/Game.uproject"
QUALIFIED = "//depot/main/game/game.uproject"
STREAM = "//depot/main"


@pytest.fixture
def runner(fresh_sqlite_url: str) -> CliRunner:
    """Runner pointed at a freshly upgraded SQLite database."""
    runner = make_runner(fresh_sqlite_url)
    result = runner.invoke(ugsmeta_cli, ["db", "upgrade", "--force"])
    assert result.exit_code == 0, result.output
    return runner


def _json(runner: CliRunner, args: list[str]):
    result = runner.invoke(ugsmeta_cli, args)
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_build_system_and_developer_round_trip(runner: CliRunner):
    # A build finishes and the build system posts its badge.
    result = runner.invoke(
        ugsmeta_cli,
        [
            "metadata",
            "submit-badge",
            PROJECT,
            "100",
            "Editor",
            "success",
            "https://ci.example/builds/1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Badge 'Editor' recorded for change 100" in result.output
    assert result.stdout == ""

    # A developer syncs and votes on the same change.
    result = runner.invoke(
        ugsmeta_cli,
        ["metadata", "submit-event", PROJECT, "100", "Alice", "--synced", "--vote", "good"],
    )
    assert result.exit_code == 0, result.output

    # Later they only leave a comment; the vote is kept.
    result = runner.invoke(
        ugsmeta_cli,
        ["metadata", "submit-event", PROJECT, "100", "Alice", "--comment", "looks fine"],
    )
    assert result.exit_code == 0, result.output

    # A client polls the stream from scratch.
    payload = _json(runner, ["metadata", "query", STREAM])
    assert payload["SequenceNumber"] > 0
    [item] = payload["Items"]
    assert item["Change"] == 100
    assert item["Project"] == QUALIFIED
    assert item["Badges"] == [
        {"Name": "Editor", "Url": "https://ci.example/builds/1", "State": 3}
    ]
    [user] = item["Users"]
    assert user["User"] == "Alice"
    assert user["Vote"] == 3
    assert user["Comment"] == "looks fine"
    assert isinstance(user["SyncTime"], int)
    assert user["Investigating"] is None
    assert user["Starred"] is None

    # Polling again with the returned cursor yields nothing new.
    again = _json(
        runner, ["metadata", "query", STREAM, "--since", str(payload["SequenceNumber"])]
    )
    assert again == {"SequenceNumber": 0, "Items": []}

    # The legacy calls agree on the badge id.
    badges = _json(runner, ["metadata", "badges", PROJECT])
    [badge] = badges
    assert badge["ChangeNumber"] == 100
    assert badge["BuildType"] == "Editor"
    assert badge["Result"] == 3
    assert badge["Stream"] == STREAM
    assert badge["Project"] == "game/game.uproject"
    assert badge["AddedAt"].endswith("Z")

    latest = _json(runner, ["metadata", "latest", PROJECT])
    assert latest == {
        "Version": None,
        "LastEventId": 0,
        "LastCommentId": 0,
        "LastBuildId": badge["Id"],
    }
    assert _json(runner, ["metadata", "badges", PROJECT, "--since", str(badge["Id"])]) == []


def test_query_window_and_project_filter(runner: CliRunner):
    for project, change in ((PROJECT, 10), (PROJECT, 20), ("//depot/main/Tool/Tool.uproject", 20)):
        result = runner.invoke(
            ugsmeta_cli,
            ["metadata", "submit-badge", project, str(change), "Editor", "0", "u"],
        )
        assert result.exit_code == 0, result.output

    payload = _json(runner, ["metadata", "query", STREAM, "--min-change", "15"])
    assert [(i["Project"], i["Change"]) for i in payload["Items"]] == [
        (QUALIFIED, 20),
        ("//depot/main/tool/tool.uproject", 20),
    ]

    payload = _json(runner, ["metadata", "query", STREAM, "--project", "tool/tool.uproject"])
    assert [i["Project"] for i in payload["Items"]] == ["//depot/main/tool/tool.uproject"]

    payload = _json(runner, ["metadata", "query", STREAM, "--max-change", "10"])
    assert [i["Change"] for i in payload["Items"]] == [10]


def test_unknown_project_reads_as_empty(runner: CliRunner):
    assert _json(runner, ["metadata", "query", "//other/stream"]) == {
        "SequenceNumber": 0,
        "Items": [],
    }
    assert _json(runner, ["metadata", "badges", PROJECT]) == []
    assert _json(runner, ["metadata", "latest", PROJECT])["LastBuildId"] == 0


@pytest.mark.parametrize(
    "args",
    [
        ["metadata", "submit-badge", "depot/main", "1", "Editor", "success", "u"],
        ["metadata", "latest", "//depot"],
        ["metadata", "badges", "//depot//x"],
    ],
)
def test_invalid_project_path_exits_with_error(runner: CliRunner, args: list[str]):
    result = runner.invoke(ugsmeta_cli, args)

    assert result.exit_code == 1
    assert "Error" in result.output
    assert "Traceback" not in result.output


def test_min_change_above_max_change_matches_nothing(runner: CliRunner):
    result = runner.invoke(
        ugsmeta_cli,
        ["metadata", "submit-badge", PROJECT, "3", "Editor", "success", "u"],
    )
    assert result.exit_code == 0, result.output

    payload = _json(
        runner, ["metadata", "query", STREAM, "--min-change", "5", "--max-change", "1"]
    )

    assert payload == {"SequenceNumber": 0, "Items": []}


def test_bad_badge_result_is_a_usage_error(runner: CliRunner):
    result = runner.invoke(
        ugsmeta_cli,
        ["metadata", "submit-badge", PROJECT, "1", "Editor", "sideways", "u"],
    )

    assert result.exit_code == 2
    assert "BadgeResult" in result.output


def test_metadata_without_url():
    result = make_runner("").invoke(ugsmeta_cli, ["metadata", "query", STREAM])

    assert result.exit_code == 1
    assert "UGSMETA_DB_URL" in result.output


@pytest.fixture
def booted_apps(monkeypatch) -> list:
    """Record every application the metadata commands bootstrap."""
    apps = []
    real_bootstrap = metadata_cli.bootstrap

    def recording_bootstrap(url=None):
        app = real_bootstrap(url)
        apps.append((app, app.engine.pool))
        return app

    monkeypatch.setattr(metadata_cli, "bootstrap", recording_bootstrap)
    return apps


@pytest.mark.parametrize(
    "args, exit_code",
    [
        (["metadata", "submit-badge", PROJECT, "1", "Editor", "success", "u"], 0),
        (["metadata", "submit-event", PROJECT, "1", "alice", "--starred"], 0),
        (["metadata", "query", STREAM], 0),
        (["metadata", "latest", PROJECT], 0),
        (["metadata", "badges", PROJECT], 0),
        (["metadata", "badges", "//depot"], 1),
    ],
    ids=["submit-badge", "submit-event", "query", "latest", "badges", "error"],
)
def test_each_command_disposes_its_engine(
    runner: CliRunner, booted_apps: list, args: list[str], exit_code: int
):
    result = runner.invoke(ugsmeta_cli, args)

    assert result.exit_code == exit_code, result.output
    [(app, pool_at_start)] = booted_apps
    # Engine.dispose() swaps in a fresh pool.
    assert app.engine.pool is not pool_at_start
