"""Default marks and shared fixtures for tests under `tests/functional/`."""

from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=unused-argument

FUNCTIONAL_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "functional"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `functional` marks to items in `tests/functional/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if FUNCTIONAL_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.functional)


@pytest.fixture(autouse=True)
def isolated_log_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep the flight recorder's log file inside the test's tmp dir."""
    log_path = tmp_path / "ugsmeta.log"
    monkeypatch.setenv("UGSMETA_LOG_PATH", str(log_path))
    return log_path


@pytest.fixture
def fresh_sqlite_url(tmp_path: Path) -> str:
    """URL of a SQLite file that has not been migrated."""
    return f"sqlite+pysqlite:///{tmp_path / 'ugsmeta.db'}"


def make_runner(db_url: str) -> CliRunner:
    """CliRunner with UGSMETA_DB_URL set (empty string means unset)."""
    return CliRunner(env={"UGSMETA_DB_URL": db_url})
