"""Tests for the command-line interface."""

from datetime import date, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from toggl_asana_sync import __version__, cli
from toggl_asana_sync.exceptions import RemoteFetchError
from toggl_asana_sync.sync import SyncResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Provide credentials and keep logging configuration out of the test run."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("TOGGL_API_TOKEN", "toggl_token")
    monkeypatch.setenv("TOGGL_WORKSPACE_ID", "777")
    monkeypatch.setenv("ASANA_TOKEN", "asana_token")
    monkeypatch.delenv("SYNC_LEDGER_PATH", raising=False)
    monkeypatch.delenv("SYNC_LOG_DIR", raising=False)
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def mock_engine(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the sync engine with a mock returning an empty result."""
    engine = MagicMock()
    engine.sync.return_value = SyncResult()
    engine_cls = MagicMock(return_value=engine)
    monkeypatch.setattr(cli, "SyncEngine", engine_cls)
    return engine


class TestCli:
    """Test the sync command."""

    def test_version(self) -> None:
        """Test --version output."""
        result = runner.invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_configuration(self, monkeypatch: pytest.MonkeyPatch, mock_engine: MagicMock) -> None:
        """Test that missing credentials fail before syncing."""
        monkeypatch.delenv("ASANA_TOKEN")

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 2
        assert "ASANA_TOKEN" in result.output
        mock_engine.sync.assert_not_called()

    def test_invalid_date(self, mock_engine: MagicMock) -> None:
        """Test that a malformed date is rejected."""
        result = runner.invoke(cli.app, ["--from-date", "02/01/2026"])

        assert result.exit_code == 2
        mock_engine.sync.assert_not_called()

    def test_reversed_range(self, mock_engine: MagicMock) -> None:
        """Test that a start date after the end date is rejected."""
        result = runner.invoke(cli.app, ["--from-date", "2026-02-03", "--to-date", "2026-02-01"])

        assert result.exit_code == 2

    def test_default_window_is_yesterday_to_today(self, mock_engine: MagicMock) -> None:
        """Test the default date range."""
        result = runner.invoke(cli.app, [])

        assert result.exit_code == 0
        kwargs = mock_engine.sync.call_args.kwargs
        assert kwargs["end_date"] == date.today()
        assert kwargs["start_date"] == date.today() - timedelta(days=1)
        assert kwargs["all_users"] is False
        assert kwargs["dry_run"] is False

    def test_explicit_options(self, mock_engine: MagicMock) -> None:
        """Test passing dates and modes through to the engine."""
        result = runner.invoke(
            cli.app,
            ["--from-date", "2026-02-01", "--to-date", "2026-02-07", "--all-users", "--dry-run"],
        )

        assert result.exit_code == 0
        assert "Sync Results" in result.output
        mock_engine.sync.assert_called_once_with(
            start_date=date(2026, 2, 1),
            end_date=date(2026, 2, 7),
            all_users=True,
            dry_run=True,
        )

    def test_task_failures_exit_non_zero(self, mock_engine: MagicMock) -> None:
        """Test that a run with failed tasks exits with 1 and lists errors."""
        failed = SyncResult()
        failed.add_failure("task_1", "boom")
        mock_engine.sync.return_value = failed

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 1
        assert "Task task_1: boom" in result.output

    def test_fetch_error_exits_non_zero(self, mock_engine: MagicMock) -> None:
        """Test that a failed entry listing aborts the run."""
        mock_engine.sync.side_effect = RemoteFetchError("Toggl", 503, "unavailable")

        result = runner.invoke(cli.app, [])

        assert result.exit_code == 1
        assert "Toggl API error: 503" in result.output
