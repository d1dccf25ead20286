"""Tests for the voxtask CLI."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from voxtask.cli.app import app
from voxtask.errors import ConfigError
from voxtask.sync.reconciler import SyncFailure, SyncResult

runner = CliRunner()


class TestSyncCommand:
    def test_prints_result(self):
        result = SyncResult(
            agent_id="agent1",
            new_conversations=["c1"],
            skipped=["c2"],
            failed=[SyncFailure("c3", "returned 500")],
        )
        with patch("voxtask.cli.app._sync", new=AsyncMock(return_value=result)):
            outcome = runner.invoke(app, ["sync", "agent1"])

        assert outcome.exit_code == 0
        assert "Synced 1 new conversations" in outcome.output
        assert "c3" in outcome.output

    def test_fatal_error_exits_non_zero(self):
        with patch(
            "voxtask.cli.app._sync",
            new=AsyncMock(side_effect=ConfigError("ElevenLabs API key not configured")),
        ):
            outcome = runner.invoke(app, ["sync", "agent1"])

        assert outcome.exit_code == 1

    def test_missing_key_fails_before_touching_database(self, tmp_path, monkeypatch):
        monkeypatch.delenv("ELEVENLABS_API_KEY", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        db_path = tmp_path / "cli.db"

        outcome = runner.invoke(app, ["sync", "agent1", "--db", str(db_path)])

        assert outcome.exit_code == 1
        assert not db_path.exists()
