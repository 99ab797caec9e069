"""
Tests for the command-line scripts.

Runs the typer apps against a temporary database configured
through environment variables.
"""

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

# Scripts are not a package
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import backup as backup_cli
import configure as configure_cli
import log_trade as log_trade_cli
import review as review_cli

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.store import TradeStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def env(tmp_path, monkeypatch):
    """Point every script at a throwaway database."""
    monkeypatch.setenv("TRADE_ANALYZER_DB_PATH", str(tmp_path / "cli.db"))
    monkeypatch.setenv("TRADE_ANALYZER_BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setenv("TRADE_ANALYZER_CURRENCY", "USD")
    monkeypatch.setenv("TRADE_ANALYZER_INITIAL_FUND", "1000")
    return tmp_path


def _stored_trades():
    with TradeStore(Config.from_env()) as store:
        return store.list_all()


class TestLogTrade:
    """Test trade entry commands."""

    def test_add_and_list(self):
        result = runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        assert result.exit_code == 0, result.output
        assert "1,200.00" in result.output

        result = runner.invoke(log_trade_cli.app, ["add", "50", "-t", "loss", "-d", "2024-01-06"])
        assert result.exit_code == 0, result.output
        assert "1,150.00" in result.output

        result = runner.invoke(log_trade_cli.app, ["list"])
        assert result.exit_code == 0
        assert "1,150.00" in result.output

    def test_list_rejects_negative_limit(self):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        result = runner.invoke(log_trade_cli.app, ["list", "--limit", "-1"])
        assert result.exit_code == 2

    def test_add_invalid_amount(self):
        result = runner.invoke(log_trade_cli.app, ["add", "abc"])
        assert result.exit_code == 1
        assert _stored_trades() == []

    def test_edit_and_delete(self):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        trade_id = _stored_trades()[0].id

        result = runner.invoke(log_trade_cli.app, ["edit", trade_id, "--amount", "80", "--type", "loss"])
        assert result.exit_code == 0, result.output
        assert _stored_trades()[0].signed_amount == -80.0

        result = runner.invoke(log_trade_cli.app, ["delete", trade_id])
        assert result.exit_code == 0
        assert _stored_trades() == []

    def test_edit_unknown(self):
        result = runner.invoke(log_trade_cli.app, ["edit", "nope", "--amount", "1"])
        assert result.exit_code == 1

    def test_delete_unknown(self):
        result = runner.invoke(log_trade_cli.app, ["delete", "nope"])
        assert result.exit_code == 0
        assert "not found" in result.output


class TestReview:
    """Test review commands."""

    @pytest.fixture(autouse=True)
    def trades(self, env):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        runner.invoke(log_trade_cli.app, ["add", "50", "-t", "loss", "-d", "2024-01-06"])

    def test_balance(self):
        result = runner.invoke(review_cli.app, ["balance"])
        assert result.exit_code == 0
        assert "$1,150.00" in result.output

    def test_weekly(self):
        result = runner.invoke(review_cli.app, ["weekly"])
        assert result.exit_code == 0
        assert "2024-S1" in result.output

    def test_monthly(self):
        result = runner.invoke(review_cli.app, ["monthly"])
        assert result.exit_code == 0
        assert "2024-01" in result.output

    def test_stats(self):
        result = runner.invoke(review_cli.app, ["stats"])
        assert result.exit_code == 0
        assert "50.0%" in result.output
        assert "4.00" in result.output

    def test_chart(self):
        result = runner.invoke(review_cli.app, ["chart"])
        assert result.exit_code == 0
        assert "1,200.00" in result.output

    def test_chart_rejects_zero_months(self):
        """A month count below one is a usage error, not a crash."""
        result = runner.invoke(review_cli.app, ["chart", "--months", "0"])
        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)

    def test_weekly_limit_keeps_most_recent(self):
        runner.invoke(log_trade_cli.app, ["add", "10", "--date", "2024-03-04"])
        result = runner.invoke(review_cli.app, ["weekly", "--limit", "1"])
        assert result.exit_code == 0
        assert "2024-S10" in result.output
        assert "2024-S1 " not in result.output

    def test_monthly_limit_rejects_negative(self):
        result = runner.invoke(review_cli.app, ["monthly", "--limit", "-1"])
        assert result.exit_code == 2

    def test_export(self, env):
        output = env / "review.txt"
        result = runner.invoke(review_cli.app, ["export", "--output", str(output)])
        assert result.exit_code == 0
        assert "Balance: $1,150.00" in output.read_text(encoding="utf-8")


class TestBackupAndSettings:
    """Test backup and settings commands."""

    def test_export_import(self, env):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])

        result = runner.invoke(backup_cli.app, ["export"])
        assert result.exit_code == 0, result.output
        backups = list((env / "backups").glob("trade_backup_*.json"))
        assert len(backups) == 1

        runner.invoke(log_trade_cli.app, ["add", "5", "--date", "2024-02-01"])
        result = runner.invoke(backup_cli.app, ["import", str(backups[0]), "--yes"])
        assert result.exit_code == 0, result.output
        assert len(_stored_trades()) == 1

    def test_import_malformed(self, env):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        bad = env / "bad.json"
        bad.write_text(json.dumps({"trades": [{"id": "x", "date": "2024-01-01", "type": "profit"}]}))

        result = runner.invoke(backup_cli.app, ["import", str(bad), "--yes"])

        assert result.exit_code == 1
        assert len(_stored_trades()) == 1

    def test_import_cancelled(self, env):
        runner.invoke(log_trade_cli.app, ["add", "200", "--date", "2024-01-05"])
        result = runner.invoke(backup_cli.app, ["import", str(env / "x.json")], input="n\n")
        assert result.exit_code == 0
        assert len(_stored_trades()) == 1

    def test_settings(self):
        result = runner.invoke(configure_cli.app, ["set", "--fund", "2500", "--currency", "eur"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(configure_cli.app, ["show"])
        assert result.exit_code == 0
        assert "€2,500.00" in result.output

    def test_settings_bad_currency(self):
        result = runner.invoke(configure_cli.app, ["set", "--currency", "GBP"])
        assert result.exit_code == 1
