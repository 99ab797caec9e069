"""
Unit tests for configuration loading.
"""

import pytest

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.errors import ValidationError
from tradeanalyzer.core.models import Currency


class TestConfigFromEnv:
    """Test environment-based configuration."""

    def test_defaults(self, monkeypatch):
        for name in (
            "TRADE_ANALYZER_DB_PATH",
            "TRADE_ANALYZER_BACKUP_DIR",
            "TRADE_ANALYZER_INITIAL_FUND",
            "TRADE_ANALYZER_CURRENCY",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config.from_env()

        assert config.database_path == "data/trades.db"
        assert config.backup_dir == "data/backups"
        assert config.initial_fund == 1000.0
        assert config.currency is Currency.USD
        assert config.log_level == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("TRADE_ANALYZER_DB_PATH", "/tmp/x.db")
        monkeypatch.setenv("TRADE_ANALYZER_INITIAL_FUND", "250.5")
        monkeypatch.setenv("TRADE_ANALYZER_CURRENCY", "mga")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.database_path == "/tmp/x.db"
        assert config.initial_fund == 250.5
        assert config.currency is Currency.MGA
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "name, value",
        [("TRADE_ANALYZER_INITIAL_FUND", "lots"), ("TRADE_ANALYZER_CURRENCY", "GBP")],
    )
    def test_invalid(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Config.from_env()

    def test_summary_mentions_defaults(self):
        summary = Config(initial_fund=500.0, currency=Currency.EUR).get_summary()
        assert "€500.00" in summary
        assert "EUR" in summary
