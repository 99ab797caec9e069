"""
Configuration management for Trade Analyzer.

Loads settings from environment variables (a .env file is
honoured by the scripts through python-dotenv).
"""

import logging
import os
from dataclasses import dataclass

from tradeanalyzer.core.errors import ValidationError
from tradeanalyzer.core.models import Currency, DEFAULT_INITIAL_FUND

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_path: str = "data/trades.db"

    # Backups and exported reviews
    backup_dir: str = "data/backups"

    # Defaults for the settings row created on first start
    initial_fund: float = DEFAULT_INITIAL_FUND
    currency: Currency = Currency.USD

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        raw_fund = os.getenv("TRADE_ANALYZER_INITIAL_FUND", str(DEFAULT_INITIAL_FUND))
        try:
            initial_fund = float(raw_fund)
        except ValueError:
            raise ValidationError(f"Invalid TRADE_ANALYZER_INITIAL_FUND: {raw_fund!r}")

        raw_currency = os.getenv("TRADE_ANALYZER_CURRENCY", Currency.USD.value).upper()
        try:
            currency = Currency(raw_currency)
        except ValueError:
            raise ValidationError(f"Invalid TRADE_ANALYZER_CURRENCY: {raw_currency!r}")

        config = cls(
            database_path=os.getenv("TRADE_ANALYZER_DB_PATH", "data/trades.db"),
            backup_dir=os.getenv("TRADE_ANALYZER_BACKUP_DIR", "data/backups"),
            initial_fund=initial_fund,
            currency=currency,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

        logger.debug(f"Loaded config: {config}")
        return config

    def get_summary(self) -> str:
        """Get a summary of current configuration."""
        return f"""Database: {self.database_path}
Backups: {self.backup_dir}

Defaults for a new journal:
  Initial fund: {self.currency.symbol}{self.initial_fund:,.2f}
  Currency: {self.currency.value}

Log level: {self.log_level}
"""
