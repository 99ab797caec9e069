"""Shared fixtures for the Trade Analyzer test suite."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.models import TradeRecord, TradeType
from tradeanalyzer.core.store import TradeStore


def make_trade(trade_id, date, amount, trade_type="profit", description=""):
    """Build a TradeRecord from short test arguments."""
    if isinstance(date, str):
        date = datetime.fromisoformat(date)
    return TradeRecord(
        id=str(trade_id),
        date=date,
        amount=amount,
        type=TradeType(trade_type),
        description=description,
    )


@pytest.fixture
def config(tmp_path):
    """Config pointing at a throwaway database."""
    return Config(
        database_path=str(tmp_path / "trades.db"),
        backup_dir=str(tmp_path / "backups"),
    )


@pytest.fixture
def store(config):
    """Open store, closed after the test."""
    trade_store = TradeStore(config)
    yield trade_store
    trade_store.close()
