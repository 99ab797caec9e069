"""
Utility functions for Trade Analyzer.
"""

import logging
import time

from tradeanalyzer.core.models import Currency

_last_trade_id_ms = 0


def new_trade_id() -> str:
    """
    Generate a time-based trade id.

    Milliseconds since the epoch, bumped by one when the clock has
    not advanced since the previous call, so ids from one process
    are strictly increasing.

    Returns:
        Decimal string like "1704448800000"
    """
    global _last_trade_id_ms

    now_ms = time.time_ns() // 1_000_000
    if now_ms <= _last_trade_id_ms:
        now_ms = _last_trade_id_ms + 1
    _last_trade_id_ms = now_ms

    return str(now_ms)


def format_money(amount: float, currency: Currency, signed: bool = False) -> str:
    """
    Format an amount with the currency symbol.

    Examples:
        (200, USD)               -> "$200.00"
        (150, EUR, signed=True)  -> "+€150.00"
        (-50, MGA, signed=True)  -> "-Ar50.00"

    Args:
        amount: Value to format
        currency: Journal currency
        signed: Always prefix with + or -

    Returns:
        Formatted string
    """
    symbol = Currency(currency).symbol

    if signed:
        sign = "+" if amount >= 0 else "-"
        return f"{sign}{symbol}{abs(amount):,.2f}"

    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
