"""
Journal review report.

Renders the derived views as plain text for the console or a file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from tradeanalyzer.core.models import Currency, TradeRecord
from tradeanalyzer.core.utils import format_money
from tradeanalyzer.review.stats import Bucket, JournalView, PerformanceSummary

logger = logging.getLogger(__name__)


def format_trade_line(trade: TradeRecord, currency: Currency) -> str:
    """One history line: date, signed amount, description."""
    line = f"{trade.date:%d/%m/%Y}  {format_money(trade.signed_amount, currency, signed=True):>14}"
    if trade.description:
        line += f"  {trade.description}"
    return line


def format_buckets(title: str, buckets: Dict[str, Bucket], currency: Currency) -> List[str]:
    """Weekly or monthly table."""
    lines = [f"{title}:"]

    if not buckets:
        lines.append("  (none)")
        return lines

    for key, bucket in buckets.items():
        lines.append(
            f"  {key:<10} {format_money(bucket.profit_total, currency, signed=True):>12}"
            f" {format_money(-bucket.loss_total, currency, signed=True):>12}"
            f"  net {format_money(bucket.net, currency, signed=True)}"
            f"  ({bucket.count} trade{'s' if bucket.count != 1 else ''})"
        )

    return lines


def format_summary(summary: PerformanceSummary, currency: Currency) -> List[str]:
    """Statistics card."""
    return [
        "Statistics:",
        f"  Total profits: {format_money(summary.total_profit, currency, signed=True)}",
        f"  Total losses:  {format_money(-summary.total_loss, currency, signed=True)}",
        f"  Net:           {format_money(summary.net, currency, signed=True)}",
        f"  Win rate:      {summary.win_rate:.1f}%",
        f"  Profit factor: {summary.profit_factor:.2f}",
        f"  Total trades:  {summary.total_trades}",
    ]


def format_review(view: JournalView, history_limit: Optional[int] = 10) -> str:
    """
    Format the whole journal as plain text.
    """
    currency = view.settings.currency

    lines = [
        "Trade Analyzer - Journal Review",
        "",
        f"Balance: {format_money(view.balance, currency)}",
        f"Initial fund: {format_money(view.settings.initial_fund, currency)}",
        "",
    ]

    if not view.trades:
        lines.append("No trades logged yet.")
        return "\n".join(lines)

    lines.extend(format_summary(view.summary, currency))
    lines.append("")
    lines.extend(format_buckets("Weekly", view.weekly, currency))
    lines.append("")
    lines.extend(format_buckets("Monthly", view.monthly, currency))
    lines.append("")

    history = view.trades if history_limit is None else view.trades[:history_limit]
    lines.append(f"Recent trades ({len(history)} of {len(view.trades)}):")
    lines.extend(f"  {format_trade_line(trade, currency)}" for trade in history)

    return "\n".join(lines)


def export_review(view: JournalView, directory: str, filepath: str = None) -> str:
    """
    Export the review to file.

    Returns file path.
    """
    if not filepath:
        filepath = str(Path(directory) / f"journal_review_{datetime.now():%Y%m%d}.txt")

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    review = format_review(view, history_limit=None)

    with open(filepath, "w", encoding="utf-8") as f:
        f.write(review)

    logger.info(f"Journal review exported to {filepath}")
    return filepath
