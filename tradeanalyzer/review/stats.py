"""
Trade statistics module.

Pure functions that turn a list of trades into the derived views:
balance, weekly and monthly buckets, performance metrics and the
balance curve. Nothing here is cached; callers rebuild the views
from a fresh store read after every change.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from tradeanalyzer.core.models import Settings, TradeRecord

logger = logging.getLogger(__name__)


@dataclass
class Bucket:
    """Profit/loss summary of one period."""
    profit_total: float = 0.0
    loss_total: float = 0.0
    count: int = 0

    @property
    def net(self) -> float:
        return self.profit_total - self.loss_total

    def add(self, trade: TradeRecord) -> None:
        if trade.is_profit:
            self.profit_total += trade.amount
        else:
            self.loss_total += trade.amount
        self.count += 1

    def __add__(self, other: "Bucket") -> "Bucket":
        return Bucket(
            profit_total=self.profit_total + other.profit_total,
            loss_total=self.loss_total + other.loss_total,
            count=self.count + other.count,
        )


@dataclass
class BalancePoint:
    """One point of the balance curve."""
    index: int
    date: datetime
    balance: float


@dataclass
class PerformanceSummary:
    """Global performance metrics."""
    total_profit: float
    total_loss: float
    win_count: int
    loss_count: int
    win_rate: float
    profit_factor: float

    @property
    def net(self) -> float:
        return self.total_profit - self.total_loss

    @property
    def total_trades(self) -> int:
        return self.win_count + self.loss_count


@dataclass
class JournalView:
    """Everything the shell displays, computed in one pass over a store read."""
    settings: Settings
    trades: List[TradeRecord]
    balance: float
    weekly: Dict[str, Bucket] = field(default_factory=dict)
    monthly: Dict[str, Bucket] = field(default_factory=dict)
    summary: Optional[PerformanceSummary] = None
    balance_series: List[BalancePoint] = field(default_factory=list)


def total_balance(trades: List[TradeRecord], initial_fund: float) -> float:
    """
    Initial fund plus profits minus losses.
    """
    return initial_fund + sum(trade.signed_amount for trade in trades)


def week_key(date: datetime) -> str:
    """
    Week label like "2024-S1".

    Week number is (day_of_year - weekday + 10) // 7 with Monday=1.
    Near new year this gives week 0 or 53 under the calendar year,
    not the ISO week-year.
    """
    day_of_year = date.timetuple().tm_yday
    week_number = (day_of_year - date.isoweekday() + 10) // 7
    return f"{date.year}-S{week_number}"


def month_key(date: datetime) -> str:
    """
    Month label like "2024-01".
    """
    return f"{date.year:04d}-{date.month:02d}"


def group_by(
    trades: List[TradeRecord],
    key_fn: Callable[[datetime], str],
) -> Dict[str, Bucket]:
    """
    Sum trades into buckets keyed by key_fn(trade.date).

    Keys keep the order in which they first appear in trades.
    """
    buckets: Dict[str, Bucket] = {}

    for trade in trades:
        key = key_fn(trade.date)
        if key not in buckets:
            buckets[key] = Bucket()
        buckets[key].add(trade)

    return buckets


def weekly_stats(trades: List[TradeRecord]) -> Dict[str, Bucket]:
    return group_by(trades, week_key)


def monthly_stats(trades: List[TradeRecord]) -> Dict[str, Bucket]:
    return group_by(trades, month_key)


def period_sort_key(key: str) -> Tuple[int, int]:
    """
    Chronological sort key for week ("2024-S9") and month ("2024-01") labels.
    """
    year, _, period = key.partition("-")
    return int(year), int(period.lstrip("S"))


def recent_periods(buckets: Dict[str, Bucket], limit: int = 6) -> Dict[str, Bucket]:
    """
    The last `limit` periods in chronological order.

    Used for the monthly bar chart and the weekly/monthly tables.
    """
    keys = sorted(buckets, key=period_sort_key)[-limit:] if limit > 0 else []
    return {key: buckets[key] for key in keys}


def gross_profit(trades: List[TradeRecord]) -> float:
    return sum(trade.amount for trade in trades if trade.is_profit)


def gross_loss(trades: List[TradeRecord]) -> float:
    return sum(trade.amount for trade in trades if not trade.is_profit)


def win_rate(trades: List[TradeRecord]) -> float:
    """
    Percentage of profitable trades. 0 for an empty list.
    """
    if not trades:
        return 0.0

    wins = sum(1 for trade in trades if trade.is_profit)
    return wins / len(trades) * 100


def profit_factor(trades: List[TradeRecord]) -> float:
    """
    Gross profit divided by gross loss.

    With no losses this returns the gross profit itself. That value
    is a display convention, not a ratio.
    """
    total_profit = gross_profit(trades)
    total_loss = gross_loss(trades)

    if total_loss == 0:
        return total_profit
    return total_profit / total_loss


def running_balance_series(
    trades: List[TradeRecord],
    initial_fund: float,
) -> List[BalancePoint]:
    """
    Balance after each trade, oldest first.

    Trades sharing a date keep their relative input order.
    """
    points = []
    balance = initial_fund

    for index, trade in enumerate(sorted(trades, key=lambda t: t.date)):
        balance += trade.signed_amount
        points.append(BalancePoint(index=index, date=trade.date, balance=balance))

    return points


def summarize(trades: List[TradeRecord]) -> PerformanceSummary:
    """
    Calculate the statistics card metrics.
    """
    win_count = sum(1 for trade in trades if trade.is_profit)

    return PerformanceSummary(
        total_profit=gross_profit(trades),
        total_loss=gross_loss(trades),
        win_count=win_count,
        loss_count=len(trades) - win_count,
        win_rate=win_rate(trades),
        profit_factor=profit_factor(trades),
    )


def build_view(trades: List[TradeRecord], settings: Settings) -> JournalView:
    """
    Compute every derived view from a store read.
    """
    view = JournalView(
        settings=settings,
        trades=list(trades),
        balance=total_balance(trades, settings.initial_fund),
        weekly=weekly_stats(trades),
        monthly=monthly_stats(trades),
        summary=summarize(trades),
        balance_series=running_balance_series(trades, settings.initial_fund),
    )

    logger.debug(
        f"Built view: {len(trades)} trades, {len(view.weekly)} weeks, "
        f"{len(view.monthly)} months"
    )
    return view
