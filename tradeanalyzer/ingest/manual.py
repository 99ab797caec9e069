"""
Manual trade logging.

The trade entry form: parses raw user input and records a new
trade. Invalid input raises ValidationError before the store is
touched.
"""

import logging
import math
from datetime import datetime
from typing import Optional, Union

from tradeanalyzer.core.errors import ValidationError
from tradeanalyzer.core.models import TradeRecord, TradeType
from tradeanalyzer.core.store import TradeStore
from tradeanalyzer.core.utils import new_trade_id

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y")


def parse_amount(text: Union[str, float]) -> float:
    """
    Parse a trade amount.

    Accepts "200", "200.50" or "200,50". Must be a finite
    non-negative number.
    """
    if isinstance(text, str):
        cleaned = text.strip().replace(",", ".")
        if not cleaned:
            raise ValidationError("Amount is required")
        try:
            amount = float(cleaned)
        except ValueError:
            raise ValidationError(f"Amount is not a number: {text!r}")
    else:
        try:
            amount = float(text)
        except (TypeError, ValueError):
            raise ValidationError(f"Amount is not a number: {text!r}")

    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f"Amount must be a positive number: {text!r}")

    return amount


def parse_trade_type(text: str) -> TradeType:
    """
    Parse "profit"/"loss" (or "p"/"l", "win"/"perte").
    """
    type_map = {
        "profit": TradeType.PROFIT,
        "p": TradeType.PROFIT,
        "win": TradeType.PROFIT,
        "loss": TradeType.LOSS,
        "l": TradeType.LOSS,
        "perte": TradeType.LOSS,
    }

    normalized_type = type_map.get(text.strip().lower())
    if not normalized_type:
        raise ValidationError(f"Invalid trade type: {text}")

    return normalized_type


def parse_trade_date(text: Optional[str]) -> datetime:
    """
    Parse a trade date. Empty means now.

    Accepts ISO-8601 ("2024-01-05" or "2024-01-05T14:30") and
    "05/01/2024".
    """
    if not text or not text.strip():
        return datetime.now()

    text = text.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
        for fmt in DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        raise ValidationError(f"Invalid date: {text!r}")
    if parsed.tzinfo is not None:
        raise ValidationError("Dates are local; drop the timezone offset")

    return parsed


def log_manual_trade(
    store: TradeStore,
    amount: Union[str, float],
    trade_type: Union[str, TradeType],
    date: Optional[Union[str, datetime]] = None,
    description: str = "",
) -> TradeRecord:
    """
    Validate the form fields and record a new trade.

    Returns the stored trade.
    """
    if not isinstance(trade_type, TradeType):
        trade_type = parse_trade_type(trade_type)
    if not isinstance(date, datetime):
        date = parse_trade_date(date)

    trade = TradeRecord(
        id=new_trade_id(),
        date=date,
        amount=parse_amount(amount),
        type=trade_type,
        description=(description or "").strip(),
    )

    store.insert(trade)
    logger.info(f"Manually logged trade: {trade.id} {trade.type.value} {trade.amount}")

    return trade
