"""
Data models for Trade Analyzer.

Domain values: TradeRecord, Settings.
Database tables: TradeRow, SettingsRow.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tradeanalyzer.core.errors import ValidationError

DEFAULT_INITIAL_FUND = 1000.0
SETTINGS_ROW_ID = 1


class TradeType(str, Enum):
    """Direction of a journal entry. The amount itself is never signed."""
    PROFIT = "profit"
    LOSS = "loss"


class Currency(str, Enum):
    """Display currency of the journal."""
    USD = "USD"
    EUR = "EUR"
    MGA = "MGA"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS[self]


CURRENCY_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.MGA: "Ar",
}


def _check_amount(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value!r}")
    return value


@dataclass(frozen=True)
class TradeRecord:
    """
    A single journal entry.

    The amount is a non-negative magnitude; whether it adds to or
    subtracts from the balance is carried by the type.
    """

    id: str
    date: datetime
    amount: float
    type: TradeType
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError(f"Trade id must be a non-empty string, got {self.id!r}")

        if not isinstance(self.date, datetime):
            raise ValidationError(f"Trade date must be a datetime, got {self.date!r}")
        if self.date.tzinfo is not None:
            raise ValidationError("Trade date must be timezone-naive")

        amount = _check_amount(self.amount, "Trade amount")
        if amount < 0:
            raise ValidationError(f"Trade amount must not be negative, got {amount}")
        object.__setattr__(self, "amount", amount)

        try:
            object.__setattr__(self, "type", TradeType(self.type))
        except ValueError:
            raise ValidationError(f"Unknown trade type: {self.type!r}")

        if self.description is None:
            object.__setattr__(self, "description", "")
        elif not isinstance(self.description, str):
            raise ValidationError("Trade description must be text")

    @property
    def is_profit(self) -> bool:
        return self.type is TradeType.PROFIT

    @property
    def signed_amount(self) -> float:
        """Amount with the sign implied by the type."""
        return self.amount if self.is_profit else -self.amount

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "amount": self.amount,
            "type": self.type.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TradeRecord":
        """Create from dictionary. Missing fields raise ValidationError."""
        missing = [key for key in ("id", "date", "amount", "type") if key not in data]
        if missing:
            raise ValidationError(f"Missing field(s): {', '.join(missing)}")

        raw_date = data["date"]
        if isinstance(raw_date, str):
            try:
                raw_date = datetime.fromisoformat(raw_date)
            except ValueError:
                raise ValidationError(f"Invalid date: {raw_date!r}")

        return cls(
            id=data["id"],
            date=raw_date,
            amount=data["amount"],
            type=data["type"],
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class Settings:
    """Journal-wide settings. Exactly one exists per store."""

    initial_fund: float = DEFAULT_INITIAL_FUND
    currency: Currency = field(default=Currency.USD)

    def __post_init__(self):
        object.__setattr__(self, "initial_fund", _check_amount(self.initial_fund, "Initial fund"))
        try:
            object.__setattr__(self, "currency", Currency(self.currency))
        except ValueError:
            raise ValidationError(f"Unknown currency: {self.currency!r}")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "initial_fund": self.initial_fund,
            "currency": self.currency.value,
        }


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class TradeRow(Base):
    """Stored form of a TradeRecord."""

    __tablename__ = "trades"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[TradeType] = mapped_column(SQLEnum(TradeType), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @classmethod
    def from_record(cls, trade: TradeRecord) -> "TradeRow":
        return cls(
            id=trade.id,
            date=trade.date,
            amount=trade.amount,
            type=trade.type,
            description=trade.description,
        )

    def to_record(self) -> TradeRecord:
        return TradeRecord(
            id=self.id,
            date=self.date,
            amount=self.amount,
            type=self.type,
            description=self.description or "",
        )

    def __repr__(self) -> str:
        return f"<TradeRow {self.id}: {self.type.value} {self.amount} @ {self.date}>"


class SettingsRow(Base):
    """The single settings row (id is always SETTINGS_ROW_ID)."""

    __tablename__ = "settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    initial_fund: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[Currency] = mapped_column(SQLEnum(Currency), nullable=False)

    def to_settings(self) -> Settings:
        return Settings(initial_fund=self.initial_fund, currency=self.currency)

    def __repr__(self) -> str:
        return f"<SettingsRow {self.id}: {self.initial_fund} {self.currency.value}>"
