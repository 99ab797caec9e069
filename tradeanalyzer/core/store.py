"""
Trade store.

The single source of truth for journal entries and the settings
row. Every mutation is committed before the method returns; views
are rebuilt by reading everything back (see load_state).
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, literal_column, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from tradeanalyzer.backup.codec import Snapshot
from tradeanalyzer.core.config import Config
from tradeanalyzer.core.db import get_engine, init_db, session_scope
from tradeanalyzer.core.errors import (
    CorruptStateError,
    NotFoundError,
    StorageError,
)
from tradeanalyzer.core.models import (
    Currency,
    Settings,
    SettingsRow,
    TradeRecord,
    TradeRow,
    SETTINGS_ROW_ID,
)

logger = logging.getLogger(__name__)


class TradeStore:
    """
    Durable storage for trades and settings.

    Usage:
        with TradeStore(config) as store:
            store.insert(trade)
            trades, settings = store.load_state()
    """

    def __init__(self, config: Config):
        self.config = config
        try:
            self._engine = get_engine(config)
            init_db(self._engine, config)
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot open database {config.database_path}: {e}") from e

        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._closed = False

        logger.info(f"Opened trade store at {config.database_path}")

    def __enter__(self) -> "TradeStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _session(self):
        if self._closed:
            raise StorageError("Trade store is closed")
        return session_scope(self._session_factory)

    # Trades

    def insert(self, trade: TradeRecord) -> None:
        """Add a new trade. Fails if the id is already taken."""
        try:
            with self._session() as session:
                if session.get(TradeRow, trade.id) is not None:
                    raise StorageError(f"Trade id already exists: {trade.id}")
                session.add(TradeRow.from_record(trade))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to insert trade {trade.id}: {e}") from e

        logger.info(f"Inserted trade {trade.id}: {trade.type.value} {trade.amount}")

    def list_all(self) -> List[TradeRecord]:
        """
        Get all trades, most recent first.

        Trades sharing a date keep their insertion order.
        """
        try:
            with self._session() as session:
                rows = session.scalars(
                    select(TradeRow).order_by(
                        TradeRow.date.desc(),
                        literal_column("trades.rowid"),
                    )
                ).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list trades: {e}") from e

    def get(self, trade_id: str) -> Optional[TradeRecord]:
        """Get one trade by id, or None."""
        try:
            with self._session() as session:
                row = session.get(TradeRow, trade_id)
                return row.to_record() if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read trade {trade_id}: {e}") from e

    def delete(self, trade_id: str) -> bool:
        """
        Remove a trade.

        Returns False (and changes nothing) if the id is unknown.
        """
        try:
            with self._session() as session:
                row = session.get(TradeRow, trade_id)
                if row is None:
                    logger.debug(f"Delete ignored, no trade {trade_id}")
                    return False
                session.delete(row)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete trade {trade_id}: {e}") from e

        logger.info(f"Deleted trade {trade_id}")
        return True

    def update(self, trade: TradeRecord, strict: bool = False) -> bool:
        """
        Replace the stored trade with the same id.

        An unknown id is a no-op returning False, or raises
        NotFoundError when strict is set.
        """
        try:
            with self._session() as session:
                row = session.get(TradeRow, trade.id)
                if row is None:
                    if strict:
                        raise NotFoundError(f"No trade with id {trade.id}")
                    logger.debug(f"Update ignored, no trade {trade.id}")
                    return False

                row.date = trade.date
                row.amount = trade.amount
                row.type = trade.type
                row.description = trade.description
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update trade {trade.id}: {e}") from e

        logger.info(f"Updated trade {trade.id}")
        return True

    # Settings

    def get_settings(self) -> Settings:
        """Get the settings row. Raises CorruptStateError if it is gone."""
        try:
            with self._session() as session:
                row = session.get(SettingsRow, SETTINGS_ROW_ID)
                if row is None:
                    raise CorruptStateError("Settings row is missing")
                return row.to_settings()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read settings: {e}") from e

    def update_settings(self, initial_fund: float, currency: Currency) -> Settings:
        """Overwrite both settings fields."""
        settings = Settings(initial_fund=initial_fund, currency=currency)

        try:
            with self._session() as session:
                row = session.get(SettingsRow, SETTINGS_ROW_ID)
                if row is None:
                    raise CorruptStateError("Settings row is missing")
                row.initial_fund = settings.initial_fund
                row.currency = settings.currency
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update settings: {e}") from e

        logger.info(f"Updated settings: {settings.initial_fund} {settings.currency.value}")
        return settings

    def reset_settings(self) -> Settings:
        """Recreate the settings row from the configured defaults."""
        settings = Settings(
            initial_fund=self.config.initial_fund,
            currency=self.config.currency,
        )

        try:
            with self._session() as session:
                row = session.get(SettingsRow, SETTINGS_ROW_ID)
                if row is None:
                    row = SettingsRow(id=SETTINGS_ROW_ID)
                    session.add(row)
                row.initial_fund = settings.initial_fund
                row.currency = settings.currency
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to reset settings: {e}") from e

        logger.warning("Settings reset to defaults")
        return settings

    def load_state(self) -> Tuple[List[TradeRecord], Settings]:
        """
        Read everything needed to rebuild the views.

        Call after every mutation. A missing settings row is
        recreated with defaults instead of failing.
        """
        trades = self.list_all()

        try:
            settings = self.get_settings()
        except CorruptStateError:
            logger.warning("Settings row missing, reinitializing with defaults")
            settings = self.reset_settings()

        return trades, settings

    # Backup

    def export_snapshot(self) -> Snapshot:
        """Copy of all trades and settings, stamped with the export time."""
        trades, settings = self.load_state()
        return Snapshot(trades=trades, settings=settings, exported_at=datetime.now())

    def import_snapshot(self, snapshot: Snapshot) -> None:
        """
        Replace every trade with the snapshot's trades.

        Runs in one transaction: on any failure nothing is deleted.
        Settings are overwritten only if the snapshot carries them.
        """
        try:
            with self._session() as session:
                session.execute(delete(TradeRow))
                session.add_all(TradeRow.from_record(trade) for trade in snapshot.trades)
                session.flush()

                if snapshot.settings is not None:
                    row = session.get(SettingsRow, SETTINGS_ROW_ID)
                    if row is None:
                        row = SettingsRow(id=SETTINGS_ROW_ID)
                        session.add(row)
                    row.initial_fund = snapshot.settings.initial_fund
                    row.currency = snapshot.settings.currency
        except SQLAlchemyError as e:
            raise StorageError(f"Import failed, store unchanged: {e}") from e

        logger.info(f"Imported {len(snapshot.trades)} trades")

    def close(self) -> None:
        """Release the database. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._engine.dispose()
        logger.info("Closed trade store")
