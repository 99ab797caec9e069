"""
Database session management.

Provides explicit ORM session handling with SQLAlchemy.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from tradeanalyzer.core.config import Config
from tradeanalyzer.core.models import Base, SettingsRow, SETTINGS_ROW_ID

logger = logging.getLogger(__name__)


def get_engine(config: Config) -> Engine:
    """
    Create SQLAlchemy engine.

    Uses SQLite with WAL mode so committed writes survive a crash.
    """
    db_path = Path(config.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(f"sqlite:///{db_path}")

    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    return engine


def init_db(engine: Engine, config: Config) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist and inserts the
    settings row with the configured defaults on first start.
    """
    Base.metadata.create_all(engine)

    with session_scope(sessionmaker(bind=engine)) as session:
        if session.get(SettingsRow, SETTINGS_ROW_ID) is None:
            session.add(
                SettingsRow(
                    id=SETTINGS_ROW_ID,
                    initial_fund=config.initial_fund,
                    currency=config.currency,
                )
            )
            logger.info(
                f"Created settings row: {config.initial_fund} {config.currency.value}"
            )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Provide transactional scope around a series of operations.

    Usage:
        with session_scope(factory) as session:
            session.add(row)
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
